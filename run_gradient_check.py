"""
Adjoint vs Bumping vs closed form.

Two functions are differentiated:
1. f(a, b) = exp(a^2 + a*b^2), built as a.squared().add_product(b.squared(), a).exp()
       df/da = (2a + b^2) f        df/db = 2ab f
2. g(x) = x + x + ... + x  (n terms, starting from 0)
       dg/dx = n
"""

import argparse
import math
import sys
from dataclasses import replace

from enhanced_aad.aad import AADConfig, Graph, leaf, setup_logger, use_graph
from enhanced_aad.aad.core.graph_utils import print_graph_summary
from enhanced_aad.methods import AdjointMethod, BumpingMethod, compare_results


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Adjoint vs Bumping gradient check',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--a', type=float, default=2.0,
                       help='first input of f(a, b)')
    parser.add_argument('--b', type=float, default=3.0,
                       help='second input of f(a, b)')
    parser.add_argument('--n', type=int, default=100,
                       help='number of terms in the repeated sum')
    parser.add_argument('--bump', type=float, default=None,
                       help='finite-difference epsilon (default: from config)')
    parser.add_argument('--rtol', type=float, default=1e-12,
                       help='relative tolerance for adjoint vs closed form')
    parser.add_argument('--strict', action='store_true',
                       help='reject sqrt(<0) and division by zero')
    parser.add_argument('--log-level', type=str, default=None,
                       help='logging level (default: from config)')
    parser.add_argument('--detailed', action='store_true',
                       help='print every node of the graph summary')
    return parser.parse_args(argv)


def exp_square(x):
    """f(a, b) = exp(a^2 + a*b^2)"""
    a, b = x['a'], x['b']
    return a.squared().add_product(b.squared(), a).exp()


def closed_form(a, b):
    f = math.exp(a * a + a * b * b)
    return [(2 * a + b * b) * f, 2 * a * b * f]


def repeated_sum(n, config):
    """Build g = 0 + x + ... + x and return (g, x) on a fresh graph."""
    with use_graph(Graph(config=config)):
        x = leaf(1.0)
        result = leaf(0.0)
        for _ in range(n):
            result = result.add(x)
    return result, x


def main(argv=None):
    args = parse_args(argv)

    config = AADConfig.from_env()
    if args.strict:
        config = replace(config, strict_domain=True)
    setup_logger(args.log_level or config.log_level)

    inputs = {'a': args.a, 'b': args.b}

    print("=" * 70)
    print("f(a, b) = exp(a^2 + a*b^2)")
    print("=" * 70)

    adjoint = AdjointMethod(config=config).compute_gradient(exp_square, inputs)
    bumping = BumpingMethod(eps=args.bump, config=config).compute_gradient(exp_square, inputs)
    exact = closed_form(args.a, args.b)

    print(f"{'':10s} {'df/da':>22s} {'df/db':>22s} {'evals':>6s} {'time[ms]':>9s}")
    for res in (adjoint, bumping):
        g = res['gradient']
        print(f"{res['method']:10s} {g[0]:22.12g} {g[1]:22.12g} "
              f"{res['n_evaluations']:6d} {res['time_ms']:9.3f}")
    print(f"{'Exact':10s} {exact[0]:22.12g} {exact[1]:22.12g}")

    cmp = compare_results(adjoint, bumping, rtol=1e-4, atol=1e-6)
    print(f"\nAdjoint vs Bumping: max rel diff = {cmp['max_rel_diff']:.3e} "
          f"({'OK' if cmp['match'] else 'MISMATCH'})")

    exact_ref = {'gradient': exact, 'method': 'Exact'}
    cmp_exact = compare_results(exact_ref, adjoint, rtol=args.rtol, atol=0.0)
    print(f"Adjoint vs Exact:   max rel diff = {cmp_exact['max_rel_diff']:.3e} "
          f"({'OK' if cmp_exact['match'] else 'MISMATCH'})")

    print()
    print("=" * 70)
    print(f"g(x) = x + ... + x  ({args.n} terms)")
    print("=" * 70)
    g, x = repeated_sum(args.n, config)
    dg_dx = g.derivative_with_respect_to(x)
    print(f"dg/dx = {dg_dx}  expected = {float(args.n)}")
    print_graph_summary(g, detailed=args.detailed)

    ok = cmp_exact['match'] and dg_dx == float(args.n)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
