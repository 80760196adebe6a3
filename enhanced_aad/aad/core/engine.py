# aad/core/engine.py
from __future__ import annotations
import heapq
import logging
from typing import Dict, Iterable, List
import numpy as np

from .node import Node, OperatorKind

logger = logging.getLogger(__name__)

_ONE = np.float64(1.0)
_ZERO = np.float64(0.0)


def gradient(root: Node) -> Dict[Node, np.float64]:
    """
    Run a single reverse pass from `root`.

    Returns
    -------
    dict {Node: dRoot/dNode} for every node reachable from `root`, including
    root itself with derivative 1.

    Notes
    -----
    Nodes are processed in strictly descending id order. Every node that can
    still add to D[x] has an id larger than x, so D[x] is complete when x is
    popped and can be pushed down to x's operands. Processing in any other
    order under-counts nodes that are operands of several downstream nodes.

    The frontier is a heap on -id plus a membership set, so a node reached
    along several paths is queued once and popped once.
    """
    derivatives: Dict[Node, np.float64] = {root: _ONE}
    frontier = [(-root.id, root)]
    queued = {root}
    n_visited = 0

    # nan/inf are valid values here; keep numpy quiet about them
    with np.errstate(all="ignore"):
        while frontier:
            _, node = heapq.heappop(frontier)
            n_visited += 1
            if node.is_leaf:
                continue
            _propagate(derivatives, node)
            for operand in node.operands:
                if operand not in queued:
                    queued.add(operand)
                    heapq.heappush(frontier, (-operand.id, operand))

    logger.debug("reverse sweep from node %d visited %d nodes", root.id, n_visited)
    return derivatives


def _accumulate(derivatives: Dict[Node, np.float64], node: Node, contribution) -> None:
    derivatives[node] = derivatives.get(node, _ZERO) + contribution


def _propagate(derivatives: Dict[Node, np.float64], node: Node) -> None:
    """
    Push D(node) to its operands with the local partial of `node.operator`:
        D(operand) += D(node) * d(node)/d(operand)
    """
    op = node.operator
    d = derivatives[node]
    args = node.operands

    # ---------- Linear ops ----------
    if op is OperatorKind.ADD:
        _accumulate(derivatives, args[0], d)
        _accumulate(derivatives, args[1], d)

    elif op is OperatorKind.SUB:
        _accumulate(derivatives, args[0], d)
        _accumulate(derivatives, args[1], -d)

    # ---------- Products ----------
    elif op is OperatorKind.MULT:
        a, b = args
        _accumulate(derivatives, a, d * b.value)
        _accumulate(derivatives, b, d * a.value)

    elif op is OperatorKind.ADDPRODUCT:
        # z = base + x*y
        base, x, y = args
        _accumulate(derivatives, base, d)
        _accumulate(derivatives, x, d * y.value)
        _accumulate(derivatives, y, d * x.value)

    # ---------- Division ----------
    elif op is OperatorKind.DIV:
        # z = a / b ; dz/da = 1/b ; dz/db = -a/b^2
        a, b = args
        _accumulate(derivatives, a, d / b.value)
        _accumulate(derivatives, b, -d * a.value / (b.value * b.value))

    # ---------- Unary ----------
    elif op is OperatorKind.SQUARED:
        a = args[0]
        _accumulate(derivatives, a, d * 2.0 * a.value)

    elif op is OperatorKind.SQRT:
        a = args[0]
        _accumulate(derivatives, a, d / (2.0 * np.sqrt(a.value)))

    elif op is OperatorKind.EXP:
        # dz/da = exp(a) = z
        _accumulate(derivatives, args[0], d * node.value)

    else:
        raise ValueError(f"no adjoint rule for operator {op!r}")


def derivative_with_respect_to(root: Node, x: Node) -> float:
    """dRoot/dx; 0.0 when x is not reachable from root."""
    return float(gradient(root).get(x, _ZERO))


def derivatives_with_respect_to(root: Node, xs: Iterable[Node]) -> List[float]:
    """Several partials of `root` from one reverse sweep, in the order of `xs`."""
    grads = gradient(root)
    return [float(grads.get(x, _ZERO)) for x in xs]
