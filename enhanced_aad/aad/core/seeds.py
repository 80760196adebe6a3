# aad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let derivatives flow
# backwards through the graph.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

from .node import Node
from .graph import current_graph, leaf, use_graph
from .engine import derivatives_with_respect_to


def value(x: Any) -> Any:
    """Return the numeric value of a Node; pass through plain numbers unchanged."""
    return x.as_floating_point() if isinstance(x, Node) else x


def _ensure_node(y: Any) -> Node:
    """Wrap a plain function result as a constant leaf (all partials then 0)."""
    return y if isinstance(y, Node) else current_graph().leaf(y)


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[Node], Node], x0: float) -> float:
    """
    Derivative of a scalar function y=f(x) at x0 (single input).
    Runs one reverse pass within a fresh, isolated graph.
    """
    with use_graph():
        x = leaf(x0)
        y = _ensure_node(f(x))
        return derivatives_with_respect_to(y, [x])[0]


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Dict[str, Node]], Node],
          inputs: Dict[str, float]) -> Dict[str, float]:
    """
    Gradient of a scalar function y=f(vars) w.r.t. ALL inputs (dict form).
    Performs ONE reverse pass to obtain all dy/dvar simultaneously.

    Parameters
    ----------
    f       : function taking a dict {name: Node} and returning a Node
    inputs  : dict {name: numeric}

    Returns
    -------
    dict {name: float}  # partials in the same key order as `inputs`
    """
    with use_graph():
        nodes: Dict[str, Node] = {k: leaf(v) for k, v in inputs.items()}
        y = _ensure_node(f(nodes))
        partials = derivatives_with_respect_to(y, nodes.values())
        return dict(zip(nodes.keys(), partials))


def grads_list(f: Callable[[List[Node]], Node],
               x0_list: Iterable[float]) -> List[float]:
    """
    Same as grads(), but the inputs are provided as a list and the result is a list
    of partials in the same order.

    Example
    -------
    f = lambda xs: xs[0].squared() + 3.0 * xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    with use_graph():
        xs: List[Node] = [leaf(v) for v in x0_list]
        y = _ensure_node(f(xs))
        return derivatives_with_respect_to(y, xs)
