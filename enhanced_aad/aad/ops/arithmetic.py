# aad/ops/arithmetic.py
import numpy as np
from ..core.node import Node, OperatorKind
from ..core.graph import current_graph
from ..errors import NumericDomainError


def _graph_of(*args):
    """Graph of the first Node among args; the active graph if there is none."""
    for a in args:
        if isinstance(a, Node):
            return a.graph
    return current_graph()


def _as_node(x, graph):
    """Ensure x is a Node; otherwise wrap it as a constant leaf on `graph`."""
    return x if isinstance(x, Node) else graph.leaf(x)


def _binary(x, y, f, operator):
    """
    Generic binary primitive:
      - computes out.value = f(x.value, y.value) with IEEE-754 semantics
      - stamps a new Node(operator, (x, y)) on the shared graph
    """
    graph = _graph_of(x, y)
    x = _as_node(x, graph)
    y = _as_node(y, graph)
    with np.errstate(all="ignore"):
        val = f(x.value, y.value)
    return graph.new_node(val, operator, (x, y))


def add(x, y):  return _binary(x, y, lambda a, b: a + b, OperatorKind.ADD)
def sub(x, y):  return _binary(x, y, lambda a, b: a - b, OperatorKind.SUB)
def mult(x, y): return _binary(x, y, lambda a, b: a * b, OperatorKind.MULT)


def div(x, y):
    """
    x / y. Division by zero gives +-inf (or nan for 0/0) unless the graph is
    configured with strict_domain.
    """
    graph = _graph_of(x, y)
    y_node = _as_node(y, graph)
    if graph.config.strict_domain and y_node.value == 0.0:
        raise NumericDomainError(f"division by zero: {x!r} / {y_node!r}")
    return _binary(x, y_node, lambda a, b: a / b, OperatorKind.DIV)


def add_product(base, x, y):
    """
    Fused base + x*y as a single node with three operands.
    """
    graph = _graph_of(base, x, y)
    base = _as_node(base, graph)
    x = _as_node(x, graph)
    y = _as_node(y, graph)
    with np.errstate(all="ignore"):
        val = base.value + x.value * y.value
    return graph.new_node(val, OperatorKind.ADDPRODUCT, (base, x, y))


def squared(x):
    graph = _graph_of(x)
    x = _as_node(x, graph)
    with np.errstate(all="ignore"):
        val = x.value * x.value
    return graph.new_node(val, OperatorKind.SQUARED, (x,))
