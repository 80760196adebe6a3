# aad/core/__init__.py

"""
Core public API for the AAD package.

Exports:
    Node          : Immutable scalar value plus the operation that produced it.
    OperatorKind  : Closed set of operators (LEAF, SQUARED, SQRT, ADD, ...).
    Graph         : Context stamping nodes with increasing ids.
    leaf          : Wrap a constant as a leaf node on the active graph.
    use_graph     : Context manager to temporarily switch the active graph.
    gradient      : Run a single reverse pass; {Node: derivative}.
    derivative_with_respect_to : One partial derivative (0.0 if unreachable).
    grad, grads   : Convenience: derivatives of plain-number functions.
    value         : Convenience: numeric value of a Node.
"""

from .node import Node, OperatorKind
from .graph import Graph, current_graph, leaf, use_graph
from .engine import gradient, derivative_with_respect_to, derivatives_with_respect_to
from .seeds import grad, grads, grads_list, value

__all__ = [
    "Node", "OperatorKind",
    "Graph", "current_graph", "leaf", "use_graph",
    "gradient", "derivative_with_respect_to", "derivatives_with_respect_to",
    "grad", "grads", "grads_list", "value",
]
