# aad/ops/transcendental.py
import numpy as np
from ..core.node import OperatorKind
from ..errors import NumericDomainError
from .arithmetic import _as_node, _graph_of


def exp(x):
    graph = _graph_of(x)
    x = _as_node(x, graph)
    with np.errstate(all="ignore"):
        ex = np.exp(x.value)
    return graph.new_node(ex, OperatorKind.EXP, (x,))


def sqrt(x):
    """Square root; nan for negative input unless strict_domain is set."""
    graph = _graph_of(x)
    x = _as_node(x, graph)
    if graph.config.strict_domain and x.value < 0.0:
        raise NumericDomainError(f"sqrt of negative value {float(x.value)!r}")
    with np.errstate(all="ignore"):
        s = np.sqrt(x.value)
    return graph.new_node(s, OperatorKind.SQRT, (x,))
