# aad/__init__.py
# Reverse-mode automatic differentiation on scalar value graphs

from .config import AADConfig, setup_logger
from .errors import AADError, ArityError, GraphMismatchError, NumericDomainError
from .core.node import Node, OperatorKind
from .core.graph import Graph, current_graph, leaf, use_graph
from .core.engine import (
    gradient,
    derivative_with_respect_to,
    derivatives_with_respect_to,
)
from .core.seeds import grad, grads, grads_list, value

# Ensure the operation modules are loaded
from . import ops

__all__ = [
    # Config / errors
    'AADConfig',
    'setup_logger',
    'AADError',
    'ArityError',
    'GraphMismatchError',
    'NumericDomainError',
    # Core
    'Node',
    'OperatorKind',
    'Graph',
    'current_graph',
    'leaf',
    'use_graph',
    # Engine
    'gradient',
    'derivative_with_respect_to',
    'derivatives_with_respect_to',
    # Seeds
    'grad',
    'grads',
    'grads_list',
    'value',
    'ops',
]
