"""
Methods package for gradient computation.

Provides 2 interchangeable methods with a common result format:
1. Adjoint: one reverse sweep over the computation graph
2. Bumping: central finite differences (2n + 1 evaluations)
"""

from .base_method import GradientMethodBase
from .adjoint import AdjointMethod
from .bumping import BumpingMethod
from .compare import compare_results

__all__ = [
    'GradientMethodBase',
    'AdjointMethod',
    'BumpingMethod',
    'compare_results'
]
