"""
Base abstract class for gradient computation methods.

All methods compute the gradient of a scalar function

    y = f({name: Node})

with respect to every named input, and return the same result dictionary so
that they can be compared against each other.
"""

from abc import ABC, abstractmethod
import numpy as np
from typing import Callable, Dict

from ..aad.core.node import Node

GraphFunction = Callable[[Dict[str, Node]], Node]


class GradientMethodBase(ABC):
    """
    Abstract base class for all gradient computation methods.

    Attributes:
        method_name (str): Name of the method
    """

    def __init__(self):
        self.method_name = "Base"

    @abstractmethod
    def compute_gradient(self, f: GraphFunction, inputs: Dict[str, float]) -> Dict:
        """
        Compute the function value and its gradient.

        Args:
            f: function taking {name: Node} and returning a scalar Node
            inputs: {name: value} at which to differentiate

        Returns:
            Dictionary with standard format:
            {
                'value': float,                 # f(inputs)
                'gradient': np.array([...]),    # partials in inputs.keys() order
                'partials': {name: float},      # same partials, by name
                'time_ms': float,               # Computation time in milliseconds
                'n_evaluations': int,           # Number of evaluations of f
                'method': str                   # Method name
            }
        """
        pass

    def _format_result(self, value: float, gradient: np.ndarray, names,
                       time_ms: float, n_evaluations: int) -> Dict:
        """
        Format results into standard output dictionary.
        """
        gradient = np.asarray(gradient, dtype=float)
        return {
            'value': float(value),
            'gradient': gradient,
            'partials': {name: float(g) for name, g in zip(names, gradient)},
            'time_ms': time_ms,
            'n_evaluations': n_evaluations,
            'method': self.method_name
        }

    def __repr__(self):
        return f"{self.method_name}()"
