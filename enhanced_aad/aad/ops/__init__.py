# aad/ops/__init__.py

# Convenience re-exports so users can do: from enhanced_aad.aad.ops import mult, exp, ...
from .arithmetic import add, sub, mult, div, add_product, squared
from .transcendental import exp, sqrt

__all__ = [
    "add", "sub", "mult", "div", "add_product", "squared",
    "exp", "sqrt",
]
