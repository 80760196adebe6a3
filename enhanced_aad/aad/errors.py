"""Exceptions raised at the construction boundary of the AAD engine."""


class AADError(Exception):
    pass


class GraphMismatchError(AADError, ValueError):
    """An operand belongs to a different Graph than the receiver."""


class ArityError(AADError, ValueError):
    """Operand count does not match the operator."""


class NumericDomainError(AADError, ArithmeticError):
    """sqrt of a negative / division by zero, raised only in strict_domain mode."""
