# aad/core/node.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, Tuple
import numpy as np

if TYPE_CHECKING:
    from .graph import Graph


class OperatorKind(Enum):
    """Closed set of operations a Node can be produced by."""
    LEAF = "leaf"
    SQUARED = "squared"
    SQRT = "sqrt"
    ADD = "add"
    SUB = "sub"
    MULT = "mult"
    DIV = "div"
    EXP = "exp"
    ADDPRODUCT = "addproduct"

    @property
    def arity(self) -> int:
        return ARITY[self]


ARITY: Dict[OperatorKind, int] = {
    OperatorKind.LEAF: 0,
    OperatorKind.SQUARED: 1,
    OperatorKind.SQRT: 1,
    OperatorKind.EXP: 1,
    OperatorKind.ADD: 2,
    OperatorKind.SUB: 2,
    OperatorKind.MULT: 2,
    OperatorKind.DIV: 2,
    OperatorKind.ADDPRODUCT: 3,
}


@dataclass(frozen=True, eq=False)
class Node:
    """
    One immutable value in the computation graph.

    Attributes
    ----------
    value    : np.float64
        Result of `operator` applied to the operand values (or the constant,
        for a leaf). Evaluated once, at construction.
    operator : OperatorKind
        Operation that produced this node.
    operands : Tuple[Node, ...]
        Direct inputs, in operator order. For ADDPRODUCT: (base, x, y),
        meaning base + x*y.
    id       : int
        Stamp from the owning graph's counter. Every operand has a smaller id.
    graph    : Graph
        The graph that stamped this node.

    Nodes compare and hash by identity, so they can be used as dict keys in a
    gradient map even when two nodes carry the same value.

    Do not build nodes directly: use `Graph.leaf` / `leaf` and the operations.
    """
    value: np.float64
    operator: OperatorKind
    operands: Tuple["Node", ...]
    id: int
    graph: "Graph" = field(repr=False)

    @property
    def is_leaf(self) -> bool:
        return self.operator is OperatorKind.LEAF

    # ---------------- floating-point view ----------------
    def as_floating_point(self) -> float:
        """Return the numeric value of this node."""
        return float(self.value)

    def __float__(self) -> float:
        return float(self.value)

    def __str__(self) -> str:
        return str(float(self.value))

    def __repr__(self) -> str:
        return f"Node(id={self.id}, {self.operator.name}, value={float(self.value)!r})"

    # ---------------- operations (each returns a new Node) ----------------
    def squared(self) -> "Node":
        from ..ops.arithmetic import squared
        return squared(self)

    def sqrt(self) -> "Node":
        from ..ops.transcendental import sqrt
        return sqrt(self)

    def exp(self) -> "Node":
        from ..ops.transcendental import exp
        return exp(self)

    def add(self, x) -> "Node":
        from ..ops.arithmetic import add
        return add(self, x)

    def sub(self, x) -> "Node":
        from ..ops.arithmetic import sub
        return sub(self, x)

    def mult(self, x) -> "Node":
        from ..ops.arithmetic import mult
        return mult(self, x)

    def div(self, x) -> "Node":
        from ..ops.arithmetic import div
        return div(self, x)

    def add_product(self, x, y) -> "Node":
        """self + x*y"""
        from ..ops.arithmetic import add_product
        return add_product(self, x, y)

    # Operator overloading; plain numbers become leaves on this node's graph
    def __add__(self, other):
        return self.add(other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        return self.sub(other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        return self.mult(other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mult
        return mult(other, self)

    def __truediv__(self, other):
        return self.div(other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    # ---------------- derivatives ----------------
    def gradient(self):
        """dself/dX for every node X reachable from self."""
        from .engine import gradient
        return gradient(self)

    def derivative_with_respect_to(self, x: "Node") -> float:
        from .engine import derivative_with_respect_to
        return derivative_with_respect_to(self, x)
