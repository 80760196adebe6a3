# aad/core/graph.py
from __future__ import annotations
import logging
import threading
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Optional, Sequence
import numpy as np

from ..config import AADConfig
from ..errors import ArityError, GraphMismatchError
from .node import Node, OperatorKind

logger = logging.getLogger(__name__)


class Graph:
    """
    Context that stamps nodes with increasing ids.

    Construction order is a topological order of the graph: a node can only be
    built from nodes that already exist, so every operand has a smaller id.
    Nodes from two different graphs cannot be mixed because their ids come
    from independent counters.
    """
    def __init__(self, name: Optional[str] = None, config: Optional[AADConfig] = None):
        self.name = name
        self.config = config or AADConfig()
        self._lock = threading.Lock()
        self._next = 0

    def __repr__(self):
        return f"Graph(name={self.name!r}, nodes={self._next})"

    @property
    def n_nodes(self) -> int:
        """Number of nodes stamped so far."""
        return self._next

    def _next_id(self) -> int:
        with self._lock:
            node_id = self._next
            self._next += 1
        return node_id

    def leaf(self, value) -> Node:
        """Wrap a constant as a LEAF node."""
        if isinstance(value, Node):
            raise TypeError("leaf() expects a number, got a Node")
        if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
            raise TypeError(
                f"leaf() only accepts real numbers (int, float), but got {type(value)}"
            )
        return Node(value=np.float64(value), operator=OperatorKind.LEAF,
                    operands=(), id=self._next_id(), graph=self)

    def new_node(self, value, operator: OperatorKind, operands: Sequence[Node]) -> Node:
        """
        Append an internal node. `value` must already be computed from the
        operand values; this only checks the operands and stamps the id.
        """
        operands = tuple(operands)
        if operator is OperatorKind.LEAF:
            raise ArityError("LEAF nodes are built with leaf(), not new_node()")
        if len(operands) != operator.arity:
            raise ArityError(
                f"{operator.name} takes {operator.arity} operand(s), got {len(operands)}"
            )
        for operand in operands:
            if not isinstance(operand, Node):
                raise TypeError(f"operand must be a Node, got {type(operand)}")
            if operand.graph is not self:
                raise GraphMismatchError(
                    f"operand {operand!r} belongs to {operand.graph!r}, not {self!r}"
                )
        return Node(value=np.float64(value), operator=operator,
                    operands=operands, id=self._next_id(), graph=self)


# Process-wide default graph
global_graph = Graph(name="global")

# Graph selected by use_graph(); per thread and per asyncio task
_active_graph: ContextVar[Graph] = ContextVar("active_graph", default=global_graph)


def current_graph() -> Graph:
    return _active_graph.get()


def leaf(value, graph: Optional[Graph] = None) -> Node:
    """Wrap a constant as a LEAF node on `graph` (default: the active graph)."""
    return (graph or current_graph()).leaf(value)


@contextmanager
def use_graph(graph: Optional[Graph] = None):
    """
    Context manager to temporarily use a fresh graph:
        with use_graph() as g:
            x = leaf(2.0)
            y = x.squared()
    """
    active = graph or Graph()
    token = _active_graph.set(active)
    try:
        logger.debug("switched active graph to %r", active)
        yield active
    finally:
        _active_graph.reset(token)
