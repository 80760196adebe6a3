"""
Adjoint method: one evaluation of f on a fresh graph, one reverse sweep.
"""

import time
from typing import Dict

from ..aad.core.graph import Graph, leaf, use_graph
from ..aad.core.engine import derivatives_with_respect_to
from ..aad.core.node import Node
from .base_method import GradientMethodBase, GraphFunction


class AdjointMethod(GradientMethodBase):
    """
    Reverse-mode gradient. Cost is independent of the number of inputs.
    """

    def __init__(self, config=None):
        super().__init__()
        self.method_name = "Adjoint"
        self.config = config

    def compute_gradient(self, f: GraphFunction, inputs: Dict[str, float]) -> Dict:
        start_time = time.time()

        with use_graph(Graph(config=self.config)):
            nodes = {name: leaf(v) for name, v in inputs.items()}
            y = f(nodes)
            if not isinstance(y, Node):
                y = leaf(y)
            gradient = derivatives_with_respect_to(y, nodes.values())

        time_ms = (time.time() - start_time) * 1000

        return self._format_result(
            value=y.as_floating_point(),
            gradient=gradient,
            names=list(inputs.keys()),
            time_ms=time_ms,
            n_evaluations=1
        )
