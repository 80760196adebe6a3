"""
Bumping: central finite differences, no reverse sweep.

Formula, for every input x_i:
    df/dx_i = [f(x_i + eps) - f(x_i - eps)] / (2 eps)

Evaluations: 2n + 1 (base value plus two bumps per input)
"""

import logging
import time
import numpy as np
from typing import Dict

from ..aad.config import AADConfig
from ..aad.core.graph import Graph, leaf, use_graph
from ..aad.core.node import Node
from .base_method import GradientMethodBase, GraphFunction

logger = logging.getLogger(__name__)


class BumpingMethod(GradientMethodBase):
    """
    Finite-difference gradient, used as an independent check of the adjoint.
    """

    def __init__(self, eps: float = None, config: AADConfig = None):
        super().__init__()
        self.method_name = "Bumping"
        self.config = config or AADConfig()
        self.eps = eps if eps is not None else self.config.bump_size
        if self.eps <= 0.0:
            raise ValueError(f"eps must be positive, got {self.eps}")

    def _evaluate(self, f: GraphFunction, inputs: Dict[str, float]) -> float:
        """Evaluate f on a fresh graph and return its value"""
        with use_graph(Graph(config=self.config)):
            y = f({name: leaf(v) for name, v in inputs.items()})
            return y.as_floating_point() if isinstance(y, Node) else float(y)

    def compute_gradient(self, f: GraphFunction, inputs: Dict[str, float]) -> Dict:
        start_time = time.time()
        eps = self.eps
        names = list(inputs.keys())

        # 1. Base value
        v0 = self._evaluate(f, inputs)

        # 2. Bump each input up and down
        gradient = np.zeros(len(names))
        for i, name in enumerate(names):
            up = dict(inputs)
            up[name] = inputs[name] + eps
            down = dict(inputs)
            down[name] = inputs[name] - eps
            gradient[i] = (self._evaluate(f, up) - self._evaluate(f, down)) / (2 * eps)

        time_ms = (time.time() - start_time) * 1000
        logger.debug("bumping with eps=%g over %d inputs took %.3f ms", eps, len(names), time_ms)

        return self._format_result(
            value=v0,
            gradient=gradient,
            names=names,
            time_ms=time_ms,
            n_evaluations=2 * len(names) + 1
        )
