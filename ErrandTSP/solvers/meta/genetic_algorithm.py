from __future__ import annotations

import numpy as np

from ErrandTSP.errors import SolverNotImplementedError
from ErrandTSP.solvers.base import AlgorithmResult, BaseSolver
from ErrandTSP.utils.taxonomy import AlgorithmFamily


class GeneticAlgorithmSolver(BaseSolver):
    """Registered so the strategy name resolves; solving is not implemented."""

    name = "genetic_algorithm"
    family = AlgorithmFamily.METAHEURISTIC

    def solve(self, graph: np.ndarray, start: int = 0) -> AlgorithmResult:
        raise SolverNotImplementedError("Solving TSP with a genetic algorithm is not implemented")


__all__ = ["GeneticAlgorithmSolver"]
