from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ErrandTSP.solvers.base import AlgorithmResult, BaseSolver, compute_cycle_cost, current_time, prepare_instance
from ErrandTSP.solvers.heuristics.nearest_neighbor import nearest_neighbor_tour
from ErrandTSP.utils.taxonomy import AlgorithmFamily

logger = logging.getLogger(__name__)

IMPROVEMENT_EPSILON = 1e-9


def _route_cost(dist_matrix: np.ndarray, route: np.ndarray) -> float:
    return float(dist_matrix[route[:-1], route[1:]].sum())


def two_opt(
    dist_matrix: np.ndarray,
    tour: Sequence[int],
    max_passes: Optional[int] = None,
) -> Tuple[List[int], float, int, int]:
    """Refine ``tour`` with 2-opt moves until a full pass finds no improvement.

    The tour is closed by repeating its first node at the end, so the return
    leg is an ordinary edge. Cutting ``(i-1, i)`` and ``(j-1, j)`` reverses
    ``route[i:j]``; each candidate is priced by summing its edges, which keeps
    directed costs exact. Returns ``(tour, cost, passes, moves)``.
    """
    route = np.array(list(tour) + [tour[0]], dtype=np.int64)
    length = len(route)
    best_cost = _route_cost(dist_matrix, route)
    passes = 0
    moves = 0

    improved = True
    while improved and (max_passes is None or passes < max_passes):
        improved = False
        passes += 1
        for i in range(1, length):
            for j in range(i + 2, length):
                candidate = np.concatenate((route[:i], route[i:j][::-1], route[j:]))
                cost = _route_cost(dist_matrix, candidate)
                if cost + IMPROVEMENT_EPSILON < best_cost:
                    route[i:j] = route[i:j][::-1].copy()
                    best_cost = cost
                    moves += 1
                    improved = True

    return route[:-1].tolist(), best_cost, passes, moves


class TwoOptSolver(BaseSolver):
    """Nearest-neighbour construction followed by 2-opt refinement.

    Each improving pass is O(n^3); there is no guarantee beyond reaching a
    2-opt local optimum. ``max_passes`` caps the number of passes.
    """

    name = "two_opt"
    family = AlgorithmFamily.HEURISTIC

    def __init__(self, max_passes: Optional[int] = None):
        self.max_passes = max_passes

    def solve(self, graph: np.ndarray, start: int = 0) -> AlgorithmResult:
        dist_matrix, n = prepare_instance(graph, start)
        start_time = current_time()

        initial = nearest_neighbor_tour(dist_matrix, start)
        construction_cost = compute_cycle_cost(dist_matrix, initial)
        tour, _, passes, moves = two_opt(dist_matrix, initial, max_passes=self.max_passes)
        cost = compute_cycle_cost(dist_matrix, tour)

        elapsed = current_time() - start_time
        logger.debug(
            "2-opt improved %.4f -> %.4f with %d moves over %d passes",
            construction_cost,
            cost,
            moves,
            passes,
        )
        return AlgorithmResult(
            name=self.name,
            path=tour,
            cost=cost,
            elapsed=elapsed,
            status="complete",
            metadata={"construction_cost": construction_cost, "passes": passes, "moves": moves},
        )


__all__ = ["TwoOptSolver", "two_opt"]
