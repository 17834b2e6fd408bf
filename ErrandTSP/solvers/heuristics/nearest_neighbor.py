from __future__ import annotations

from typing import List

import numpy as np

from ErrandTSP.solvers.base import AlgorithmResult, BaseSolver, compute_cycle_cost, current_time, prepare_instance
from ErrandTSP.utils.taxonomy import AlgorithmFamily


def nearest_neighbor_tour(dist_matrix: np.ndarray, start: int) -> List[int]:
    """Greedy tour: always move to the cheapest unvisited successor (lowest index on ties)."""
    n = dist_matrix.shape[0]
    visited = np.zeros(n, dtype=bool)
    visited[start] = True
    tour = [start]
    current = start
    while len(tour) < n:
        candidates = np.flatnonzero(~visited)
        current = int(candidates[np.argmin(dist_matrix[current, candidates])])
        visited[current] = True
        tour.append(current)
    return tour


class NearestNeighborSolver(BaseSolver):
    name = "nearest_neighbor"
    family = AlgorithmFamily.HEURISTIC

    def solve(self, graph: np.ndarray, start: int = 0) -> AlgorithmResult:
        dist_matrix, n = prepare_instance(graph, start)
        start_time = current_time()
        tour = nearest_neighbor_tour(dist_matrix, start)
        return AlgorithmResult(
            name=self.name,
            path=tour,
            cost=compute_cycle_cost(dist_matrix, tour),
            elapsed=current_time() - start_time,
            status="complete",
            metadata={"nodes_visited": len(tour)},
        )


__all__ = ["NearestNeighborSolver", "nearest_neighbor_tour"]
