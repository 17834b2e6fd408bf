from __future__ import annotations

import logging

import numpy as np

from ErrandTSP.solvers.base import AlgorithmResult, BaseSolver, current_time, prepare_instance
from ErrandTSP.utils.taxonomy import AlgorithmFamily

logger = logging.getLogger(__name__)


class BacktrackingSolver(BaseSolver):
    """Exhaustive depth-first enumeration of every tour from the start.

    With ``prune=False`` (the default) every branch is walked to the end, so the
    running time is O(n!) regardless of the best tour found so far. ``prune=True``
    skips a branch once its partial cost reaches the best complete tour; the
    returned cost is the same either way.
    """

    name = "backtracking"
    family = AlgorithmFamily.EXACT
    exact = True

    def __init__(self, prune: bool = False):
        self.prune = prune

    def solve(self, graph: np.ndarray, start: int = 0) -> AlgorithmResult:
        dist_matrix, n = prepare_instance(graph, start)
        start_time = current_time()
        costs = dist_matrix.tolist()
        visited = [False] * n
        path: list[int] = []
        best_cost = float("inf")
        best_path: list[int] | None = None
        nodes_explored = 0
        pruned = 0

        def dfs(node: int, cost_so_far: float) -> None:
            nonlocal best_cost, best_path, nodes_explored, pruned
            nodes_explored += 1
            path.append(node)
            visited[node] = True

            if len(path) == n:
                total_cost = (cost_so_far + costs[node][start]) if n > 1 else 0.0
                if best_path is None or total_cost < best_cost:
                    best_cost = total_cost
                    best_path = path[:]
            else:
                for next_node in range(n):
                    if visited[next_node]:
                        continue
                    new_cost = cost_so_far + costs[node][next_node]
                    if self.prune and best_path is not None and new_cost >= best_cost:
                        pruned += 1
                        continue
                    dfs(next_node, new_cost)

            visited[node] = False
            path.pop()

        dfs(start, 0.0)

        elapsed = current_time() - start_time
        logger.debug("Backtracking explored %d nodes (%d pruned) in %.4fs", nodes_explored, pruned, elapsed)
        return AlgorithmResult(
            name=self.name,
            path=best_path,
            cost=best_cost,
            elapsed=elapsed,
            status="complete",
            metadata={"nodes_explored": nodes_explored, "pruned": pruned},
        )


__all__ = ["BacktrackingSolver"]
