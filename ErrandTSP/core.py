from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional, Sequence

from ErrandTSP.errors import (
    SolverNotImplementedError,
    StartingPointNotSetError,
    StartingPointOutOfRangeError,
    UninitializedGraphError,
    UnsupportedOperationError,
)
from ErrandTSP.graph import CostMatrix
from ErrandTSP.selectors import get_selector
from ErrandTSP.solvers import AlgorithmResult, compute_cycle_cost, get_solver

logger = logging.getLogger(__name__)


class _GraphBuilder:
    """Shared set-up surface: node count, directed edge costs and the start."""

    def __init__(self):
        self._matrix: Optional[CostMatrix] = None
        self._starting_point: Optional[int] = None

    def initialize(self, node_count: int) -> None:
        self._matrix = CostMatrix(node_count)

    def load_matrix(self, matrix: CostMatrix) -> None:
        """Use a prepared matrix in place of ``initialize`` plus ``set_edge_cost`` calls."""
        self._matrix = matrix

    @property
    def matrix(self) -> CostMatrix:
        self.check_initialization_ready()
        return self._matrix

    @property
    def node_count(self) -> int:
        return self.matrix.node_count

    @property
    def starting_point(self) -> Optional[int]:
        return self._starting_point

    def set_edge_cost(self, from_node: int, to_node: int, cost: float) -> None:
        self.matrix.set_edge_cost(from_node, to_node, cost)

    def set_starting_point(self, node: int) -> None:
        # Range is checked when a solve starts, not here.
        self._starting_point = int(node)

    def check_initialization_ready(self) -> None:
        if self._matrix is None:
            raise UninitializedGraphError("Number of nodes in graph not initialized")
        if self._matrix.node_count == 0:
            raise UninitializedGraphError("Graph has no nodes")

    def check_build_ready(self) -> None:
        if self._starting_point is None:
            raise StartingPointNotSetError("Starting point not set")
        if not 0 <= self._starting_point < self._matrix.node_count:
            raise StartingPointOutOfRangeError(
                f"Starting point {self._starting_point} is not a node of a "
                f"{self._matrix.node_count}-node graph"
            )

    def tour_cost(self, tour: Sequence[int]) -> float:
        """Cost of ``tour`` closed back to its first node."""
        matrix = self.matrix
        tour = list(tour)
        for node in tour:
            matrix.check_index(node)
        if len(tour) <= 1:
            return compute_cycle_cost(matrix.as_array(), tour)
        # Legs go through cost() so an unset edge raises MissingEdgeError.
        return sum(matrix.cost(a, b) for a, b in zip(tour, tour[1:] + tour[:1]))


class TspSolver(_GraphBuilder):
    """Plain TSP front end.

    ``solve`` dispatches on node count; the ``solve_with_*`` methods run one
    strategy directly. Every call returns a fresh tour that starts at the
    starting point. Nothing bounds the running time of the exact strategies.
    """

    def __init__(
        self,
        selector: object | None = None,
        selector_name: str = "rule_based",
        selector_kwargs: Dict | None = None,
        solver_kwargs: Dict[str, Dict[str, Any]] | None = None,
    ):
        super().__init__()
        if selector is not None:
            self.selector = selector
        else:
            self.selector = get_selector(selector_name, **(selector_kwargs or {}))
        self.solver_kwargs = dict(solver_kwargs or {})

    def set_group_for_node(self, node: int, group: int) -> None:
        raise UnsupportedOperationError("There are no groups to set; use the grouped solver (GtspSolver) for that")

    def run(self, strategy: str | None = None) -> AlgorithmResult:
        """Run ``strategy`` (or the dispatched one) and return the full result."""
        start_time = time.perf_counter()
        self.check_initialization_ready()
        self.check_build_ready()
        self._matrix.require_complete()

        n = self._matrix.node_count
        dispatched = strategy is None
        if dispatched:
            strategy = self.selector.predict({"n_nodes": n}).name
            logger.info("Dispatching %d-node instance to %s", n, strategy)

        solver = get_solver(strategy, **self.solver_kwargs.get(strategy, {}))
        result = solver.solve(self._matrix.as_array(), start=self._starting_point)

        metadata = dict(result.metadata)
        metadata.update(
            {
                "selected_solver": strategy,
                "dispatched": dispatched,
                "n_nodes": n,
                "starting_point": self._starting_point,
                "wallclock_total": time.perf_counter() - start_time,
            }
        )
        logger.info("%s finished: cost=%.4f elapsed=%.4fs", strategy, result.cost, result.elapsed)
        return AlgorithmResult(
            name=result.name,
            path=list(result.path),
            cost=result.cost,
            elapsed=result.elapsed,
            status=result.status,
            metadata=metadata,
        )

    def solve(self) -> List[int]:
        return self.run().path

    def solve_with_backtracking(self) -> List[int]:
        return self.run("backtracking").path

    def solve_with_dynamic_programming(self) -> List[int]:
        return self.run("held_karp").path

    def solve_with_nearest_neighbor_and_2opt(self) -> List[int]:
        return self.run("two_opt").path

    def solve_with_genetic_algorithm(self) -> List[int]:
        raise SolverNotImplementedError("Solving TSP with a genetic algorithm is not implemented")


class GtspSolver(_GraphBuilder):
    """Grouped TSP surface: each group must be visited once through any member.

    Groups can be assigned, but none of the solving strategies is implemented.
    """

    def __init__(self):
        super().__init__()
        self._groups: Dict[int, int] = {}

    def initialize(self, node_count: int) -> None:
        super().initialize(node_count)
        self._groups = {}

    def load_matrix(self, matrix: CostMatrix) -> None:
        super().load_matrix(matrix)
        self._groups = {}

    def set_group_for_node(self, node: int, group: int) -> None:
        self.matrix.check_index(node)
        self._groups[node] = int(group)

    @property
    def groups(self) -> Dict[int, int]:
        return dict(self._groups)

    def solve_gtsp(self) -> List[int]:
        raise SolverNotImplementedError("Grouped TSP solving is not implemented")

    def solve_gtsp_with_backtracking(self) -> List[int]:
        raise SolverNotImplementedError("Grouped TSP solving with backtracking is not implemented")

    def solve_gtsp_with_genetic_algorithm(self) -> List[int]:
        raise SolverNotImplementedError("Grouped TSP solving with a genetic algorithm is not implemented")


__all__ = ["GtspSolver", "TspSolver"]
