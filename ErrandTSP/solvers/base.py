from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple, Type

import numpy as np

from ErrandTSP.errors import MissingEdgeError, StartingPointOutOfRangeError, UninitializedGraphError
from ErrandTSP.utils.taxonomy import AlgorithmFamily


@dataclass
class AlgorithmResult:
    """Container capturing the outcome of running a TSP solver."""

    name: str
    path: List[int]
    cost: float
    elapsed: float
    status: str
    metadata: Dict[str, Any] = field(default_factory=dict)


def current_time() -> float:
    return time.perf_counter()


def compute_cycle_cost(dist_matrix: np.ndarray, cycle: Sequence[int]) -> float:
    """Compute tour cost (including return leg)."""
    if not cycle:
        return float("inf")
    if len(cycle) == 1:
        return 0.0
    cost = 0.0
    for i in range(len(cycle)):
        a = cycle[i]
        b = cycle[(i + 1) % len(cycle)]
        cost += float(dist_matrix[a, b])
    return cost


def prepare_instance(graph: np.ndarray, start: int) -> Tuple[np.ndarray, int]:
    """Coerce ``graph`` to a float matrix and check it can be toured from ``start``."""
    dist_matrix = np.asarray(graph, dtype=float)
    if dist_matrix.ndim != 2 or dist_matrix.shape[0] != dist_matrix.shape[1]:
        raise ValueError(f"Cost matrix must be square, got shape {dist_matrix.shape}")
    n = dist_matrix.shape[0]
    if n == 0:
        raise UninitializedGraphError("Graph has no nodes")
    if not 0 <= start < n:
        raise StartingPointOutOfRangeError(f"Starting point {start} is not a node of a {n}-node graph")
    missing = np.argwhere(np.isnan(dist_matrix))
    if len(missing):
        a, b = missing[0]
        raise MissingEdgeError(int(a), int(b))
    return dist_matrix, n


@dataclass(frozen=True)
class SolverSpec:
    """Metadata describing a solver implementation."""

    name: str
    cls: Type["BaseSolver"]
    family: AlgorithmFamily
    exact: bool = False


class BaseSolver:
    """Common interface for ErrandTSP solvers.

    Solvers hold configuration only. Every piece of search state lives inside
    a single ``solve`` call, so one instance may be reused freely.
    """

    name: str
    family: AlgorithmFamily
    exact: bool = False

    def solve(self, graph: np.ndarray, start: int = 0) -> AlgorithmResult:  # noqa: D401
        """Solve a TSP instance represented as a distance matrix."""
        raise NotImplementedError

    def __call__(self, graph: np.ndarray, start: int = 0) -> AlgorithmResult:
        return self.solve(graph, start=start)


__all__ = [
    "AlgorithmResult",
    "AlgorithmFamily",
    "BaseSolver",
    "SolverSpec",
    "compute_cycle_cost",
    "current_time",
    "prepare_instance",
]
