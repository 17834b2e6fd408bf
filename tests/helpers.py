from __future__ import annotations

import numpy as np

from ErrandTSP import TspSolver

# Four nodes around a loop (1, 2, 1, 1) with both cross edges costing 5; symmetric.
SQUARE_EDGES = [(0, 1, 1.0), (1, 2, 2.0), (2, 3, 1.0), (3, 0, 1.0), (0, 2, 5.0), (1, 3, 5.0)]


def random_costs(n: int, seed: int, symmetric: bool = False) -> np.ndarray:
    rng = np.random.default_rng(seed)
    costs = rng.uniform(1.0, 100.0, size=(n, n))
    if symmetric:
        costs = (costs + costs.T) / 2.0
    np.fill_diagonal(costs, 0.0)
    return costs


def euclidean_costs(n: int, seed: int) -> np.ndarray:
    coords = np.random.default_rng(seed).random((n, 2)) * 100.0
    diff = coords[:, None, :] - coords[None, :, :]
    return np.linalg.norm(diff, axis=-1)


def build_solver(costs: np.ndarray, start: int = 0, **kwargs) -> TspSolver:
    solver = TspSolver(**kwargs)
    n = costs.shape[0]
    solver.initialize(n)
    for i in range(n):
        for j in range(n):
            if i != j:
                solver.set_edge_cost(i, j, costs[i, j])
    solver.set_starting_point(start)
    return solver


def assert_valid_tour(tour, n: int, start: int) -> None:
    assert len(tour) == n
    assert sorted(tour) == list(range(n))
    assert tour[0] == start
