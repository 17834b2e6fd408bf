from __future__ import annotations

import pytest

from ErrandTSP import TspSolver
from tests.helpers import SQUARE_EDGES


@pytest.fixture
def square_solver() -> TspSolver:
    solver = TspSolver()
    solver.initialize(4)
    for a, b, cost in SQUARE_EDGES:
        solver.set_edge_cost(a, b, cost)
        solver.set_edge_cost(b, a, cost)
    solver.set_starting_point(0)
    return solver
