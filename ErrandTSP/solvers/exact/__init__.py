from ErrandTSP.solvers.exact.backtracking import BacktrackingSolver
from ErrandTSP.solvers.exact.held_karp import HeldKarpSolver

__all__ = [
    "BacktrackingSolver",
    "HeldKarpSolver",
]
