from ErrandTSP.solvers.heuristics.nearest_neighbor import NearestNeighborSolver, nearest_neighbor_tour
from ErrandTSP.solvers.heuristics.two_opt import TwoOptSolver, two_opt

__all__ = [
    "NearestNeighborSolver",
    "TwoOptSolver",
    "nearest_neighbor_tour",
    "two_opt",
]
