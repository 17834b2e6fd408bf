from ErrandTSP.core import GtspSolver, TspSolver
from ErrandTSP.errors import (
    ErrandTSPError,
    InvalidRequestError,
    MissingEdgeError,
    NodeIndexError,
    SolverNotImplementedError,
    StartingPointNotSetError,
    StartingPointOutOfRangeError,
    UninitializedGraphError,
    UnsupportedOperationError,
)
from ErrandTSP.graph import CostMatrix
from ErrandTSP.request import solve_request
from ErrandTSP.selectors import BaseSelector, RuleBasedSelector, get_selector
from ErrandTSP.solvers import (
    AlgorithmResult,
    BaseSolver,
    SOLVER_FAMILIES,
    SOLVER_REGISTRY,
    SOLVER_SPECS,
    get_solver,
)
from ErrandTSP.utils.taxonomy import AlgorithmFamily

__all__ = [
    "AlgorithmFamily",
    "AlgorithmResult",
    "BaseSelector",
    "BaseSolver",
    "CostMatrix",
    "ErrandTSPError",
    "GtspSolver",
    "InvalidRequestError",
    "MissingEdgeError",
    "NodeIndexError",
    "RuleBasedSelector",
    "SOLVER_FAMILIES",
    "SOLVER_REGISTRY",
    "SOLVER_SPECS",
    "SolverNotImplementedError",
    "StartingPointNotSetError",
    "StartingPointOutOfRangeError",
    "TspSolver",
    "UninitializedGraphError",
    "UnsupportedOperationError",
    "get_selector",
    "get_solver",
    "solve_request",
]
