from __future__ import annotations

from ErrandTSP.solvers.base import AlgorithmResult, BaseSolver, SolverSpec, compute_cycle_cost
from ErrandTSP.solvers.exact import BacktrackingSolver, HeldKarpSolver
from ErrandTSP.solvers.heuristics import NearestNeighborSolver, TwoOptSolver
from ErrandTSP.solvers.meta import GeneticAlgorithmSolver
from ErrandTSP.utils.taxonomy import AlgorithmFamily

SOLVER_SPECS: dict[str, SolverSpec] = {
    solver_cls.name: SolverSpec(
        name=solver_cls.name,
        cls=solver_cls,
        family=solver_cls.family,
        exact=solver_cls.exact,
    )
    for solver_cls in (
        BacktrackingSolver,
        HeldKarpSolver,
        NearestNeighborSolver,
        TwoOptSolver,
        GeneticAlgorithmSolver,
    )
}

SOLVER_REGISTRY: dict[str, type[BaseSolver]] = {name: spec.cls for name, spec in SOLVER_SPECS.items()}
SOLVER_FAMILIES: dict[str, AlgorithmFamily] = {name: spec.family for name, spec in SOLVER_SPECS.items()}


def get_solver(name: str, **kwargs) -> BaseSolver:
    solver_cls = SOLVER_REGISTRY.get(name)
    if solver_cls is None:
        raise KeyError(f"Unknown solver: {name}")
    return solver_cls(**kwargs)


__all__ = [
    "AlgorithmResult",
    "BaseSolver",
    "SOLVER_FAMILIES",
    "SOLVER_REGISTRY",
    "SOLVER_SPECS",
    "AlgorithmFamily",
    "compute_cycle_cost",
    "get_solver",
    "BacktrackingSolver",
    "HeldKarpSolver",
    "NearestNeighborSolver",
    "TwoOptSolver",
    "GeneticAlgorithmSolver",
]
