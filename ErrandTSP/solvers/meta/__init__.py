from ErrandTSP.solvers.meta.genetic_algorithm import GeneticAlgorithmSolver

__all__ = [
    "GeneticAlgorithmSolver",
]
