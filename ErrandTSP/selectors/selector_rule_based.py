from __future__ import annotations

from ErrandTSP.selectors.base import BaseSelector
from ErrandTSP.solvers import BacktrackingSolver, HeldKarpSolver, TwoOptSolver


class RuleBasedSelector(BaseSelector):
    """Size-based dispatch: backtracking, then Held-Karp, then 2-opt.

    Instances below ``backtracking_limit`` nodes are enumerated exhaustively,
    instances below ``dynamic_programming_limit`` go to Held-Karp and anything
    larger gets a nearest-neighbour tour refined by 2-opt.
    """

    backtracking_limit = 8
    dynamic_programming_limit = 20

    def __init__(self, backtracking_limit: int | None = None, dynamic_programming_limit: int | None = None):
        if backtracking_limit is not None:
            self.backtracking_limit = int(backtracking_limit)
        if dynamic_programming_limit is not None:
            self.dynamic_programming_limit = int(dynamic_programming_limit)
        if self.backtracking_limit > self.dynamic_programming_limit:
            raise ValueError("backtracking_limit must not exceed dynamic_programming_limit")

    def predict(self, features: dict):
        n = int(features.get("n_nodes") or 0)

        if n < self.backtracking_limit:
            return BacktrackingSolver
        if n < self.dynamic_programming_limit:
            return HeldKarpSolver
        return TwoOptSolver


__all__ = ["RuleBasedSelector"]
