from __future__ import annotations

import logging

import numpy as np

from ErrandTSP.solvers.base import AlgorithmResult, BaseSolver, current_time, prepare_instance
from ErrandTSP.utils.taxonomy import AlgorithmFamily

logger = logging.getLogger(__name__)


class HeldKarpSolver(BaseSolver):
    """Held-Karp dynamic programming over subsets of the non-start nodes.

    ``opt[mask, end]`` is the cheapest path leaving the start, visiting exactly
    the nodes in ``mask`` and stopping at ``end``; ``pred[mask, end]`` is the node
    visited just before ``end`` on that path (-1 for the start). Subsets are
    filled layer by layer in order of size, so every cell a layer reads was
    written by the previous one. Time is O(2^n * n^2), memory O(2^n * n).
    """

    name = "held_karp"
    family = AlgorithmFamily.EXACT
    exact = True

    def solve(self, graph: np.ndarray, start: int = 0) -> AlgorithmResult:
        dist_matrix, n = prepare_instance(graph, start)
        start_time = current_time()

        # Bit b of a mask stands for others[b]; the start never has a bit.
        others = np.array([node for node in range(n) if node != start], dtype=np.int64)
        m = len(others)
        if m == 0:
            return AlgorithmResult(
                name=self.name,
                path=[start],
                cost=0.0,
                elapsed=current_time() - start_time,
                status="complete",
                metadata={"states": 0},
            )

        inner = dist_matrix[np.ix_(others, others)]
        from_start = dist_matrix[start, others]
        to_start = dist_matrix[others, start]

        size = 1 << m
        opt = np.full((size, m), np.inf)
        pred = np.full((size, m), -1, dtype=np.int64)

        singles = np.arange(m, dtype=np.int64)
        opt[1 << singles, singles] = from_start
        states = m

        all_masks = np.arange(size, dtype=np.int64)
        bits = ((all_masks[:, None] >> singles) & 1).astype(bool)
        popcount = bits.sum(axis=1)

        for k in range(2, m + 1):
            masks = np.flatnonzero(popcount == k)
            ends = np.nonzero(bits[masks])[1].reshape(len(masks), k)
            prevs = masks[:, None] ^ (1 << ends)
            # cand[s, a, b]: reach ends[s, a] from ends[s, b] after visiting prevs[s, a].
            cand = opt[prevs[:, :, None], ends[:, None, :]] + inner[ends[:, None, :], ends[:, :, None]]
            diag = np.arange(k)
            cand[:, diag, diag] = np.inf
            best = np.argmin(cand, axis=2)
            # A row of all-infinite candidates must still name a real predecessor.
            stuck = best == diag
            best[stuck] = np.broadcast_to((diag + 1) % k, best.shape)[stuck]
            opt[masks[:, None], ends] = np.take_along_axis(cand, best[:, :, None], axis=2)[:, :, 0]
            pred[masks[:, None], ends] = np.take_along_axis(ends, best, axis=1)
            states += masks.size * k

        full = size - 1
        totals = opt[full] + to_start
        best_cost = float(totals.min())
        # Ties on the closing node go to the lexicographically smallest tour.
        path = min(_reconstruct(pred, others, full, int(end), start) for end in np.flatnonzero(totals == best_cost))

        elapsed = current_time() - start_time
        logger.debug("Held-Karp evaluated %d states in %.4fs", states, elapsed)
        return AlgorithmResult(
            name=self.name,
            path=path,
            cost=best_cost,
            elapsed=elapsed,
            status="complete",
            metadata={"states": states},
        )


def _reconstruct(pred: np.ndarray, others: np.ndarray, mask: int, end: int, start: int) -> list[int]:
    order: list[int] = []
    while mask:
        order.append(int(others[end]))
        previous = int(pred[mask, end])
        mask &= ~(1 << end)
        end = previous
    return [start] + order[::-1]


__all__ = ["HeldKarpSolver"]
