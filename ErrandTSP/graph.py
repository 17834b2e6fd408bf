from __future__ import annotations

from typing import Iterator, Sequence, Tuple

import numpy as np

from ErrandTSP.errors import MissingEdgeError, NodeIndexError

EARTH_RADIUS_KM = 6371.0088


class CostMatrix:
    """Directed ``n x n`` travel costs.

    Off-diagonal cells start unset (NaN) and must be assigned before a solve
    reads them. The diagonal is always zero and cannot be assigned.
    """

    def __init__(self, node_count: int):
        node_count = int(node_count)
        if node_count < 0:
            raise ValueError(f"Node count must be non-negative, got {node_count}")
        self._costs = np.full((node_count, node_count), np.nan, dtype=float)
        np.fill_diagonal(self._costs, 0.0)

    @property
    def node_count(self) -> int:
        return self._costs.shape[0]

    def check_index(self, node: int) -> None:
        if not 0 <= node < self.node_count:
            raise NodeIndexError(node, self.node_count)

    def set_edge_cost(self, from_node: int, to_node: int, cost: float) -> None:
        self.check_index(from_node)
        self.check_index(to_node)
        if from_node == to_node:
            raise ValueError(f"Self-loop {from_node} -> {to_node} cannot be given a cost")
        cost = float(cost)
        if np.isnan(cost):
            raise ValueError(f"Edge cost {from_node} -> {to_node} must be a number, got NaN")
        self._costs[from_node, to_node] = cost

    def is_set(self, from_node: int, to_node: int) -> bool:
        self.check_index(from_node)
        self.check_index(to_node)
        return not np.isnan(self._costs[from_node, to_node])

    def cost(self, from_node: int, to_node: int) -> float:
        if not self.is_set(from_node, to_node):
            raise MissingEdgeError(from_node, to_node)
        return float(self._costs[from_node, to_node])

    def missing_edges(self) -> Iterator[Tuple[int, int]]:
        rows, cols = np.nonzero(np.isnan(self._costs))
        for a, b in zip(rows.tolist(), cols.tolist()):
            yield a, b

    def require_complete(self) -> None:
        """Raise :class:`MissingEdgeError` for the first unset cell, if any."""
        for a, b in self.missing_edges():
            raise MissingEdgeError(a, b)

    def as_array(self) -> np.ndarray:
        view = self._costs.view()
        view.flags.writeable = False
        return view

    @classmethod
    def from_array(cls, costs: Sequence[Sequence[float]] | np.ndarray) -> "CostMatrix":
        array = np.asarray(costs, dtype=float)
        if array.ndim != 2 or array.shape[0] != array.shape[1]:
            raise ValueError(f"Cost matrix must be square, got shape {array.shape}")
        matrix = cls(array.shape[0])
        matrix._costs[...] = array
        np.fill_diagonal(matrix._costs, 0.0)
        return matrix

    @classmethod
    def from_coordinates(cls, coordinates: Sequence[Sequence[float]] | np.ndarray, metric: str = "euclidean") -> "CostMatrix":
        """Build a symmetric matrix from points.

        ``haversine`` expects ``(lat, lng)`` pairs in degrees and yields kilometres.
        """
        coords = np.asarray(coordinates, dtype=float).reshape(-1, 2)
        metric = (metric or "euclidean").lower()
        if metric == "haversine":
            return cls.from_array(_haversine_matrix(coords))
        diff = coords[:, None, :] - coords[None, :, :]
        if metric == "manhattan":
            return cls.from_array(np.abs(diff).sum(axis=-1))
        if metric == "euclidean":
            return cls.from_array(np.linalg.norm(diff, axis=-1))
        raise ValueError(f"Unknown metric: {metric}")


def _haversine_matrix(coords: np.ndarray) -> np.ndarray:
    lat = np.radians(coords[:, 0])
    lng = np.radians(coords[:, 1])
    dlat = lat[:, None] - lat[None, :]
    dlng = lng[:, None] - lng[None, :]
    a = np.sin(dlat / 2.0) ** 2 + np.cos(lat)[:, None] * np.cos(lat)[None, :] * np.sin(dlng / 2.0) ** 2
    return 2.0 * EARTH_RADIUS_KM * np.arcsin(np.sqrt(np.clip(a, 0.0, 1.0)))


__all__ = ["CostMatrix", "EARTH_RADIUS_KM"]
