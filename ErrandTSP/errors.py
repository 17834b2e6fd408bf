from __future__ import annotations


class ErrandTSPError(Exception):
    """Base class for every error raised by ErrandTSP."""


class UninitializedGraphError(ErrandTSPError, RuntimeError):
    """Raised when the graph is used before its node count was set."""


class NodeIndexError(ErrandTSPError, IndexError):
    """Raised when an edge or group refers to a node outside ``[0, node_count)``."""

    def __init__(self, node: int, node_count: int):
        super().__init__(f"Node index {node} out of range for a graph of {node_count} nodes")
        self.node = node
        self.node_count = node_count


class StartingPointNotSetError(ErrandTSPError, RuntimeError):
    """Raised at solve time when no starting point was assigned."""


class StartingPointOutOfRangeError(ErrandTSPError, ValueError):
    """Raised at solve time when the starting point is not a node of the graph."""


class MissingEdgeError(ErrandTSPError, ValueError):
    """Raised when a solve would read an edge cost that was never set."""

    def __init__(self, from_node: int, to_node: int):
        super().__init__(f"Edge cost {from_node} -> {to_node} was never set")
        self.from_node = from_node
        self.to_node = to_node


class UnsupportedOperationError(ErrandTSPError, RuntimeError):
    """Raised when a grouped operation is called on the ungrouped solver."""


class SolverNotImplementedError(ErrandTSPError, NotImplementedError):
    """Raised by declared solving strategies that have no implementation."""


class InvalidRequestError(ErrandTSPError, ValueError):
    """Raised when an errand request payload is malformed."""


__all__ = [
    "ErrandTSPError",
    "InvalidRequestError",
    "MissingEdgeError",
    "NodeIndexError",
    "SolverNotImplementedError",
    "StartingPointNotSetError",
    "StartingPointOutOfRangeError",
    "UninitializedGraphError",
    "UnsupportedOperationError",
]
