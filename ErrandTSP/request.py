"""Route planning for errand requests.

A request names an origin, an optional destination and a list of waypoints,
each with ``lat``, ``lng`` and an optional ``group``::

    {
        "algorithm": "tsp",
        "data": {
            "origin": {"lat": 51.5, "lng": -0.12, "group": 0},
            "destination": {"lat": 51.5, "lng": -0.12, "group": 0},
            "waypoints": [{"lat": 51.51, "lng": -0.1, "group": 1}, ...]
        }
    }

The origin becomes node 0, waypoint ``i`` becomes node ``i + 1`` and edge
costs are great-circle distances in kilometres. The response is the list of
points in visiting order, starting at the origin and ending at the
destination (the origin again when none is given).
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from ErrandTSP.core import GtspSolver, TspSolver
from ErrandTSP.errors import InvalidRequestError
from ErrandTSP.graph import CostMatrix

logger = logging.getLogger(__name__)

ALGORITHMS = ("tsp", "gtsp")


def parse_point(raw: Any, label: str) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise InvalidRequestError(f"{label} must be an object with 'lat' and 'lng'")
    try:
        lat = float(raw["lat"])
        lng = float(raw["lng"])
        group = int(raw.get("group", 0))
    except KeyError as exc:
        raise InvalidRequestError(f"{label} is missing {exc.args[0]!r}") from exc
    except (TypeError, ValueError) as exc:
        raise InvalidRequestError(f"{label} has a non-numeric field: {exc}") from exc
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
        raise InvalidRequestError(f"{label} has coordinates out of range: ({lat}, {lng})")
    point = dict(raw)
    point.update({"lat": lat, "lng": lng, "group": group})
    return point


def parse_request(request: Any) -> Dict[str, Any]:
    """Validate a request and return ``algorithm``, ``origin``, ``destination`` and ``waypoints``."""
    if not isinstance(request, dict):
        raise InvalidRequestError("Request must be a JSON object")
    algorithm = request.get("algorithm", "tsp")
    if algorithm not in ALGORITHMS:
        raise InvalidRequestError(f"Unknown algorithm {algorithm!r}; expected one of {ALGORITHMS}")
    data = request.get("data")
    if not isinstance(data, dict):
        raise InvalidRequestError("Request is missing its 'data' object")

    origin = parse_point(data.get("origin"), "origin")
    destination = data.get("destination")
    destination = origin if destination is None else parse_point(destination, "destination")
    waypoints = data.get("waypoints") or []
    if not isinstance(waypoints, list):
        raise InvalidRequestError("'waypoints' must be a list")
    parsed = [parse_point(point, f"waypoint {i}") for i, point in enumerate(waypoints)]
    return {"algorithm": algorithm, "origin": origin, "destination": destination, "waypoints": parsed}


def build_cost_matrix(origin: Dict[str, Any], waypoints: List[Dict[str, Any]]) -> CostMatrix:
    coords = [(origin["lat"], origin["lng"])] + [(p["lat"], p["lng"]) for p in waypoints]
    return CostMatrix.from_coordinates(coords, metric="haversine")


def solve_request(request: Any, solver: TspSolver | None = None) -> List[Dict[str, Any]]:
    """Order the waypoints of an errand request into a route."""
    parsed = parse_request(request)
    origin = parsed["origin"]
    waypoints = parsed["waypoints"]
    matrix = build_cost_matrix(origin, waypoints)

    if parsed["algorithm"] == "gtsp":
        grouped = GtspSolver()
        grouped.load_matrix(matrix)
        grouped.set_starting_point(0)
        for node, point in enumerate([origin] + waypoints):
            grouped.set_group_for_node(node, point["group"])
        return _route_from_tour(grouped.solve_gtsp(), origin, waypoints, parsed["destination"])

    solver = solver or TspSolver()
    solver.load_matrix(matrix)
    solver.set_starting_point(0)
    tour = solver.solve()
    logger.info("Planned route through %d waypoints", len(waypoints))
    return _route_from_tour(tour, origin, waypoints, parsed["destination"])


def _route_from_tour(tour, origin, waypoints, destination) -> List[Dict[str, Any]]:
    points = [origin] + waypoints
    return [dict(points[node]) for node in tour] + [dict(destination)]


__all__ = ["build_cost_matrix", "parse_point", "parse_request", "solve_request"]
