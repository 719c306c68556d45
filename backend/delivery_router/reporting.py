from __future__ import annotations

from collections.abc import Mapping

from .road_network import RoadNetwork
from .route_optimizer import is_reachable


def _format_distance(distance: float) -> str:
    if not is_reachable(distance):
        return "unreachable"
    return f"{round(float(distance), 6)} units"


def route_distance_lines(network: RoadNetwork, distances: Mapping[int, float]) -> list[str]:
    return [
        f"Location {network.location_name(loc_id)}: {_format_distance(distances[loc_id])}"
        for loc_id in sorted(distances)
    ]


def format_route_distances(
    network: RoadNetwork,
    distances: Mapping[int, float],
    *,
    title: str | None = None,
) -> str:
    lines = route_distance_lines(network, distances)
    if title:
        lines.insert(0, f"Optimized route distances ({title}):")
    return "\n".join(lines)
