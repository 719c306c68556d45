from __future__ import annotations

import heapq
import time
from math import inf

from .cost_model import adjusted_cost
from .logging_utils import log_event
from .model_data_errors import UnknownOriginError
from .models import FactorToggles
from .road_network import RoadNetwork

# Distance reported for locations with no path from the origin.
UNREACHED = inf


def is_reachable(distance: float) -> bool:
    return distance < UNREACHED


def find_optimal_route_with_stats(
    network: RoadNetwork,
    origin_id: int,
    toggles: FactorToggles | None = None,
) -> tuple[dict[int, float], dict[str, int]]:
    """Single-source least-cost distances from ``origin_id`` to every location.

    Lazy-deletion Dijkstra: a location is pushed again on every improvement and
    stale heap entries are skipped once the location has been settled. Raises
    ``UnknownOriginError`` before any work when the origin is not in the network.
    """
    if not network.has_location(origin_id):
        raise UnknownOriginError(
            message=f"origin location {origin_id} is not in the road network",
            details={"origin_id": origin_id, "location_count": len(network.locations)},
        )
    toggles = toggles or FactorToggles()
    t0 = time.perf_counter()

    distances: dict[int, float] = {loc_id: UNREACHED for loc_id in network.locations}
    distances[origin_id] = 0.0
    visited: set[int] = set()
    heap: list[tuple[float, int]] = [(0.0, origin_id)]
    relaxations = 0
    stale_entries = 0

    while heap:
        current_cost, current = heapq.heappop(heap)
        if current in visited:
            stale_entries += 1
            continue
        visited.add(current)

        for edge in network.incident_edges(current):
            nxt = edge.other_end(current)
            if nxt is None or nxt in visited:
                continue
            new_cost = current_cost + adjusted_cost(edge, toggles)
            if new_cost < distances[nxt]:
                distances[nxt] = new_cost
                relaxations += 1
                heapq.heappush(heap, (new_cost, nxt))

    stats = {
        "settled_nodes": len(visited),
        "relaxations": relaxations,
        "stale_entries": stale_entries,
        "unreachable_nodes": sum(1 for value in distances.values() if not is_reachable(value)),
    }
    log_event(
        "route_optimized",
        origin_id=origin_id,
        toggles=toggles.model_dump(),
        location_count=len(distances),
        **stats,
        duration_ms=round((time.perf_counter() - t0) * 1000, 3),
    )
    return distances, stats


def find_optimal_route(
    network: RoadNetwork,
    origin_id: int,
    toggles: FactorToggles | None = None,
) -> dict[int, float]:
    distances, _stats = find_optimal_route_with_stats(network, origin_id, toggles)
    return distances
