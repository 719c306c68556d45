from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from .conditions import elevation_impact, hazard_risk, weather_impact
from .cost_model import adjusted_cost
from .model_data_errors import MalformedEdgeError, ModelDataError
from .models import FactorToggles

FACTOR_FIELDS: tuple[str, ...] = ("traffic_factor", "weather_impact", "elevation_impact", "hazard_risk")


@dataclass(frozen=True)
class Location:
    id: int
    name: str


@dataclass(frozen=True)
class RoadEdge:
    """Undirected road segment; every factor adds to the ``(1 + sum)`` distance multiplier."""

    from_id: int
    to_id: int
    distance: float
    traffic_factor: float = 0.0
    weather_impact: float = 0.0
    elevation_impact: float = 0.0
    hazard_risk: float = 0.0

    @property
    def is_self_loop(self) -> bool:
        return self.from_id == self.to_id

    def other_end(self, location_id: int) -> int | None:
        """Endpoint opposite ``location_id``; ``None`` for self-loops and non-incident ids."""
        if self.is_self_loop:
            return None
        if self.from_id == location_id:
            return self.to_id
        if self.to_id == location_id:
            return self.from_id
        return None


@dataclass(frozen=True)
class RoadNetwork:
    locations: dict[int, Location]
    edges: tuple[RoadEdge, ...]
    incidence: dict[int, tuple[RoadEdge, ...]]

    def has_location(self, location_id: int) -> bool:
        return location_id in self.locations

    def incident_edges(self, location_id: int) -> tuple[RoadEdge, ...]:
        return self.incidence.get(location_id, ())

    def location_name(self, location_id: int) -> str:
        location = self.locations.get(location_id)
        return location.name if location is not None else str(location_id)


def _finite_number(value: object) -> float | None:
    if not isinstance(value, (int, float, str, Decimal)) or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _edge_number(value: object) -> float | None:
    # Edges are used as-is by the cost model, so only real numbers are accepted here.
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _validate_edge(edge: RoadEdge, locations: Mapping[int, Location], index: int) -> None:
    missing = [loc_id for loc_id in (edge.from_id, edge.to_id) if loc_id not in locations]
    if missing:
        raise MalformedEdgeError(
            message=f"edge {index} references unknown location id(s) {missing}",
            details={"edge_index": index, "missing_location_ids": missing},
        )
    distance = _edge_number(edge.distance)
    if distance is None or distance <= 0.0:
        raise MalformedEdgeError(
            message=f"edge {index} distance must be a positive finite number, got {edge.distance!r}",
            details={"edge_index": index, "field": "distance"},
        )
    for name in FACTOR_FIELDS:
        raw = getattr(edge, name)
        value = _edge_number(raw)
        if value is None or value < 0.0:
            raise MalformedEdgeError(
                message=f"edge {index} {name} must be a non-negative finite number, got {raw!r}",
                details={"edge_index": index, "field": name},
            )
    # Every toggle only adds cost, so the all-on cost bounds any search over this edge.
    worst_cost = adjusted_cost(edge, FactorToggles())
    if not math.isfinite(worst_cost):
        raise MalformedEdgeError(
            message=f"edge {index} cost overflows for distance {edge.distance!r}",
            details={"edge_index": index, "field": "distance"},
        )


def build_road_network(locations: Iterable[Location], edges: Iterable[RoadEdge]) -> RoadNetwork:
    """Validate inputs and freeze them into a network with a per-location incidence index.

    Raises ``MalformedEdgeError`` for edges that reference unknown locations or carry
    out-of-domain attributes, and ``ModelDataError`` for duplicate location ids.
    """
    by_id: dict[int, Location] = {}
    for location in locations:
        if location.id in by_id:
            raise ModelDataError(
                reason_code="duplicate_location",
                message=f"duplicate location id {location.id}",
                details={"location_id": location.id},
            )
        by_id[location.id] = location

    edge_list = tuple(edges)
    incidence_mut: dict[int, list[RoadEdge]] = {loc_id: [] for loc_id in by_id}
    for index, edge in enumerate(edge_list):
        _validate_edge(edge, by_id, index)
        # Self-loops never relax anything; keep them on the edge list only.
        if edge.is_self_loop:
            continue
        incidence_mut[edge.from_id].append(edge)
        incidence_mut[edge.to_id].append(edge)

    return RoadNetwork(
        locations=by_id,
        edges=edge_list,
        incidence={loc_id: tuple(items) for loc_id, items in incidence_mut.items()},
    )


def edge_from_conditions(
    from_id: int,
    to_id: int,
    distance: float,
    traffic_factor: float,
    *,
    weather: str | None = None,
    elevation: str | None = None,
    hazard: str | None = None,
) -> RoadEdge:
    return RoadEdge(
        from_id=from_id,
        to_id=to_id,
        distance=distance,
        traffic_factor=traffic_factor,
        weather_impact=weather_impact(weather),
        elevation_impact=elevation_impact(elevation),
        hazard_risk=hazard_risk(hazard),
    )


def _parse_location(raw: object, index: int) -> Location:
    if not isinstance(raw, dict) or "id" not in raw:
        raise ModelDataError(
            reason_code="invalid_network_payload",
            message=f"location {index} must be an object with an 'id'",
            details={"location_index": index},
        )
    try:
        loc_id = int(raw["id"])
    except (TypeError, ValueError) as exc:
        raise ModelDataError(
            reason_code="invalid_network_payload",
            message=f"location {index} id must be an integer",
            details={"location_index": index},
        ) from exc
    name = str(raw.get("name") or loc_id)
    return Location(id=loc_id, name=name)


def _parse_edge(raw: object, index: int) -> RoadEdge:
    if not isinstance(raw, dict):
        raise MalformedEdgeError(
            message=f"edge {index} must be an object",
            details={"edge_index": index},
        )
    try:
        from_id = int(raw["from_id"])
        to_id = int(raw["to_id"])
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedEdgeError(
            message=f"edge {index} needs integer 'from_id' and 'to_id'",
            details={"edge_index": index},
        ) from exc

    def _number(key: str, fallback: float) -> float:
        value = raw.get(key)
        if value is None:
            return fallback
        parsed = _finite_number(value)
        if parsed is None:
            raise MalformedEdgeError(
                message=f"edge {index} {key} must be a finite number",
                details={"edge_index": index, "field": key},
            )
        return parsed

    # Explicit numeric factors win over condition labels.
    return RoadEdge(
        from_id=from_id,
        to_id=to_id,
        distance=_number("distance", 0.0),
        traffic_factor=_number("traffic_factor", 0.0),
        weather_impact=_number("weather_impact", weather_impact(raw.get("weather"))),
        elevation_impact=_number("elevation_impact", elevation_impact(raw.get("elevation"))),
        hazard_risk=_number("hazard_risk", hazard_risk(raw.get("hazard"))),
    )


def road_network_from_payload(payload: Mapping[str, Any]) -> RoadNetwork:
    """Build a network from a JSON-shaped ``{"locations": [...], "edges": [...]}`` mapping."""
    raw_locations = payload.get("locations")
    raw_edges = payload.get("edges", [])
    if not isinstance(raw_locations, list) or not isinstance(raw_edges, list):
        raise ModelDataError(
            reason_code="invalid_network_payload",
            message="network payload needs 'locations' and 'edges' lists",
        )
    return build_road_network(
        (_parse_location(raw, idx) for idx, raw in enumerate(raw_locations)),
        [_parse_edge(raw, idx) for idx, raw in enumerate(raw_edges)],
    )


def road_network_payload(network: RoadNetwork) -> dict[str, list[dict[str, Any]]]:
    return {
        "locations": [
            {"id": loc.id, "name": loc.name}
            for loc in sorted(network.locations.values(), key=lambda loc: loc.id)
        ],
        "edges": [
            {
                "from_id": edge.from_id,
                "to_id": edge.to_id,
                "distance": edge.distance,
                "traffic_factor": edge.traffic_factor,
                "weather_impact": edge.weather_impact,
                "elevation_impact": edge.elevation_impact,
                "hazard_risk": edge.hazard_risk,
            }
            for edge in network.edges
        ],
    }
