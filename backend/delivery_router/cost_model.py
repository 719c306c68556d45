from __future__ import annotations

from typing import TYPE_CHECKING

from .models import FactorToggles

if TYPE_CHECKING:
    from .road_network import RoadEdge

# Congestion penalty: a fixed share of the distance once traffic passes the threshold.
TRAFFIC_SURCHARGE_THRESHOLD = 1.5
TRAFFIC_SURCHARGE_RATIO = 0.2


def baseline_cost(edge: RoadEdge) -> float:
    """Distance scaled by every static factor on the edge; applied regardless of toggles."""
    multiplier = 1.0 + edge.traffic_factor + edge.weather_impact + edge.elevation_impact + edge.hazard_risk
    return edge.distance * multiplier


def predict_traffic_surcharge(edge: RoadEdge) -> float:
    if edge.traffic_factor > TRAFFIC_SURCHARGE_THRESHOLD:
        return TRAFFIC_SURCHARGE_RATIO * edge.distance
    return 0.0


def _surcharges(edge: RoadEdge, toggles: FactorToggles) -> tuple[float, float, float, float]:
    return (
        predict_traffic_surcharge(edge) if toggles.consider_traffic else 0.0,
        edge.weather_impact if toggles.consider_weather else 0.0,
        edge.hazard_risk if toggles.consider_hazards else 0.0,
        edge.elevation_impact if toggles.consider_elevation else 0.0,
    )


def adjusted_cost(edge: RoadEdge, toggles: FactorToggles) -> float:
    traffic, weather, hazard, elevation = _surcharges(edge, toggles)
    return baseline_cost(edge) + traffic + weather + hazard + elevation


def cost_breakdown(edge: RoadEdge, toggles: FactorToggles) -> dict[str, float]:
    """Baseline plus each enabled surcharge.

    Enabled factors are counted a second time on top of the baseline multiplier,
    so a toggle can only ever raise the cost of an edge.
    """
    traffic, weather, hazard, elevation = _surcharges(edge, toggles)
    return {
        "baseline": baseline_cost(edge),
        "traffic_surcharge": traffic,
        "weather_surcharge": weather,
        "hazard_surcharge": hazard,
        "elevation_surcharge": elevation,
        "total": adjusted_cost(edge, toggles),
    }
