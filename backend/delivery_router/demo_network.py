from __future__ import annotations

from functools import lru_cache

from .models import FactorToggles
from .road_network import Location, RoadNetwork, build_road_network, edge_from_conditions

DEMO_SCENARIOS: tuple[tuple[str, FactorToggles], ...] = (
    ("with all factors considered", FactorToggles()),
    ("without hazards considered", FactorToggles(consider_hazards=False)),
    (
        "without traffic or weather considered",
        FactorToggles(consider_traffic=False, consider_weather=False),
    ),
)


@lru_cache(maxsize=1)
def demo_road_network() -> RoadNetwork:
    """Four-stop network A..D with a short multi-hop corridor and a direct A-D road."""
    locations = [
        Location(1, "A"),
        Location(2, "B"),
        Location(3, "C"),
        Location(4, "D"),
    ]
    edges = [
        edge_from_conditions(1, 2, 5.0, 0.2, weather="rain", elevation="flat", hazard="no_risk"),
        edge_from_conditions(2, 3, 10.0, 0.3, weather="snow", elevation="hilly", hazard="high_risk"),
        edge_from_conditions(3, 4, 7.0, 0.1, weather="clear", elevation="mountainous", hazard="moderate_risk"),
        edge_from_conditions(1, 4, 15.0, 0.4, weather="rain", elevation="flat", hazard="no_risk"),
    ]
    return build_road_network(locations, edges)
