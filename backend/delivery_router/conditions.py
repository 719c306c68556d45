from __future__ import annotations

# Road condition labels mapped to the additive factors stored on an edge.
# Labels match exactly; anything else (clear weather, flat terrain, no hazard) is neutral.
_WEATHER_IMPACT: dict[str, float] = {
    "rain": 0.3,
    "snow": 0.6,
}

_HAZARD_RISK: dict[str, float] = {
    "high_risk": 0.4,
    "moderate_risk": 0.2,
}

_ELEVATION_IMPACT: dict[str, float] = {
    "hilly": 0.3,
    "mountainous": 0.5,
}


def _lookup(table: dict[str, float], label: object) -> float:
    return table.get(label, 0.0) if isinstance(label, str) else 0.0


def weather_impact(condition: str | None) -> float:
    return _lookup(_WEATHER_IMPACT, condition)


def hazard_risk(condition: str | None) -> float:
    return _lookup(_HAZARD_RISK, condition)


def elevation_impact(terrain: str | None) -> float:
    return _lookup(_ELEVATION_IMPACT, terrain)
