from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class FactorToggles(BaseModel):
    """Dynamic surcharges layered on top of each edge's baseline cost."""

    consider_traffic: bool = True
    consider_weather: bool = True
    consider_hazards: bool = True
    consider_elevation: bool = True


class LocationIn(BaseModel):
    id: int
    name: str = Field(..., min_length=1)


class EdgeIn(BaseModel):
    from_id: int
    to_id: int
    distance: float = Field(..., gt=0)
    traffic_factor: float = Field(default=0.0, ge=0)
    weather_impact: float | None = Field(default=None, ge=0)
    elevation_impact: float | None = Field(default=None, ge=0)
    hazard_risk: float | None = Field(default=None, ge=0)
    # Condition labels, used only when the matching numeric factor is absent.
    weather: str | None = None
    elevation: str | None = None
    hazard: str | None = None

    @field_validator("distance", "traffic_factor", "weather_impact", "elevation_impact", "hazard_risk")
    @classmethod
    def finite(cls, v: float | None) -> float | None:
        if v is not None and (v != v or v in (float("inf"), float("-inf"))):
            raise ValueError("edge attributes must be finite")
        return v


class NetworkIn(BaseModel):
    locations: list[LocationIn] = Field(..., min_length=1)
    edges: list[EdgeIn] = Field(default_factory=list)


class RouteDistancesRequest(BaseModel):
    origin_id: int | None = None
    toggles: FactorToggles = Field(default_factory=FactorToggles)
    network: NetworkIn | None = None


class LocationDistance(BaseModel):
    location_id: int
    name: str
    distance: float | None
    reachable: bool


class SearchStats(BaseModel):
    settled_nodes: int
    relaxations: int
    stale_entries: int
    unreachable_nodes: int


class RouteDistancesResponse(BaseModel):
    origin_id: int
    toggles: FactorToggles
    distances: list[LocationDistance]
    stats: SearchStats


class EdgeCostsRequest(BaseModel):
    toggles: FactorToggles = Field(default_factory=FactorToggles)
    network: NetworkIn | None = None


class EdgeCostBreakdown(BaseModel):
    from_id: int
    to_id: int
    baseline: float
    traffic_surcharge: float
    weather_surcharge: float
    hazard_surcharge: float
    elevation_surcharge: float
    total: float


class EdgeCostsResponse(BaseModel):
    toggles: FactorToggles
    edges: list[EdgeCostBreakdown]
