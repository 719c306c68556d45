from __future__ import annotations

import time
import uuid
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .cost_model import cost_breakdown
from .demo_network import demo_road_network
from .logging_utils import log_event
from .model_data_errors import ModelDataError, UnknownOriginError, normalize_reason_code
from .models import (
    EdgeCostBreakdown,
    EdgeCostsRequest,
    EdgeCostsResponse,
    LocationDistance,
    NetworkIn,
    RouteDistancesRequest,
    RouteDistancesResponse,
    SearchStats,
)
from .road_network import RoadNetwork, road_network_from_payload, road_network_payload
from .route_optimizer import find_optimal_route_with_stats, is_reachable
from .settings import settings

app = FastAPI(title="Risk-Aware Delivery Route Optimizer", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_detail(exc: ModelDataError) -> dict[str, Any]:
    return {
        "reason_code": normalize_reason_code(exc.reason_code),
        "message": exc.message,
        "details": exc.details or {},
    }


def _resolve_network(network: NetworkIn | None) -> RoadNetwork:
    if network is None:
        return demo_road_network()
    try:
        return road_network_from_payload(network.model_dump())
    except ModelDataError as e:
        raise HTTPException(status_code=422, detail=_error_detail(e)) from e


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/network/demo")
def demo_network() -> dict[str, list[dict[str, Any]]]:
    return road_network_payload(demo_road_network())


@app.post("/route/distances", response_model=RouteDistancesResponse)
def route_distances(req: RouteDistancesRequest) -> RouteDistancesResponse:
    request_id = str(uuid.uuid4())
    t0 = time.perf_counter()
    network = _resolve_network(req.network)
    origin_id = req.origin_id if req.origin_id is not None else settings.default_origin_id

    try:
        distances, stats = find_optimal_route_with_stats(network, origin_id, req.toggles)
    except UnknownOriginError as e:
        raise HTTPException(status_code=404, detail=_error_detail(e)) from e

    rows = [
        LocationDistance(
            location_id=loc_id,
            name=network.location_name(loc_id),
            distance=distance if is_reachable(distance) else None,
            reachable=is_reachable(distance),
        )
        for loc_id, distance in sorted(distances.items())
    ]

    log_event(
        "route_distances_request",
        request_id=request_id,
        origin_id=origin_id,
        toggles=req.toggles.model_dump(),
        custom_network=req.network is not None,
        location_count=len(rows),
        reachable_count=sum(1 for row in rows if row.reachable),
        duration_ms=round((time.perf_counter() - t0) * 1000, 2),
    )

    return RouteDistancesResponse(
        origin_id=origin_id,
        toggles=req.toggles,
        distances=rows,
        stats=SearchStats(**stats),
    )


@app.post("/route/edge-costs", response_model=EdgeCostsResponse)
def edge_costs(req: EdgeCostsRequest) -> EdgeCostsResponse:
    network = _resolve_network(req.network)
    return EdgeCostsResponse(
        toggles=req.toggles,
        edges=[
            EdgeCostBreakdown(from_id=edge.from_id, to_id=edge.to_id, **cost_breakdown(edge, req.toggles))
            for edge in network.edges
        ],
    )
