from __future__ import annotations

import math
from decimal import Decimal

import pytest

from delivery_router.demo_network import demo_road_network
from delivery_router.model_data_errors import MalformedEdgeError, ModelDataError
from delivery_router.road_network import (
    Location,
    RoadEdge,
    build_road_network,
    edge_from_conditions,
    road_network_from_payload,
    road_network_payload,
)
from delivery_router.route_optimizer import find_optimal_route


def _locations() -> list[Location]:
    return [Location(1, "A"), Location(2, "B"), Location(3, "C")]


def test_build_indexes_edges_on_both_endpoints() -> None:
    ab = RoadEdge(1, 2, 5.0)
    bc = RoadEdge(2, 3, 7.0)
    network = build_road_network(_locations(), [ab, bc])

    assert network.incident_edges(1) == (ab,)
    assert network.incident_edges(2) == (ab, bc)
    assert network.incident_edges(3) == (bc,)
    assert ab.other_end(1) == 2
    assert ab.other_end(2) == 1
    assert ab.other_end(3) is None


def test_self_loops_are_kept_but_not_indexed() -> None:
    loop = RoadEdge(1, 1, 2.0)
    network = build_road_network(_locations(), [loop])

    assert network.edges == (loop,)
    assert network.incident_edges(1) == ()
    assert loop.other_end(1) is None


def test_edge_to_unknown_location_is_rejected() -> None:
    with pytest.raises(MalformedEdgeError) as excinfo:
        build_road_network(_locations(), [RoadEdge(1, 9, 5.0)])

    assert excinfo.value.reason_code == "malformed_edge"
    assert excinfo.value.details == {"edge_index": 0, "missing_location_ids": [9]}


@pytest.mark.parametrize(
    "edge",
    [
        RoadEdge(1, 2, 0.0),
        RoadEdge(1, 2, -3.0),
        RoadEdge(1, 2, math.inf),
        RoadEdge(1, 2, 5.0, traffic_factor=-0.1),
        RoadEdge(1, 2, 5.0, hazard_risk=math.nan),
        RoadEdge(1, 2, "5"),
        RoadEdge(1, 2, Decimal("5")),
        RoadEdge(1, 2, True),
        RoadEdge(1, 2, 5.0, weather_impact="0.3"),
        RoadEdge(1, 2, 10**400),
        RoadEdge(1, 2, 1e308, traffic_factor=1.0),
    ],
)
def test_out_of_domain_edge_attributes_are_rejected(edge: RoadEdge) -> None:
    with pytest.raises(MalformedEdgeError):
        build_road_network(_locations(), [edge])


def test_duplicate_location_ids_are_rejected() -> None:
    with pytest.raises(ModelDataError) as excinfo:
        build_road_network([Location(1, "A"), Location(1, "A2")], [])
    assert excinfo.value.reason_code == "duplicate_location"


def test_edge_from_conditions_translates_labels() -> None:
    edge = edge_from_conditions(2, 3, 10.0, 0.3, weather="snow", elevation="hilly", hazard="high_risk")
    assert edge == RoadEdge(2, 3, 10.0, 0.3, 0.6, 0.3, 0.4)


def test_payload_prefers_numeric_factors_over_labels() -> None:
    network = road_network_from_payload(
        {
            "locations": [{"id": 1, "name": "A"}, {"id": 2, "name": "B"}],
            "edges": [
                {"from_id": 1, "to_id": 2, "distance": 5, "weather": "rain", "weather_impact": 0.1, "hazard": "high_risk"},
            ],
        }
    )
    edge = network.edges[0]
    assert edge.weather_impact == 0.1
    assert edge.hazard_risk == 0.4
    assert edge.elevation_impact == 0.0
    assert network.location_name(2) == "B"


def test_payload_rejects_bad_shapes() -> None:
    with pytest.raises(ModelDataError) as excinfo:
        road_network_from_payload({"edges": []})
    assert excinfo.value.reason_code == "invalid_network_payload"

    with pytest.raises(MalformedEdgeError):
        road_network_from_payload(
            {"locations": [{"id": 1, "name": "A"}], "edges": [{"from_id": 1, "distance": 2.0}]}
        )

    with pytest.raises(MalformedEdgeError):
        road_network_from_payload(
            {"locations": [{"id": 1}, {"id": 2}], "edges": [{"from_id": 1, "to_id": 2, "distance": "far"}]}
        )


def test_demo_network_payload_round_trips() -> None:
    demo = demo_road_network()
    payload = road_network_payload(demo)

    assert [loc["name"] for loc in payload["locations"]] == ["A", "B", "C", "D"]
    assert payload["edges"][1] == {
        "from_id": 2,
        "to_id": 3,
        "distance": 10.0,
        "traffic_factor": 0.3,
        "weather_impact": 0.6,
        "elevation_impact": 0.3,
        "hazard_risk": 0.4,
    }
    assert road_network_from_payload(payload) == demo


def test_built_edges_always_yield_finite_costs() -> None:
    network = build_road_network(_locations(), [RoadEdge(1, 2, 1e300, traffic_factor=2.0), RoadEdge(2, 3, 4)])

    distances = find_optimal_route(network, 1)
    assert math.isfinite(distances[2])
    assert math.isfinite(distances[3])

    with pytest.raises(MalformedEdgeError) as excinfo:
        build_road_network(_locations(), [RoadEdge(1, 2, 1e308, traffic_factor=1.0)])
    assert excinfo.value.details == {"edge_index": 0, "field": "distance"}
