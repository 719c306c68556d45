from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Sequence

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from delivery_router.demo_network import DEMO_SCENARIOS, demo_road_network
from delivery_router.models import FactorToggles
from delivery_router.reporting import format_route_distances
from delivery_router.road_network import RoadNetwork, road_network_from_payload
from delivery_router.route_optimizer import find_optimal_route
from delivery_router.settings import settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Print least-cost distances from one origin under risk factor toggles."
    )
    parser.add_argument("--graph-json", default=None, help="Network JSON with 'locations' and 'edges'.")
    parser.add_argument("--origin-id", type=int, default=None)
    parser.add_argument("--no-traffic", action="store_true")
    parser.add_argument("--no-weather", action="store_true")
    parser.add_argument("--no-hazards", action="store_true")
    parser.add_argument("--no-elevation", action="store_true")
    return parser


def load_network_from_json(path: str) -> RoadNetwork:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("network JSON must be an object")
    return road_network_from_payload(payload)


def _custom_scenario_requested(args: argparse.Namespace) -> bool:
    return bool(
        args.graph_json
        or args.origin_id is not None
        or args.no_traffic
        or args.no_weather
        or args.no_hazards
        or args.no_elevation
    )


def run_scenarios(args: argparse.Namespace) -> str:
    network = load_network_from_json(args.graph_json) if args.graph_json else demo_road_network()
    origin_id = args.origin_id if args.origin_id is not None else settings.default_origin_id

    if not _custom_scenario_requested(args):
        scenarios = list(DEMO_SCENARIOS)
    else:
        toggles = FactorToggles(
            consider_traffic=not args.no_traffic,
            consider_weather=not args.no_weather,
            consider_hazards=not args.no_hazards,
            consider_elevation=not args.no_elevation,
        )
        enabled = [name.removeprefix("consider_") for name, on in toggles.model_dump().items() if on]
        title = f"considering {', '.join(enabled)}" if enabled else "baseline only"
        scenarios = [(title, toggles)]

    blocks = [
        format_route_distances(network, find_optimal_route(network, origin_id, toggles), title=title)
        for title, toggles in scenarios
    ]
    return "\n\n".join(blocks)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    try:
        output = run_scenarios(args)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
