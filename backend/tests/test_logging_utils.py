from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from delivery_router import logging_utils
from delivery_router.demo_network import demo_road_network
from delivery_router.logging_utils import LOG_FILE_NAME, _parse_level, get_logger, log_event, reset_logger
from delivery_router.route_optimizer import find_optimal_route
from delivery_router.settings import settings


@pytest.fixture()
def fresh_logger(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(settings, "out_dir", str(tmp_path))
    reset_logger()
    yield tmp_path / "logs" / LOG_FILE_NAME
    reset_logger()


def _events(log_path: Path) -> list[dict[str, object]]:
    for handler in get_logger().handlers:
        handler.flush()
    return [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines() if line.strip()]


def test_parse_level_falls_back_to_info() -> None:
    assert _parse_level("debug") == logging.DEBUG
    assert _parse_level("not_a_level") == logging.INFO


def test_get_logger_does_not_duplicate_handlers(fresh_logger: Path) -> None:
    logger1 = get_logger()
    handlers_before = len(logger1.handlers)
    logger2 = get_logger()
    assert logger1 is logger2
    assert len(logger2.handlers) == handlers_before


def test_log_event_writes_json_lines(fresh_logger: Path) -> None:
    log_event("unit_test_event", path="/health", status=200)

    events = _events(fresh_logger)
    assert events[-1]["event"] == "unit_test_event"
    assert events[-1]["status"] == 200
    assert logging_utils.LOGGER is not None


def test_route_search_emits_structured_event(fresh_logger: Path) -> None:
    find_optimal_route(demo_road_network(), 1)

    event = _events(fresh_logger)[-1]
    assert event["event"] == "route_optimized"
    assert event["origin_id"] == 1
    assert event["settled_nodes"] == 4
    assert event["unreachable_nodes"] == 0
