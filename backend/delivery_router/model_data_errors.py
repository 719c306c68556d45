from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

FROZEN_REASON_CODES: frozenset[str] = frozenset(
    {
        "unknown_origin",
        "malformed_edge",
        "duplicate_location",
        "invalid_network_payload",
    }
)


@dataclass
class ModelDataError(ValueError):
    reason_code: str
    message: str
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        return self.message


@dataclass
class UnknownOriginError(ModelDataError):
    """Origin id is not a location of the network being searched."""

    reason_code: str = field(default="unknown_origin")
    message: str = field(default="origin location not found")


@dataclass
class MalformedEdgeError(ModelDataError):
    """Edge rejected while building a road network."""

    reason_code: str = field(default="malformed_edge")
    message: str = field(default="malformed edge")


def normalize_reason_code(reason_code: str, *, default: str = "invalid_network_payload") -> str:
    code = str(reason_code or "").strip()
    if code in FROZEN_REASON_CODES:
        return code
    return default
