"""Common types and helpers shared across models."""

import math
from datetime import UTC, datetime
from typing import TypeAlias
from zoneinfo import ZoneInfo

CycleId: TypeAlias = str

PLACEHOLDER = "–"  # Shown wherever a value is unknown


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def local_now(timezone: str) -> datetime:
    """Current wall-clock time in the forecast timezone."""
    return datetime.now(ZoneInfo(timezone))


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))
