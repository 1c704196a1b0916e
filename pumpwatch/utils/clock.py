"""Time helpers. Instants are Unix milliseconds UTC throughout pumpwatch."""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

Clock = Callable[[], int]


def current_time_ms() -> int:
    return int(time.time() * 1000)


def civil_day_start(tz_name: str, instant_ms: int) -> int:
    """Start of the civil day in `tz_name` that contains `instant_ms`."""
    tz = ZoneInfo(tz_name)
    local = datetime.fromtimestamp(instant_ms / 1000, tz=timezone.utc).astimezone(tz)
    midnight = local.replace(hour=0, minute=0, second=0, microsecond=0)
    return int(midnight.timestamp() * 1000)
