"""Tunable parameter table and fixed constants for the pump detectors."""

from __future__ import annotations

from typing import NamedTuple


class ParamSpec(NamedTuple):
    kind: type
    default: int | float | str
    low: float | None = None
    high: float | None = None
    overridable: bool = True


BAR_MINUTES = {
    "1m": 1,
    "3m": 3,
    "5m": 5,
    "15m": 15,
    "30m": 30,
    "1H": 60,
    "2H": 120,
    "4H": 240,
}

DEFAULT_BAR = "1m"
DEFAULT_TIMEZONE = "Asia/Hong_Kong"

PARAMETERS: dict[str, ParamSpec] = {
    "TOP_N": ParamSpec(int, 50, 10, 200),
    "BAR": ParamSpec(str, DEFAULT_BAR),
    "WINDOW_MIN": ParamSpec(int, 5, 1, 30),
    "PUMP_PCT": ParamSpec(float, 3.0, 0.2, 50),
    "VOL_MULT": ParamSpec(float, 3.0, 1, 50),
    "COOLDOWN_MIN": ParamSpec(int, 15, 0, 240),
    "DAILY_PUMP_PCT": ParamSpec(float, 10.0, 0.5, 200),
    "MOM_PCT": ParamSpec(float, 1.5, 0.2, 50),
    "TIMEZONE": ParamSpec(str, DEFAULT_TIMEZONE, overridable=False),
}

OVERRIDABLE_KEYS = frozenset(k for k, spec in PARAMETERS.items() if spec.overridable)

STRICT_PUMP_CONFIG = {
    "bar": "1m",
    "candle_limit": 60,
    "min_baseline": 10,
    "min_candles": 10,
    "history_padding": 5,
}

DAILY_PUMP_CONFIG = {
    "max_rows": 300,
    "min_rows": 2,
}

MOMENTUM_CONFIG = {
    "candle_limit": 60,
    "min_candles": 24,
    "short_window": 3,
    "breakout_lookback": 12,
    "volume_baseline": 24,
    "momentum_weight": 0.7,
    "volume_weight": 0.3,
}
