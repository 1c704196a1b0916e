"""Runtime-tunable scan configuration: defaults, overrides and validation."""

from __future__ import annotations

import math
from collections.abc import Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import structlog
from pydantic import BaseModel, Field

from pumpwatch.config import ScanDefaults
from pumpwatch.signals.config import (
    BAR_MINUTES,
    DEFAULT_BAR,
    DEFAULT_TIMEZONE,
    OVERRIDABLE_KEYS,
    PARAMETERS,
    ParamSpec,
)

logger = structlog.get_logger(__name__)

_BAR_LOOKUP = {bar.lower(): bar for bar in BAR_MINUTES}


class ScanSettings(BaseModel):
    """Validated, effective configuration handed to the detectors."""

    top_n: int
    bar: str
    window_min: int
    pump_pct: float
    vol_mult: float
    cooldown_min: int
    daily_pump_pct: float
    momentum_pct: float
    timezone: str

    model_config = {"frozen": True}

    @property
    def bar_minutes(self) -> int:
        return BAR_MINUTES[self.bar]

    def as_parameters(self) -> dict[str, int | float | str]:
        return {
            "TOP_N": self.top_n,
            "BAR": self.bar,
            "WINDOW_MIN": self.window_min,
            "PUMP_PCT": self.pump_pct,
            "VOL_MULT": self.vol_mult,
            "COOLDOWN_MIN": self.cooldown_min,
            "DAILY_PUMP_PCT": self.daily_pump_pct,
            "MOM_PCT": self.momentum_pct,
            "TIMEZONE": self.timezone,
        }


class OverrideResult(BaseModel):
    """Outcome of one apply_overrides call."""

    applied: dict[str, int | float | str] = Field(default_factory=dict)
    not_applied: list[str] = Field(default_factory=list)


class ConfigurationStore:
    """
    Holds the default layer and the process-lifetime override layer.
    Every read goes through validation, so callers only ever see values
    inside their declared ranges.
    """

    def __init__(self, defaults: ScanDefaults | Mapping[str, int | float | str] | None = None) -> None:
        if defaults is None:
            defaults = ScanDefaults()
        if isinstance(defaults, ScanDefaults):
            defaults = defaults.as_parameters()
        self._defaults: dict[str, int | float | str] = dict(defaults)
        self._overrides: dict[str, int | float | str] = {}

    @property
    def overrides(self) -> dict[str, int | float | str]:
        return dict(self._overrides)

    def get_effective_configuration(self) -> ScanSettings:
        merged = {**self._defaults, **self._overrides}
        return ScanSettings(
            top_n=_clamp(merged.get("TOP_N"), PARAMETERS["TOP_N"]),
            bar=_valid_bar(merged.get("BAR")),
            window_min=_clamp(merged.get("WINDOW_MIN"), PARAMETERS["WINDOW_MIN"]),
            pump_pct=_clamp(merged.get("PUMP_PCT"), PARAMETERS["PUMP_PCT"]),
            vol_mult=_clamp(merged.get("VOL_MULT"), PARAMETERS["VOL_MULT"]),
            cooldown_min=_clamp(merged.get("COOLDOWN_MIN"), PARAMETERS["COOLDOWN_MIN"]),
            daily_pump_pct=_clamp(merged.get("DAILY_PUMP_PCT"), PARAMETERS["DAILY_PUMP_PCT"]),
            momentum_pct=_clamp(merged.get("MOM_PCT"), PARAMETERS["MOM_PCT"]),
            timezone=_valid_timezone(merged.get("TIMEZONE")),
        )

    def apply_overrides(self, changes: Mapping[str, str]) -> OverrideResult:
        """Coerce and store recognised keys; report everything else back."""
        result = OverrideResult()
        for raw_key, raw_value in changes.items():
            key = str(raw_key).strip().upper()
            if key not in OVERRIDABLE_KEYS:
                result.not_applied.append(str(raw_key))
                continue
            value = _coerce(raw_value, PARAMETERS[key])
            if value is None:
                result.not_applied.append(str(raw_key))
                continue
            self._overrides[key] = value
            result.applied[key] = value

        if result.applied or result.not_applied:
            logger.info(
                "overrides_applied",
                applied=result.applied,
                not_applied=result.not_applied,
            )
        return result

    def reset_overrides(self) -> None:
        self._overrides.clear()
        logger.info("overrides_reset")


def _coerce(raw: object, spec: ParamSpec) -> int | float | str | None:
    """Type-coerce an override value, or None if it cannot be."""
    if spec.kind is str:
        text = str(raw).strip()
        return text or None
    try:
        number = float(str(raw).strip())
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    if spec.kind is int:
        return int(number)
    return number


def _clamp(value: object, spec: ParamSpec) -> int | float:
    coerced = _coerce(value, spec) if value is not None else None
    if coerced is None:
        coerced = spec.default
    lo, hi = spec.low, spec.high
    if lo is not None and coerced < lo:
        coerced = lo
    if hi is not None and coerced > hi:
        coerced = hi
    return spec.kind(coerced)


def _valid_bar(value: object) -> str:
    if value is None:
        return DEFAULT_BAR
    return _BAR_LOOKUP.get(str(value).strip().lower(), DEFAULT_BAR)


def _valid_timezone(value: object) -> str:
    if not value:
        return DEFAULT_TIMEZONE
    try:
        ZoneInfo(str(value))
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return DEFAULT_TIMEZONE
    return str(value)
