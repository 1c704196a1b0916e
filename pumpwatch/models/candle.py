"""Pydantic model for OHLCV candles and the row normalizer."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from typing import Any

import structlog
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = structlog.get_logger(__name__)

# OKX candle row layout: [ts, o, h, l, c, vol, volCcy, volCcyQuote, confirm]
IDX_TS = 0
IDX_OPEN = 1
IDX_HIGH = 2
IDX_LOW = 3
IDX_CLOSE = 4
IDX_TURNOVER = 6


class Candle(BaseModel):
    """One closed (or still forming) price bar."""

    timestamp: int = Field(description="Bar open time, Unix milliseconds UTC")
    open: float = Field(gt=0)
    high: float = Field(gt=0)
    low: float = Field(gt=0)
    close: float = Field(gt=0)
    turnover: float = Field(ge=0)

    model_config = {"frozen": True}

    @field_validator("open", "high", "low", "close", "turnover")
    @classmethod
    def _finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("must be finite")
        return v

    @property
    def time(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp / 1000, tz=timezone.utc)

    @classmethod
    def from_okx_row(cls, row: Sequence[Any]) -> Candle | None:
        """Parse a raw OKX candle row. Returns None for malformed rows."""
        if len(row) <= IDX_TURNOVER:
            return None
        ts = _to_float(row[IDX_TS])
        if not math.isfinite(ts):
            return None
        try:
            return cls(
                timestamp=int(ts),
                open=_to_float(row[IDX_OPEN]),
                high=_to_float(row[IDX_HIGH]),
                low=_to_float(row[IDX_LOW]),
                close=_to_float(row[IDX_CLOSE]),
                turnover=_to_float(row[IDX_TURNOVER]),
            )
        except ValidationError:
            return None


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def normalize_candles(raw_rows: Iterable[Sequence[Any]] | None) -> list[Candle]:
    """Convert raw rows into candles sorted ascending by timestamp.

    Malformed rows are dropped. Duplicate timestamps are kept as delivered,
    and the newest row may be an unclosed bar.
    """
    candles: list[Candle] = []
    dropped = 0
    for row in raw_rows or []:
        candle = Candle.from_okx_row(row) if isinstance(row, (list, tuple)) else None
        if candle is None:
            dropped += 1
            continue
        candles.append(candle)

    if dropped:
        logger.debug("candle_rows_dropped", dropped=dropped, kept=len(candles))

    candles.sort(key=lambda c: c.timestamp)
    return candles
