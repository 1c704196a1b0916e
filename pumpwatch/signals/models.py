"""Signal data models returned by the pump detectors and the scanner."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class DetectorKind(str, Enum):
    STRICT = "strict"  # Pump starting right now, gated by cooldown
    DAILY = "daily"  # Largest excursion since the civil-day anchor
    MOMENTUM = "momentum"  # Early acceleration, no cooldown


class SignalRecord(BaseModel):
    """One instrument that passed a detector's thresholds."""

    instrument_id: str
    signal_type: DetectorKind
    metrics: dict[str, float] = Field(default_factory=dict)
    ts: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))

    def metric(self, name: str) -> float:
        return self.metrics[name]

    def to_payload(self) -> str:
        return self.model_dump_json()


class ScanResult(BaseModel):
    """Outcome of one scan invocation.

    `ok` is False only when the scan could not start (ticker snapshot
    unavailable); per-instrument fetch failures are counted in `skipped`.
    """

    detector: DetectorKind
    ok: bool = True
    error: str | None = None
    signals: list[SignalRecord] = Field(default_factory=list)
    universe_size: int = 0
    skipped: int = 0
