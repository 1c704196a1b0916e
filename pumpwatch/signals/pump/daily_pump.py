"""Daily Cumulative Pump Detector: largest excursion since the day anchor.

A point-in-time report: the same instant and data always give the same
ranking, so nothing is deduplicated.
"""

from __future__ import annotations

from pumpwatch.models import Candle, InstrumentSnapshot
from pumpwatch.signals.base import BaseDetector, pct_change
from pumpwatch.signals.config import DAILY_PUMP_CONFIG
from pumpwatch.signals.models import DetectorKind, SignalRecord
from pumpwatch.signals.settings_store import ScanSettings
from pumpwatch.utils.clock import civil_day_start


def daily_row_limit(bar_minutes: int) -> int:
    """One day's worth of bars, capped to bound fetch volume on fine bars."""
    bars_per_day = 1440 // bar_minutes
    return min(bars_per_day + 1, DAILY_PUMP_CONFIG["max_rows"])


def daily_pump_metrics(candles: list[Candle], anchor: int, now: int) -> dict[str, float] | None:
    today = [c for c in candles if anchor <= c.timestamp <= now]
    if len(today) < DAILY_PUMP_CONFIG["min_rows"]:
        return None

    day_open = today[0].open
    if day_open <= 0:
        return None
    day_high = max(c.high for c in today)

    return {
        "pct": pct_change(day_open, day_high),
        "day_open": day_open,
        "day_high": day_high,
        "last_close": today[-1].close,
    }


class DailyPumpDetector(BaseDetector):
    """Reports instruments up at least DAILY_PUMP_PCT from today's open."""

    DETECTOR_KIND = DetectorKind.DAILY

    def candle_request(self, settings: ScanSettings, now: int) -> tuple[str, int]:
        return settings.bar, daily_row_limit(settings.bar_minutes)

    def evaluate(
        self,
        instrument: InstrumentSnapshot,
        candles: list[Candle],
        settings: ScanSettings,
        now: int,
    ) -> SignalRecord | None:
        anchor = civil_day_start(settings.timezone, now)
        metrics = daily_pump_metrics(candles, anchor, now)
        if metrics is None or metrics["pct"] < settings.daily_pump_pct:
            return None

        return SignalRecord(
            instrument_id=instrument.instrument_id,
            signal_type=self.DETECTOR_KIND,
            metrics={
                "pct": round(metrics["pct"], 4),
                "day_open": metrics["day_open"],
                "day_high": metrics["day_high"],
                "last": instrument.last,
            },
        )

    def score(self, record: SignalRecord) -> float:
        return record.metrics["pct"]
