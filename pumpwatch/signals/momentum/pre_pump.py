"""Momentum (Pre-Pump) Detector: early acceleration before a strict pump.

Uses a 3-bar momentum window, a 24-bar turnover baseline and a 12-bar
breakout lookback. No cooldown: an instrument qualifying on consecutive
scans is showing sustained acceleration.
"""

from __future__ import annotations

from pumpwatch.models import Candle, InstrumentSnapshot
from pumpwatch.signals.base import BaseDetector, pct_change
from pumpwatch.signals.config import MOMENTUM_CONFIG
from pumpwatch.signals.models import DetectorKind, SignalRecord
from pumpwatch.signals.settings_store import ScanSettings


def momentum_metrics(candles: list[Candle]) -> dict[str, float | bool] | None:
    n = len(candles)
    if n < MOMENTUM_CONFIG["min_candles"]:
        return None

    short = MOMENTUM_CONFIG["short_window"]
    recent = candles[n - short:]
    baseline = candles[max(0, n - short - MOMENTUM_CONFIG["volume_baseline"]): n - short]

    first_open = recent[0].open
    if first_open <= 0 or not baseline:
        return None
    last_close = recent[-1].close

    avg_turnover = sum(c.turnover for c in baseline) / len(baseline)
    expected = avg_turnover * short
    vol_ratio = sum(c.turnover for c in recent) / expected if expected > 0 else 0.0

    lookback_high = max(c.high for c in candles[n - MOMENTUM_CONFIG["breakout_lookback"]:])

    return {
        "pct": pct_change(first_open, last_close),
        "vol_ratio": vol_ratio,
        "breakout": last_close >= lookback_high,
    }


def momentum_score(pct: float, vol_ratio: float) -> float:
    return MOMENTUM_CONFIG["momentum_weight"] * pct + MOMENTUM_CONFIG["volume_weight"] * vol_ratio


class MomentumDetector(BaseDetector):
    """Qualifies on mom% >= MOM_PCT, volume ratio >= VOL_MULT and a breakout."""

    DETECTOR_KIND = DetectorKind.MOMENTUM

    def candle_request(self, settings: ScanSettings, now: int) -> tuple[str, int]:
        return settings.bar, MOMENTUM_CONFIG["candle_limit"]

    def evaluate(
        self,
        instrument: InstrumentSnapshot,
        candles: list[Candle],
        settings: ScanSettings,
        now: int,
    ) -> SignalRecord | None:
        metrics = momentum_metrics(candles)
        if metrics is None:
            return None

        qualifies = (
            metrics["pct"] >= settings.momentum_pct
            and metrics["vol_ratio"] >= settings.vol_mult
            and metrics["breakout"]
        )
        if not qualifies:
            return None

        return SignalRecord(
            instrument_id=instrument.instrument_id,
            signal_type=self.DETECTOR_KIND,
            metrics={
                "pct": round(metrics["pct"], 4),
                "vol_ratio": round(metrics["vol_ratio"], 4),
                "score": round(momentum_score(metrics["pct"], metrics["vol_ratio"]), 4),
                "last": instrument.last,
            },
        )

    def score(self, record: SignalRecord) -> float:
        return record.metrics["score"]
