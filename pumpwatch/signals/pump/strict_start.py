"""Strict Pump-Start Detector: flags an instrument breaking out right now.

A pump start is a fast window move on outsized turnover that closes above
every high of the lookback. Each firing instrument is put on cooldown so the
same move is only reported once.
"""

from __future__ import annotations

from pumpwatch.cache.cooldown import CooldownStore
from pumpwatch.models import Candle, InstrumentSnapshot
from pumpwatch.signals.base import BaseDetector, pct_change
from pumpwatch.signals.config import STRICT_PUMP_CONFIG
from pumpwatch.signals.models import DetectorKind, SignalRecord
from pumpwatch.signals.settings_store import ScanSettings
from pumpwatch.utils.clock import Clock, current_time_ms


def strict_pump_metrics(candles: list[Candle], window: int) -> dict[str, float | bool] | None:
    """Window move, volume ratio and breakout flag, or None on short history."""
    n = len(candles)
    if n < max(STRICT_PUMP_CONFIG["min_candles"], window + STRICT_PUMP_CONFIG["history_padding"]):
        return None

    recent = candles[n - window:]
    baseline = candles[: n - window]
    if len(recent) < window or len(baseline) < STRICT_PUMP_CONFIG["min_baseline"]:
        return None

    first_open = recent[0].open
    last_close = recent[-1].close
    if first_open <= 0:
        return None

    window_turnover = sum(c.turnover for c in recent)
    baseline_per_window = sum(c.turnover for c in baseline) / (len(baseline) / window)
    vol_ratio = window_turnover / baseline_per_window if baseline_per_window > 0 else 0.0

    prior_high = max(c.high for c in candles[: n - 1])

    return {
        "pct": pct_change(first_open, last_close),
        "vol_ratio": vol_ratio,
        "breakout": last_close > prior_high,
        "prior_high": prior_high,
        "last_close": last_close,
    }


class StrictPumpStartDetector(BaseDetector):
    """
    Fires on pct >= PUMP_PCT, volume ratio >= VOL_MULT and a breakout.

    Suppressed instruments are rejected before their candles are fetched,
    and their cooldown is not refreshed.
    """

    DETECTOR_KIND = DetectorKind.STRICT
    RANKED = False  # alerts keep universe (liquidity) order

    def __init__(
        self,
        cooldown: CooldownStore,
        concurrency: int = 1,
        fetch_timeout: float = 15.0,
        clock: Clock = current_time_ms,
    ) -> None:
        super().__init__(concurrency=concurrency, fetch_timeout=fetch_timeout, clock=clock)
        self.cooldown = cooldown

    def candle_request(self, settings: ScanSettings, now: int) -> tuple[str, int]:
        return STRICT_PUMP_CONFIG["bar"], STRICT_PUMP_CONFIG["candle_limit"]

    async def admit(self, instrument: InstrumentSnapshot, settings: ScanSettings, now: int) -> bool:
        if await self.cooldown.is_suppressed(instrument.instrument_id, now):
            self.logger.debug("cooldown_active", instrument=instrument.instrument_id)
            return False
        return True

    def evaluate(
        self,
        instrument: InstrumentSnapshot,
        candles: list[Candle],
        settings: ScanSettings,
        now: int,
    ) -> SignalRecord | None:
        metrics = strict_pump_metrics(candles, settings.window_min)
        if metrics is None:
            return None

        pumped = (
            metrics["pct"] >= settings.pump_pct
            and metrics["vol_ratio"] >= settings.vol_mult
            and metrics["breakout"]
        )
        if not pumped:
            return None

        return SignalRecord(
            instrument_id=instrument.instrument_id,
            signal_type=self.DETECTOR_KIND,
            metrics={
                "pct": round(metrics["pct"], 4),
                "vol_ratio": round(metrics["vol_ratio"], 4),
                "last": instrument.last,
                "window_min": float(settings.window_min),
                "prior_high": metrics["prior_high"],
            },
        )

    async def on_signal(self, record: SignalRecord, settings: ScanSettings, now: int) -> None:
        await self.cooldown.suppress(record.instrument_id, now, settings.cooldown_min)
        self.logger.info(
            "pump_detected",
            instrument=record.instrument_id,
            pct=record.metrics["pct"],
            vol_ratio=record.metrics["vol_ratio"],
        )
