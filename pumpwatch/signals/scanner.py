"""Pump scanner: one scan invocation from ticker snapshot to ranked signals.

Owns the configuration store, the cooldown store and the three detectors.
"""

from __future__ import annotations

import asyncio

import structlog

from pumpwatch.cache.cooldown import CooldownStore, InMemoryCooldownStore, RedisCooldownStore
from pumpwatch.config import AppConfig, get_config
from pumpwatch.discovery.universe import parse_tickers, select_universe
from pumpwatch.errors import ScanFailedError, TransportError
from pumpwatch.ingestion.rest_client import OkxRESTClient
from pumpwatch.models import InstrumentSnapshot
from pumpwatch.signals.base import BaseDetector
from pumpwatch.signals.momentum.pre_pump import MomentumDetector
from pumpwatch.signals.models import DetectorKind, ScanResult
from pumpwatch.signals.pump.daily_pump import DailyPumpDetector
from pumpwatch.signals.pump.strict_start import StrictPumpStartDetector
from pumpwatch.signals.settings_store import ConfigurationStore, ScanSettings
from pumpwatch.utils.clock import Clock, current_time_ms

logger = structlog.get_logger(__name__)


class PumpScanner:
    """
    Runs a single detector over the current top-N universe.
    A ticker snapshot failure yields a failed ScanResult; candle failures
    only skip the affected instrument.
    """

    def __init__(
        self,
        client: OkxRESTClient,
        config: AppConfig,
        settings: ConfigurationStore | None = None,
        cooldown: CooldownStore | None = None,
        clock: Clock = current_time_ms,
    ) -> None:
        self._client = client
        self._config = config
        self.settings = settings or ConfigurationStore(config.scan)
        self.cooldown = cooldown or InMemoryCooldownStore()

        tuning = {
            "concurrency": config.scan.fetch_concurrency,
            "fetch_timeout": config.scan.fetch_timeout,
            "clock": clock,
        }
        self.detectors: dict[DetectorKind, BaseDetector] = {
            DetectorKind.STRICT: StrictPumpStartDetector(self.cooldown, **tuning),
            DetectorKind.DAILY: DailyPumpDetector(**tuning),
            DetectorKind.MOMENTUM: MomentumDetector(**tuning),
        }

    async def close(self) -> None:
        await self._client.close()
        await self.cooldown.close()

    async def load_universe(self, settings: ScanSettings) -> list[InstrumentSnapshot]:
        try:
            raw = await asyncio.wait_for(
                self._client.get_tickers(self._config.okx.inst_type),
                timeout=self._config.scan.fetch_timeout,
            )
        except (TransportError, asyncio.TimeoutError) as exc:
            reason = str(exc) or type(exc).__name__
            raise ScanFailedError(f"ticker snapshot unavailable: {reason}") from exc

        return select_universe(parse_tickers(raw), settings.top_n, self._config.okx.suffix_filter)

    async def scan(self, kind: DetectorKind | str, top_k: int | None = None) -> ScanResult:
        """Run one detector. `top_k` bounds the ranked reports (daily, momentum)."""
        kind = DetectorKind(kind)
        settings = self.settings.get_effective_configuration()
        detector = self.detectors[kind]

        try:
            universe = await self.load_universe(settings)
        except ScanFailedError as exc:
            logger.error("scan_failed", detector=kind.value, error=str(exc))
            return ScanResult(detector=kind, ok=False, error=str(exc))

        limit = None if kind is DetectorKind.STRICT else (top_k or self._config.scan.report_top_k)
        signals, stats = await detector.detect_with_stats(
            settings, universe, self._client.get_candles, limit=limit
        )

        logger.info(
            "scan_complete",
            detector=kind.value,
            universe=len(universe),
            signals=len(signals),
            skipped=stats.skipped,
        )
        return ScanResult(
            detector=kind,
            signals=signals,
            universe_size=len(universe),
            skipped=stats.skipped,
        )


async def build_scanner(config: AppConfig | None = None) -> PumpScanner:
    """Wire a scanner from configuration, picking the cooldown backend."""
    config = config or get_config()
    client = OkxRESTClient(config.okx)

    cooldown: CooldownStore
    if config.scan.cooldown_backend.lower() == "redis":
        cooldown = await RedisCooldownStore.connect(config.redis)
    else:
        cooldown = InMemoryCooldownStore()

    return PumpScanner(client, config, cooldown=cooldown)
