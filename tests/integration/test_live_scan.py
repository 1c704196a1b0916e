"""Integration tests against live services.

Requires a running Redis and network access to OKX. Skipped by default.
Run with: PUMPWATCH_LIVE_TESTS=1 pytest tests/integration -v
"""

from __future__ import annotations

from pumpwatch.cache.cooldown import RedisCooldownStore
from pumpwatch.ingestion.rest_client import OkxRESTClient
from pumpwatch.signals.models import DetectorKind
from pumpwatch.signals.scanner import PumpScanner
from pumpwatch.utils.clock import current_time_ms


class TestRedisCooldown:
    async def test_suppress_round_trip(self, live_config) -> None:
        store = await RedisCooldownStore.connect(live_config.redis)
        now = current_time_ms()
        try:
            await store.suppress("INTEGRATION-USDT-SWAP", now, 1)
            assert await store.is_suppressed("INTEGRATION-USDT-SWAP", now)
            assert not await store.is_suppressed("INTEGRATION-USDT-SWAP", now + 60_000)
        finally:
            await store.close()


class TestLiveScan:
    async def test_daily_scan_against_okx(self, live_config) -> None:
        scanner = PumpScanner(OkxRESTClient(live_config.okx), live_config)
        scanner.settings.apply_overrides({"TOP_N": "10", "DAILY_PUMP_PCT": "0.5"})
        try:
            result = await scanner.scan(DetectorKind.DAILY, top_k=3)
        finally:
            await scanner.close()

        assert result.ok, result.error
        assert result.universe_size == 10
        assert len(result.signals) <= 3
        pcts = [s.metrics["pct"] for s in result.signals]
        assert pcts == sorted(pcts, reverse=True)
