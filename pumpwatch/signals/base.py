"""Base class for the pump detectors: candle fetching, evaluation and ranking."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, NamedTuple

import structlog

from pumpwatch.errors import TransportError
from pumpwatch.models import Candle, InstrumentSnapshot, normalize_candles
from pumpwatch.signals.models import DetectorKind, SignalRecord
from pumpwatch.signals.settings_store import ScanSettings
from pumpwatch.utils.clock import Clock, current_time_ms

CandleFetcher = Callable[[str, str, int], Awaitable[Sequence[Sequence[Any]]]]


class DetectionStats(NamedTuple):
    """Counters for one detect() call."""

    gated: int = 0
    fetched: int = 0
    skipped: int = 0


class BaseDetector(ABC):
    """
    Base class for all detectors.
    Fetches candles for each candidate with bounded concurrency and a
    per-fetch timeout, evaluates them in universe order and ranks the hits.
    """

    DETECTOR_KIND: DetectorKind
    RANKED: bool = True

    def __init__(
        self,
        concurrency: int = 1,
        fetch_timeout: float = 15.0,
        clock: Clock = current_time_ms,
    ) -> None:
        self._concurrency = max(1, concurrency)
        self._fetch_timeout = fetch_timeout
        self._clock = clock
        self.logger = structlog.get_logger().bind(detector=self.DETECTOR_KIND.value)
        self._last_stats = DetectionStats()

    @abstractmethod
    def candle_request(self, settings: ScanSettings, now: int) -> tuple[str, int]:
        """Return the (bar, limit) to fetch for every candidate."""
        ...

    @abstractmethod
    def evaluate(
        self,
        instrument: InstrumentSnapshot,
        candles: list[Candle],
        settings: ScanSettings,
        now: int,
    ) -> SignalRecord | None:
        """Compute the detector statistic; return a record if it qualifies."""
        ...

    def score(self, record: SignalRecord) -> float:
        """Ranking key, higher first."""
        return 0.0

    async def admit(self, instrument: InstrumentSnapshot, settings: ScanSettings, now: int) -> bool:
        """Pre-fetch gate. Rejected instruments are never fetched."""
        return True

    async def on_signal(self, record: SignalRecord, settings: ScanSettings, now: int) -> None:
        """Hook run for each qualifying record, in universe order."""
        return None

    async def detect(
        self,
        settings: ScanSettings,
        tickers: Sequence[InstrumentSnapshot],
        fetch_candles: CandleFetcher,
        limit: int | None = None,
    ) -> list[SignalRecord]:
        """Run the detector over `tickers` and return ranked signal records."""
        records, self._last_stats = await self.detect_with_stats(settings, tickers, fetch_candles, limit)
        return records

    async def detect_with_stats(
        self,
        settings: ScanSettings,
        tickers: Sequence[InstrumentSnapshot],
        fetch_candles: CandleFetcher,
        limit: int | None = None,
    ) -> tuple[list[SignalRecord], DetectionStats]:
        """Like detect(), also returning this call's counters.

        Counters are local to the call, so overlapping scans on one detector
        never see each other's numbers.
        """
        now = self._clock()
        gated = fetched = skipped = 0

        candidates: list[InstrumentSnapshot] = []
        for instrument in tickers:
            if await self.admit(instrument, settings, now):
                candidates.append(instrument)
            else:
                gated += 1

        bar, candle_limit = self.candle_request(settings, now)
        semaphore = asyncio.Semaphore(self._concurrency)

        async def load(instrument: InstrumentSnapshot) -> Sequence[Sequence[Any]] | None:
            async with semaphore:
                return await self._fetch(instrument.instrument_id, bar, candle_limit, fetch_candles)

        # gather preserves input order, so evaluation never depends on completion order
        batches = await asyncio.gather(*(load(i) for i in candidates))

        records: list[SignalRecord] = []
        for instrument, rows in zip(candidates, batches):
            if rows is None:
                skipped += 1
                continue
            fetched += 1
            record = self.evaluate(instrument, normalize_candles(rows), settings, now)
            if record is None:
                continue
            records.append(record)
            await self.on_signal(record, settings, now)

        if self.RANKED:
            records.sort(key=self.score, reverse=True)
        if limit is not None:
            records = records[: max(0, limit)]

        self.logger.info(
            "detection_complete",
            candidates=len(candidates),
            gated=gated,
            fetched=fetched,
            skipped=skipped,
            signals=len(records),
        )
        return records, DetectionStats(gated=gated, fetched=fetched, skipped=skipped)

    async def _fetch(
        self,
        instrument_id: str,
        bar: str,
        limit: int,
        fetch_candles: CandleFetcher,
    ) -> Sequence[Sequence[Any]] | None:
        try:
            return await asyncio.wait_for(
                fetch_candles(instrument_id, bar, limit), timeout=self._fetch_timeout
            )
        except (TransportError, asyncio.TimeoutError) as exc:
            self.logger.warning("candle_fetch_failed", instrument=instrument_id, error=str(exc) or repr(exc))
        except Exception:
            self.logger.exception("candle_fetch_error", instrument=instrument_id)
        return None

    def get_stats(self) -> dict:
        """Counters from the most recent detect() call."""
        return {"detector": self.DETECTOR_KIND.value, **self._last_stats._asdict()}


def pct_change(start: float, end: float) -> float:
    return (end - start) / start * 100.0
