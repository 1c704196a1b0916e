"""Unit tests for universe selection."""

from __future__ import annotations

from pumpwatch.discovery.universe import parse_tickers, select_universe
from pumpwatch.models import InstrumentSnapshot

SUFFIX = "-USDT-SWAP"


class TestParseTickers:
    def test_skips_records_without_id(self, sample_ticker_records: list[dict]) -> None:
        snaps = parse_tickers(sample_ticker_records)
        assert len(snaps) == 5
        assert all(s.instrument_id for s in snaps)

    def test_ignores_non_dict_entries(self) -> None:
        assert parse_tickers(["x", None, 3]) == []


class TestSelectUniverse:
    def test_filters_ranks_and_truncates(self, sample_ticker_records: list[dict]) -> None:
        universe = select_universe(parse_tickers(sample_ticker_records), 10, SUFFIX)
        ids = [s.instrument_id for s in universe]
        # BTC-USD-SWAP fails the suffix, XRP has no turnover
        assert ids == ["ETH-USDT-SWAP", "DOGE-USDT-SWAP", "BTC-USDT-SWAP"]

    def test_ties_keep_input_order(self, sample_ticker_records: list[dict]) -> None:
        universe = select_universe(parse_tickers(sample_ticker_records), 2, SUFFIX)
        assert [s.instrument_id for s in universe] == ["ETH-USDT-SWAP", "DOGE-USDT-SWAP"]

    def test_properties_hold(self) -> None:
        tickers = [
            InstrumentSnapshot(instrument_id=f"C{i}{SUFFIX}", last=1.0, turnover_24h=float((i * 37) % 101))
            for i in range(60)
        ] + [InstrumentSnapshot(instrument_id="C-USDC-SWAP", last=1.0, turnover_24h=1e12)]
        universe = select_universe(tickers, 25, SUFFIX)

        assert len(universe) <= 25
        turnovers = [s.turnover_24h for s in universe]
        assert turnovers == sorted(turnovers, reverse=True)
        assert all(s.instrument_id.endswith(SUFFIX) for s in universe)

    def test_deterministic(self, sample_ticker_records: list[dict]) -> None:
        snaps = parse_tickers(sample_ticker_records)
        assert select_universe(snaps, 3, SUFFIX) == select_universe(snaps, 3, SUFFIX)

    def test_empty(self) -> None:
        assert select_universe([], 50, SUFFIX) == []
