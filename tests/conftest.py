"""Shared test fixtures for the pumpwatch test suite."""

from __future__ import annotations

import pytest

from pumpwatch.models import InstrumentSnapshot
from pumpwatch.signals.settings_store import ConfigurationStore, ScanSettings


@pytest.fixture
def store() -> ConfigurationStore:
    """Configuration store with compiled-in defaults only."""
    return ConfigurationStore({})


@pytest.fixture
def settings(store: ConfigurationStore) -> ScanSettings:
    return store.get_effective_configuration()


@pytest.fixture
def sample_ticker_records() -> list[dict]:
    """Sample /api/v5/market/tickers data rows."""
    return [
        {"instId": "BTC-USDT-SWAP", "last": "65000.1", "volCcy24h": "120000"},
        {"instId": "ETH-USDT-SWAP", "last": "3200.5", "volCcy24h": "900000"},
        {"instId": "DOGE-USDT-SWAP", "last": "0.12", "volCcy24h": "900000"},
        {"instId": "BTC-USD-SWAP", "last": "65000.0", "volCcy24h": "5000000"},
        {"instId": "XRP-USDT-SWAP", "last": "0.5", "volCcy24h": ""},
        {"last": "1", "volCcy24h": "1"},
    ]


@pytest.fixture
def snapshot() -> InstrumentSnapshot:
    return InstrumentSnapshot(instrument_id="PEPE-USDT-SWAP", last=106.0, turnover_24h=1_000_000.0)
