"""Conftest for integration tests: live services are opt-in via environment."""

from __future__ import annotations

import os

import pytest

from pumpwatch.config import get_config


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if os.environ.get("PUMPWATCH_LIVE_TESTS") == "1":
        return
    skip = pytest.mark.skip(reason="set PUMPWATCH_LIVE_TESTS=1 to run against live Redis and OKX")
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(skip)


@pytest.fixture
def live_config():
    return get_config()
