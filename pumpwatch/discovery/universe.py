"""Universe selection: the most liquid instruments by 24h turnover."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import Any

import structlog

from pumpwatch.models import InstrumentSnapshot

logger = structlog.get_logger(__name__)


def parse_tickers(records: Iterable[dict[str, Any]]) -> list[InstrumentSnapshot]:
    """Parse raw ticker records, skipping ones without an identifier."""
    snapshots: list[InstrumentSnapshot] = []
    for record in records:
        if not isinstance(record, dict):
            continue
        snap = InstrumentSnapshot.from_okx(record)
        if snap is not None:
            snapshots.append(snap)
    return snapshots


def select_universe(
    tickers: Sequence[InstrumentSnapshot],
    top_n: int,
    suffix_filter: str,
) -> list[InstrumentSnapshot]:
    """Filter by identifier suffix, rank by 24h turnover and keep the top N.

    The sort is stable, so equal turnover keeps input order.
    """
    eligible = [
        t
        for t in tickers
        if t.instrument_id.endswith(suffix_filter)
        and math.isfinite(t.turnover_24h)
        and math.isfinite(t.last)
    ]
    eligible.sort(key=lambda t: t.turnover_24h, reverse=True)
    universe = eligible[: max(0, top_n)]

    logger.debug(
        "universe_selected",
        candidates=len(tickers),
        eligible=len(eligible),
        selected=len(universe),
    )
    return universe
