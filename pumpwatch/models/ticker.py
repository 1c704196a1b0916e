"""Pydantic model for one row of the exchange ticker snapshot."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel


class InstrumentSnapshot(BaseModel):
    """Last price and 24h turnover for a tradable instrument.

    `turnover_24h` may be non-finite when the exchange sends an empty field;
    the universe selector drops those rows.
    """

    instrument_id: str
    last: float
    turnover_24h: float

    model_config = {"frozen": True}

    @classmethod
    def from_okx(cls, record: dict[str, Any]) -> InstrumentSnapshot | None:
        """Build from an OKX /market/tickers record, or None if unusable."""
        inst_id = record.get("instId")
        if not isinstance(inst_id, str) or not inst_id:
            return None
        return cls(
            instrument_id=inst_id,
            last=_num(record.get("last")),
            turnover_24h=_num(record.get("volCcy24h")),
        )


def _num(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan
