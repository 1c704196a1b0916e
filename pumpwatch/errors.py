"""Exception hierarchy for pumpwatch.

PumpWatchError (base)
├── TransportError (exchange or messaging request failed)
└── ScanFailedError (a scan could not start, e.g. no ticker snapshot)

Data-quality problems (bad candle rows, short history, non-positive prices)
are never raised; the affected instrument is simply left out of the results.
"""

from __future__ import annotations


class PumpWatchError(Exception):
    """Base exception for all pumpwatch errors."""


class TransportError(PumpWatchError):
    """Raised when an upstream HTTP request fails, times out or returns a
    non-OK payload.

    Attributes
    ----------
    path : str | None
        Request path that failed, if known.
    status : int | None
        HTTP status code, if a response was received.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.status = status


class ScanFailedError(PumpWatchError):
    """Raised when a scan cannot produce a universe to work on."""
