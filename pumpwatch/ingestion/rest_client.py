"""Async REST API client for the OKX public market endpoints."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from pumpwatch.config import OkxConfig
from pumpwatch.errors import TransportError

logger = structlog.get_logger(__name__)


class OkxRESTClient:
    """Unauthenticated async HTTP client for OKX market data."""

    def __init__(self, config: OkxConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url.rstrip("/"),
            timeout=config.http_timeout,
            headers={"accept": "application/json"},
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> list[Any]:
        """Make a request and unwrap the OKX `data` envelope."""
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise TransportError(f"OKX request failed for {path}: {exc!r}", path=path) from exc

        if response.is_error:
            raise TransportError(
                f"OKX HTTP {response.status_code} for {path}",
                path=path,
                status=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError(f"OKX returned invalid JSON for {path}", path=path) from exc
        if not isinstance(payload, dict):
            raise TransportError(f"OKX returned unexpected payload for {path}", path=path)

        code = str(payload.get("code", "0"))
        if code != "0":
            raise TransportError(
                f"OKX error {code} for {path}: {payload.get('msg', '')}",
                path=path,
                status=response.status_code,
            )
        data = payload.get("data")
        return data if isinstance(data, list) else []

    async def get(self, path: str, params: dict | None = None) -> list[Any]:
        return await self._request("GET", path, params=params)

    async def get_tickers(self, inst_type: str | None = None) -> list[dict]:
        """GET /api/v5/market/tickers"""
        params = {"instType": inst_type or self._config.inst_type}
        return await self.get("/api/v5/market/tickers", params=params)

    async def get_candles(self, inst_id: str, bar: str, limit: int) -> list[list]:
        """GET /api/v5/market/candles (newest first, as delivered by OKX)."""
        params = {"instId": inst_id, "bar": bar, "limit": str(limit)}
        return await self.get("/api/v5/market/candles", params=params)
