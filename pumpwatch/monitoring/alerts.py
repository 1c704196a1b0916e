"""Telegram Bot API client: chunked message delivery and update polling."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from pumpwatch.config import TelegramConfig
from pumpwatch.errors import TransportError

logger = structlog.get_logger(__name__)


def chunk_text(text: str, max_len: int) -> list[str]:
    """Split text into pieces of at most `max_len` characters."""
    if max_len <= 0:
        raise ValueError("max_len must be positive")
    return [text[i:i + max_len] for i in range(0, len(text), max_len)]


class TelegramNotifier:
    """
    Sends messages via the Telegram Bot API.
    Long texts are split to stay under the message size limit.
    Delivery failures are logged, never raised to the scan.
    """

    def __init__(self, config: TelegramConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=f"{config.api_base_url.rstrip('/')}/bot{config.bot_token}",
            timeout=config.poll_timeout + 10.0,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def send_message(self, chat_id: int | str, text: str) -> int:
        """Send `text` in chunks; return how many chunks were accepted."""
        if not self._config.bot_token:
            logger.warning("no_telegram_token_configured", chat_id=chat_id)
            return 0

        sent = 0
        for chunk in chunk_text(text, self._config.chunk_size):
            try:
                response = await self._client.post(
                    "/sendMessage",
                    json={
                        "chat_id": chat_id,
                        "text": chunk,
                        "disable_web_page_preview": True,
                    },
                )
            except httpx.HTTPError:
                logger.exception("telegram_send_error", chat_id=chat_id)
                continue

            if response.status_code != 200:
                logger.error(
                    "telegram_send_failed",
                    status=response.status_code,
                    body=response.text,
                )
                continue
            sent += 1

        return sent

    async def get_updates(self, offset: int | None = None) -> list[dict[str, Any]]:
        """Long-poll getUpdates.

        httpx errors and unreadable bodies (TransportError) are raised to the
        polling loop.
        """
        params: dict[str, Any] = {"timeout": self._config.poll_timeout}
        if offset is not None:
            params["offset"] = offset
        response = await self._client.get("/getUpdates", params=params)
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError("Telegram returned invalid JSON for getUpdates", path="/getUpdates") from exc
        if not isinstance(payload, dict):
            raise TransportError("Telegram returned unexpected payload for getUpdates", path="/getUpdates")
        if not payload.get("ok"):
            logger.error("telegram_updates_not_ok", body=payload)
            return []
        return payload.get("result", [])
