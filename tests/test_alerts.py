"""Unit tests for Telegram delivery."""

from __future__ import annotations

import json

import httpx
import pytest

from pumpwatch.config import TelegramConfig
from pumpwatch.errors import TransportError
from pumpwatch.monitoring.alerts import TelegramNotifier, chunk_text


def _notifier(handler, **overrides) -> TelegramNotifier:
    values = {
        "TELEGRAM_BOT_TOKEN": "123:abc",
        "TELEGRAM_API_BASE_URL": "https://tg.test",
        "TELEGRAM_CHUNK_SIZE": 10,
    }
    values.update(overrides)
    return TelegramNotifier(TelegramConfig(**values), transport=httpx.MockTransport(handler))


class TestChunkText:
    def test_splits_at_max_len(self) -> None:
        assert chunk_text("abcdefghij", 4) == ["abcd", "efgh", "ij"]

    def test_short_text_single_chunk(self) -> None:
        assert chunk_text("hi", 3500) == ["hi"]

    def test_empty_text(self) -> None:
        assert chunk_text("", 10) == []

    def test_rejects_non_positive_length(self) -> None:
        with pytest.raises(ValueError):
            chunk_text("abc", 0)


class TestTelegramNotifier:
    async def test_send_message_chunks(self) -> None:
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/bot123:abc/sendMessage"
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"ok": True})

        notifier = _notifier(handler)
        try:
            sent = await notifier.send_message(42, "x" * 25)
        finally:
            await notifier.close()

        assert sent == 3
        assert [len(b["text"]) for b in bodies] == [10, 10, 5]
        assert all(b["chat_id"] == 42 and b["disable_web_page_preview"] for b in bodies)

    async def test_failed_chunk_not_counted(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(400 if calls == 1 else 200, json={"ok": calls != 1})

        notifier = _notifier(handler)
        try:
            sent = await notifier.send_message(42, "y" * 15)
        finally:
            await notifier.close()
        assert calls == 2
        assert sent == 1

    async def test_no_token_sends_nothing(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        notifier = _notifier(handler, TELEGRAM_BOT_TOKEN="")
        try:
            assert await notifier.send_message(42, "hello") == 0
        finally:
            await notifier.close()

    async def test_get_updates(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/bot123:abc/getUpdates"
            assert request.url.params["offset"] == "7"
            return httpx.Response(200, json={"ok": True, "result": [{"update_id": 7}]})

        notifier = _notifier(handler)
        try:
            assert await notifier.get_updates(offset=7) == [{"update_id": 7}]
        finally:
            await notifier.close()

    async def test_get_updates_http_error_propagates(self) -> None:
        notifier = _notifier(lambda request: httpx.Response(502))
        try:
            with pytest.raises(httpx.HTTPStatusError):
                await notifier.get_updates()
        finally:
            await notifier.close()

    async def test_get_updates_non_json_body_raises_transport_error(self) -> None:
        notifier = _notifier(lambda request: httpx.Response(200, text="<html>bad gateway</html>"))
        try:
            with pytest.raises(TransportError, match="invalid JSON"):
                await notifier.get_updates()
        finally:
            await notifier.close()

    async def test_get_updates_non_object_payload_raises_transport_error(self) -> None:
        notifier = _notifier(lambda request: httpx.Response(200, json=["not", "an", "object"]))
        try:
            with pytest.raises(TransportError):
                await notifier.get_updates()
        finally:
            await notifier.close()
