"""Telegram long-polling loop: fetch updates, dispatch commands, send replies."""

from __future__ import annotations

import asyncio

import httpx
import structlog

from pumpwatch.bot.commands import CommandHandler
from pumpwatch.config import AppConfig, get_config
from pumpwatch.errors import TransportError
from pumpwatch.monitoring.alerts import TelegramNotifier
from pumpwatch.monitoring.log_config import configure_logging
from pumpwatch.signals.scanner import build_scanner

logger = structlog.get_logger(__name__)

RETRY_DELAY = 5.0


class BotPoller:
    """Owns the update offset and feeds each update to the command handler."""

    def __init__(self, notifier: TelegramNotifier, handler: CommandHandler) -> None:
        self._notifier = notifier
        self._handler = handler
        self._offset: int | None = None

    async def poll_once(self) -> int:
        """Process one batch of updates; return how many were handled."""
        updates = await self._notifier.get_updates(self._offset)
        for update in updates:
            update_id = update.get("update_id")
            if isinstance(update_id, int):
                self._offset = update_id + 1
            try:
                replies = await self._handler.handle_update(update)
            except Exception:
                logger.exception("update_handling_error", update_id=update_id)
                continue
            for reply in replies:
                await self._notifier.send_message(reply.chat_id, reply.text)
        return len(updates)

    async def run(self) -> None:
        logger.info("bot_poller_started")
        while True:
            try:
                await self.poll_once()
            except (httpx.HTTPError, TransportError):
                logger.exception("telegram_poll_error")
                await asyncio.sleep(RETRY_DELAY)


async def main(config: AppConfig | None = None) -> None:
    """Entry point for the bot process."""
    config = config or get_config()
    configure_logging(config.logging)

    scanner = await build_scanner(config)
    notifier = TelegramNotifier(config.telegram)
    poller = BotPoller(notifier, CommandHandler(scanner, config))

    try:
        await poller.run()
    finally:
        await notifier.close()
        await scanner.close()


if __name__ == "__main__":
    asyncio.run(main())
