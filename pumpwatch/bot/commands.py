"""Chat command handling for the Telegram bot.

Turns one Telegram update into zero or more replies. Scans and
configuration changes are restricted to the owner chat (CHAT_ID).
"""

from __future__ import annotations

from typing import Any, NamedTuple

import structlog

from pumpwatch.bot.formatting import format_scan_result, format_status
from pumpwatch.config import AppConfig
from pumpwatch.signals.models import DetectorKind
from pumpwatch.signals.scanner import PumpScanner

logger = structlog.get_logger(__name__)

HELP_TEXT = "Commands: /start, /status, /scan, /pumps [N], /momentum [N], /set KEY=VALUE, /reset"


class Reply(NamedTuple):
    chat_id: int | str
    text: str


def parse_assignments(args: list[str]) -> dict[str, str]:
    """Parse `KEY=VALUE` tokens; tokens without '=' map to an empty value."""
    changes: dict[str, str] = {}
    for token in args:
        key, _, value = token.partition("=")
        if key:
            changes[key] = value
    return changes


def _parse_top_k(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        value = int(args[0])
    except ValueError:
        return None
    return value if value > 0 else None


class CommandHandler:
    """Dispatches chat commands against a shared PumpScanner."""

    def __init__(self, scanner: PumpScanner, config: AppConfig) -> None:
        self._scanner = scanner
        self._config = config

    async def handle_update(self, update: dict[str, Any]) -> list[Reply]:
        msg = update.get("message") or update.get("edited_message") or {}
        chat_id = (msg.get("chat") or {}).get("id")
        if chat_id is None:
            return []

        text = (msg.get("text") or "").strip()
        command, *args = text.split() or [""]
        # "/scan@my_bot" addresses a specific bot in group chats
        command = command.split("@", 1)[0].lower()

        logger.info("command_received", chat_id=chat_id, command=command)

        if command == "/start":
            return [Reply(chat_id, self._start_text(chat_id))]
        if command == "/status":
            return [Reply(chat_id, self._status_text())]

        if command in {"/scan", "/pumps", "/momentum", "/set", "/reset"}:
            denied = self._authorize(chat_id)
            if denied is not None:
                return [Reply(chat_id, denied)]

        if command == "/scan":
            return await self._run_scan(chat_id, DetectorKind.STRICT, None)
        if command == "/pumps":
            return await self._run_scan(chat_id, DetectorKind.DAILY, _parse_top_k(args))
        if command == "/momentum":
            return await self._run_scan(chat_id, DetectorKind.MOMENTUM, _parse_top_k(args))
        if command == "/set":
            return [Reply(chat_id, self._apply_set(args))]
        if command == "/reset":
            self._scanner.settings.reset_overrides()
            return [Reply(chat_id, "Overrides cleared. Back to defaults ✅")]

        return [Reply(chat_id, HELP_TEXT)]

    def _authorize(self, chat_id: int | str) -> str | None:
        owner = self._config.telegram.owner_chat_id
        if not owner:
            return "Set CHAT_ID in the environment first (you got it from /start)."
        if str(chat_id) != str(owner):
            logger.warning("command_denied", chat_id=chat_id)
            return "Access denied."
        return None

    def _start_text(self, chat_id: int | str) -> str:
        return (
            f"Ready ✅\n"
            f"Your chat_id: {chat_id}\n\n"
            f"1) Set CHAT_ID={chat_id} in the environment\n"
            f"2) Send /scan to scan OKX\n\n"
            f"Tunable: TOP_N, BAR, WINDOW_MIN, PUMP_PCT, VOL_MULT, COOLDOWN_MIN, DAILY_PUMP_PCT, MOM_PCT"
        )

    def _status_text(self) -> str:
        settings = self._scanner.settings.get_effective_configuration()
        return format_status(
            settings.as_parameters(),
            self._scanner.settings.overrides,
            self._config.okx.inst_type,
        )

    def _apply_set(self, args: list[str]) -> str:
        changes = parse_assignments(args)
        if not changes:
            return "Usage: /set KEY=VALUE [KEY=VALUE ...]"
        result = self._scanner.settings.apply_overrides(changes)
        lines = []
        if result.applied:
            lines.append("Applied: " + ", ".join(f"{k}={v}" for k, v in result.applied.items()))
        if result.not_applied:
            lines.append("Not applied: " + ", ".join(result.not_applied))
        lines.append("")
        lines.append(self._status_text())
        return "\n".join(lines)

    async def _run_scan(self, chat_id: int | str, kind: DetectorKind, top_k: int | None) -> list[Reply]:
        result = await self._scanner.scan(kind, top_k=top_k)
        return [Reply(chat_id, format_scan_result(result))]
