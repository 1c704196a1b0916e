"""pumpwatch bot -- Run the Telegram command bot (long polling)."""

from __future__ import annotations

import asyncio

from pumpwatch.cli.display import console


def bot() -> None:
    """Answer /scan, /pumps, /momentum, /status and /set from Telegram."""
    from pumpwatch.bot.poller import main

    console.print("[header]Polling Telegram[/header]  (Ctrl+C to stop)")
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        console.print("\n[muted]Bot stopped.[/muted]")
