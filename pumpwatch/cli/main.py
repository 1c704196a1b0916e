"""pumpwatch CLI entry point.

Usage:
    python -m pumpwatch.cli.main [COMMAND] [OPTIONS]

Or via the installed console script:
    pumpwatch [COMMAND] [OPTIONS]
"""

from __future__ import annotations

import typer

from pumpwatch.cli.commands import bot, scan, status

app = typer.Typer(
    name="pumpwatch",
    help="pumpwatch -- OKX perpetual swap pump scanner",
    no_args_is_help=True,
    add_completion=False,
    pretty_exceptions_enable=True,
)

# Register sub-commands from each module.
app.command(name="scan", help="Run a detector against the live universe")(scan.scan)
app.command(name="status", help="Show the effective configuration")(status.status)
app.command(name="bot", help="Run the Telegram command bot")(bot.bot)


if __name__ == "__main__":
    app()
