"""pumpwatch scan -- Run one detector against the live OKX universe.

Usage:
    pumpwatch scan                       # strict pump-start scan
    pumpwatch scan daily --top 5         # biggest movers since day open
    pumpwatch scan momentum --set VOL_MULT=2 --set MOM_PCT=1
"""

from __future__ import annotations

import asyncio
from typing import Optional

import typer

from pumpwatch.bot.commands import parse_assignments
from pumpwatch.cli.display import add_signal_row, console, create_signal_table
from pumpwatch.signals.models import DetectorKind

_TITLES = {
    DetectorKind.STRICT: "Pump Starts",
    DetectorKind.DAILY: "Daily Pumps",
    DetectorKind.MOMENTUM: "Momentum Build-ups",
}


async def _scan_async(kind: DetectorKind, top_k: int | None, assignments: list[str]) -> int:
    from pumpwatch.config import get_config
    from pumpwatch.monitoring.log_config import configure_logging
    from pumpwatch.signals.scanner import build_scanner

    config = get_config()
    configure_logging(config.logging)
    scanner = await build_scanner(config)

    try:
        if assignments:
            overrides = scanner.settings.apply_overrides(parse_assignments(assignments))
            if overrides.not_applied:
                console.print(f"[override]Not applied:[/override] {', '.join(overrides.not_applied)}")

        with console.status(f"Scanning OKX ({kind.value})..."):
            result = await scanner.scan(kind, top_k=top_k)
    finally:
        await scanner.close()

    if not result.ok:
        console.print(f"[critical]Scan failed:[/critical] {result.error}")
        return 1

    if not result.signals:
        console.print(
            f"[muted]No signals among {result.universe_size} instruments "
            f"({result.skipped} skipped).[/muted]"
        )
        return 0

    table = create_signal_table(kind, title=f"{_TITLES[kind]} ({len(result.signals)})")
    for rank, record in enumerate(result.signals, start=1):
        add_signal_row(table, rank, record)
    console.print(table)
    console.print(f"[muted]universe={result.universe_size} skipped={result.skipped}[/muted]")
    return 0


def scan(
    kind: DetectorKind = typer.Argument(DetectorKind.STRICT, help="Detector to run"),
    top_k: Optional[int] = typer.Option(None, "--top", "-k", help="Max ranked results (daily, momentum)"),
    assignments: Optional[list[str]] = typer.Option(None, "--set", "-s", help="Override KEY=VALUE for this run"),
) -> None:
    """Scan the top-N OKX swaps with one detector."""
    code = asyncio.run(_scan_async(kind, top_k, assignments or []))
    if code:
        raise typer.Exit(code)
