"""Rich console formatting helpers for the pumpwatch CLI."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from pumpwatch.signals.models import DetectorKind, SignalRecord

# Shared theme for consistent styling across all CLI output.
PUMPWATCH_THEME = Theme(
    {
        "pump": "bold green",
        "override": "bold yellow",
        "ok": "bold green",
        "critical": "bold red",
        "header": "bold cyan",
        "muted": "dim",
    }
)

console = Console(theme=PUMPWATCH_THEME)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def format_float(val: float | None, decimals: int = 2) -> str:
    """Format a float with fixed decimal places, or '--' if None."""
    if val is None:
        return "--"
    return f"{val:.{decimals}f}"


def format_pct(val: float | None) -> Text:
    """Signed percentage, green when positive."""
    if val is None:
        return Text("--", style="dim")
    return Text(f"{val:+.2f}%", style="pump" if val > 0 else "muted")


def format_price(val: float | None) -> str:
    if val is None:
        return "--"
    return f"{val:g}"


# ---------------------------------------------------------------------------
# Reusable table builders
# ---------------------------------------------------------------------------

_METRIC_COLUMNS = {
    DetectorKind.STRICT: [("Δ Window", "pct"), ("Vol ×", "vol_ratio"), ("Last", "last")],
    DetectorKind.DAILY: [("Δ Day", "pct"), ("Day Open", "day_open"), ("Day High", "day_high"), ("Last", "last")],
    DetectorKind.MOMENTUM: [("Δ 3 bars", "pct"), ("Vol ×", "vol_ratio"), ("Score", "score"), ("Last", "last")],
}


def create_signal_table(kind: DetectorKind, title: str = "Signals") -> Table:
    """Build a Rich Table with the metric columns of one detector."""
    table = Table(title=title, show_lines=False, pad_edge=True)
    table.add_column("#", style="muted", justify="right", width=3)
    table.add_column("Instrument", style="bold")
    for label, _ in _METRIC_COLUMNS[kind]:
        table.add_column(label, justify="right")
    return table


def add_signal_row(table: Table, rank: int, record: SignalRecord) -> None:
    cells: list[str | Text] = [str(rank), record.instrument_id]
    for _, metric in _METRIC_COLUMNS[record.signal_type]:
        value = record.metrics.get(metric)
        if metric == "pct":
            cells.append(format_pct(value))
        elif metric in {"vol_ratio", "score"}:
            cells.append(format_float(value))
        else:
            cells.append(format_price(value))
    table.add_row(*cells)


def create_settings_table(title: str = "Effective Configuration") -> Table:
    table = Table(title=title, show_lines=False, pad_edge=True)
    table.add_column("Parameter", style="header")
    table.add_column("Value", justify="right")
    table.add_column("Source", width=9)
    return table
