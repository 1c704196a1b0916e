"""Plain-text rendering of scan results for chat delivery."""

from __future__ import annotations

from collections.abc import Mapping

from pumpwatch.signals.models import DetectorKind, ScanResult, SignalRecord

QUIET_MESSAGES = {
    DetectorKind.STRICT: "All quiet. Nothing is pumping by your rules.",
    DetectorKind.DAILY: "No instrument is above the daily pump threshold yet.",
    DetectorKind.MOMENTUM: "No momentum build-ups right now.",
}


def format_strict_alert(record: SignalRecord, bar: str = "1m") -> str:
    m = record.metrics
    window = int(m.get("window_min", 0))
    return (
        f"🚨 PUMP START\n"
        f"{record.instrument_id}\n"
        f"Δ{window}{bar}: +{m['pct']:.2f}%\n"
        f"Vol spike: {m['vol_ratio']:.2f}×\n"
        f"Break high: yes\n"
        f"Last: {m['last']:g}"
    )


def format_daily_line(rank: int, record: SignalRecord) -> str:
    m = record.metrics
    return (
        f"{rank}. {record.instrument_id}  +{m['pct']:.2f}%  "
        f"(open {m['day_open']:g} → high {m['day_high']:g}, last {m['last']:g})"
    )


def format_momentum_line(rank: int, record: SignalRecord) -> str:
    m = record.metrics
    return (
        f"{rank}. {record.instrument_id}  +{m['pct']:.2f}%  "
        f"vol {m['vol_ratio']:.2f}×  score {m['score']:.2f}"
    )


def format_scan_result(result: ScanResult) -> str:
    """Render a full scan result, including the failure and quiet cases."""
    if not result.ok:
        return f"Scan failed ❌\n{result.error}"
    if not result.signals:
        return QUIET_MESSAGES[result.detector]

    if result.detector is DetectorKind.STRICT:
        return "\n\n".join(format_strict_alert(r) for r in result.signals)

    if result.detector is DetectorKind.DAILY:
        header = "📈 Daily pumps since day open"
        lines = [format_daily_line(i, r) for i, r in enumerate(result.signals, start=1)]
    else:
        header = "⚡ Momentum build-ups"
        lines = [format_momentum_line(i, r) for i, r in enumerate(result.signals, start=1)]
    return "\n".join([header, *lines])


def format_status(
    parameters: Mapping[str, int | float | str],
    overrides: Mapping[str, int | float | str],
    inst_type: str,
) -> str:
    lines = ["Status ⚙️", f"instType: {inst_type}"]
    for key, value in parameters.items():
        marker = " (override)" if key in overrides else ""
        lines.append(f"{key}={value}{marker}")
    lines.append("")
    lines.append("Commands: /scan, /pumps, /momentum, /set KEY=VALUE, /reset")
    return "\n".join(lines)
