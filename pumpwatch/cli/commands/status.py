"""pumpwatch status -- Show the effective scan configuration.

Overrides only live inside a running process, so from the CLI this shows
the environment defaults after validation.
"""

from __future__ import annotations

from rich.text import Text

from pumpwatch.cli.display import console, create_settings_table


def status() -> None:
    """Print the validated configuration and where each value comes from."""
    from pumpwatch.config import get_config
    from pumpwatch.signals.settings_store import ConfigurationStore

    config = get_config()
    store = ConfigurationStore(config.scan)
    effective = store.get_effective_configuration().as_parameters()
    raw = config.scan.as_parameters()

    table = create_settings_table()
    for key, value in effective.items():
        # a default that failed validation was clamped or replaced
        corrected = str(raw.get(key)) != str(value)
        table.add_row(
            key,
            str(value),
            Text("clamped", style="override") if corrected else Text("env", style="muted"),
        )
    console.print(table)
    console.print(
        f"[muted]instType={config.okx.inst_type} suffix={config.okx.suffix_filter} "
        f"cooldown={config.scan.cooldown_backend} concurrency={config.scan.fetch_concurrency}[/muted]"
    )
