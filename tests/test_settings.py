"""Unit tests for the configuration store."""

from __future__ import annotations

from pumpwatch.config import ScanDefaults
from pumpwatch.signals.config import BAR_MINUTES, PARAMETERS
from pumpwatch.signals.settings_store import ConfigurationStore


class TestDefaults:
    def test_compiled_in_defaults(self, store: ConfigurationStore) -> None:
        s = store.get_effective_configuration()
        assert s.top_n == 50
        assert s.bar == "1m"
        assert s.window_min == 5
        assert s.pump_pct == 3.0
        assert s.vol_mult == 3.0
        assert s.cooldown_min == 15
        assert s.timezone == "Asia/Hong_Kong"

    def test_env_defaults_are_validated(self, monkeypatch) -> None:
        monkeypatch.setenv("TOP_N", "5")
        monkeypatch.setenv("BAR", "7m")
        store = ConfigurationStore(ScanDefaults())
        s = store.get_effective_configuration()
        assert s.top_n == 10
        assert s.bar == "1m"

    def test_fractional_env_integer_is_truncated(self, monkeypatch) -> None:
        monkeypatch.setenv("TOP_N", "20.5")
        s = ConfigurationStore(ScanDefaults()).get_effective_configuration()
        assert s.top_n == 20

    def test_unparsable_env_number_falls_back(self, monkeypatch) -> None:
        monkeypatch.setenv("PUMP_PCT", "abc")
        monkeypatch.setenv("COOLDOWN_MIN", "")
        s = ConfigurationStore(ScanDefaults()).get_effective_configuration()
        assert s.pump_pct == 3.0
        assert s.cooldown_min == 15

    def test_invalid_timezone_falls_back(self) -> None:
        s = ConfigurationStore({"TIMEZONE": "Mars/Olympus"}).get_effective_configuration()
        assert s.timezone == "Asia/Hong_Kong"


class TestApplyOverrides:
    def test_recognised_keys_coerced(self, store: ConfigurationStore) -> None:
        result = store.apply_overrides({"TOP_N": "80", "PUMP_PCT": "4.5", "BAR": "5m"})
        assert result.applied == {"TOP_N": 80, "PUMP_PCT": 4.5, "BAR": "5m"}
        assert result.not_applied == []

        s = store.get_effective_configuration()
        assert s.top_n == 80
        assert s.pump_pct == 4.5
        assert s.bar == "5m"

    def test_unknown_key_ignored(self, store: ConfigurationStore) -> None:
        before = store.get_effective_configuration()
        result = store.apply_overrides({"FOO": "1"})
        assert result.applied == {}
        assert result.not_applied == ["FOO"]
        assert store.get_effective_configuration() == before

    def test_timezone_not_overridable(self, store: ConfigurationStore) -> None:
        result = store.apply_overrides({"TIMEZONE": "UTC"})
        assert result.applied == {}
        assert store.get_effective_configuration().timezone == "Asia/Hong_Kong"

    def test_uncoercible_value_does_not_poison_batch(self, store: ConfigurationStore) -> None:
        result = store.apply_overrides({"VOL_MULT": "lots", "WINDOW_MIN": "7"})
        assert result.applied == {"WINDOW_MIN": 7}
        assert result.not_applied == ["VOL_MULT"]
        s = store.get_effective_configuration()
        assert s.vol_mult == 3.0
        assert s.window_min == 7

    def test_non_finite_value_rejected(self, store: ConfigurationStore) -> None:
        result = store.apply_overrides({"PUMP_PCT": "inf"})
        assert result.not_applied == ["PUMP_PCT"]

    def test_keys_case_insensitive(self, store: ConfigurationStore) -> None:
        result = store.apply_overrides({"top_n": "20"})
        assert result.applied == {"TOP_N": 20}

    def test_last_write_wins(self, store: ConfigurationStore) -> None:
        store.apply_overrides({"COOLDOWN_MIN": "30"})
        store.apply_overrides({"COOLDOWN_MIN": "45"})
        assert store.get_effective_configuration().cooldown_min == 45

    def test_reset(self, store: ConfigurationStore) -> None:
        store.apply_overrides({"TOP_N": "100"})
        store.reset_overrides()
        assert store.overrides == {}
        assert store.get_effective_configuration().top_n == 50


class TestValidation:
    def test_top_n_clamped_high(self, store: ConfigurationStore) -> None:
        store.apply_overrides({"TOP_N": "99999"})
        assert store.get_effective_configuration().top_n == 200

    def test_numeric_fields_clamped(self, store: ConfigurationStore) -> None:
        store.apply_overrides(
            {
                "WINDOW_MIN": "0",
                "PUMP_PCT": "1000",
                "VOL_MULT": "0.1",
                "COOLDOWN_MIN": "-5",
                "DAILY_PUMP_PCT": "0.01",
                "MOM_PCT": "99",
            }
        )
        s = store.get_effective_configuration()
        assert s.window_min == 1
        assert s.pump_pct == 50
        assert s.vol_mult == 1
        assert s.cooldown_min == 0
        assert s.daily_pump_pct == 0.5
        assert s.momentum_pct == 50

    def test_every_value_within_range(self, store: ConfigurationStore) -> None:
        extremes = {key: "-1e9" for key, spec in PARAMETERS.items() if spec.low is not None}
        store.apply_overrides(extremes)
        low = store.get_effective_configuration().as_parameters()
        store.apply_overrides({key: "1e9" for key in extremes})
        high = store.get_effective_configuration().as_parameters()

        for key in extremes:
            spec = PARAMETERS[key]
            assert spec.low <= low[key] <= spec.high
            assert spec.low <= high[key] <= spec.high

    def test_bar_outside_enum_falls_back(self, store: ConfigurationStore) -> None:
        result = store.apply_overrides({"BAR": "7m"})
        assert result.applied == {"BAR": "7m"}
        assert store.get_effective_configuration().bar == "1m"

    def test_bar_case_normalised(self, store: ConfigurationStore) -> None:
        store.apply_overrides({"BAR": "1h"})
        s = store.get_effective_configuration()
        assert s.bar == "1H"
        assert s.bar_minutes == BAR_MINUTES["1H"]

    def test_integer_field_truncates_float_text(self, store: ConfigurationStore) -> None:
        store.apply_overrides({"WINDOW_MIN": "7.9"})
        assert store.get_effective_configuration().window_min == 7
