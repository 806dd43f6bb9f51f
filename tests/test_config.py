"""Tests for configuration loading and registry construction."""

import pytest

from ntu_telemetry.analysis.classifier import StatusClassifier
from ntu_telemetry.analysis.thresholds import DEFAULT_REGISTRY
from ntu_telemetry.config import (
    ConfigurationError,
    TelemetrySettings,
    load_config,
)
from ntu_telemetry.config.loader import format_validation_errors, load_yaml_config
from ntu_telemetry.models.enums import MetricKind, Severity


class TestTelemetrySettings:
    def test_defaults_match_default_registry(self, clean_env) -> None:
        settings = TelemetrySettings()

        assert settings.build_registry() == DEFAULT_REGISTRY
        assert settings.maintenance_due_soon_days == 14
        assert settings.history_hours == 4
        assert settings.battery_history_hours == 24
        assert settings.log_level == "INFO"
        assert settings.log_format == "json"
        assert settings.random_seed is None

    def test_environment_overrides(self, clean_env) -> None:
        clean_env.setenv("NTU_BATTERY_WARNING", "40")
        clean_env.setenv("NTU_BATTERY_ALERT", "25")
        clean_env.setenv("NTU_LOG_LEVEL", "warn")

        settings = TelemetrySettings()
        registry = settings.build_registry()

        assert registry.battery.warning == 40
        assert registry.battery.alert == 25
        assert settings.log_level == "WARNING"

    def test_inconsistent_thresholds_fail_on_build(self, clean_env) -> None:
        settings = TelemetrySettings(vibration_warning=0.9)
        with pytest.raises(ConfigurationError, match="normal < warning < alert"):
            settings.build_registry()

    def test_invalid_log_level(self, clean_env) -> None:
        with pytest.raises(ValueError):
            TelemetrySettings(log_level="LOUD")

    def test_variance_range_validated(self, clean_env) -> None:
        with pytest.raises(ValueError):
            TelemetrySettings(min_variance=0.6, max_variance=0.5)

    def test_build_classifier_uses_configured_tables(self, clean_env) -> None:
        classifier = TelemetrySettings(battery_warning=60, battery_alert=50).build_classifier()

        assert isinstance(classifier, StatusClassifier)
        assert classifier.classify(MetricKind.BATTERY, 55) == Severity.WARNING

    def test_seeded_synthesizer_is_repeatable(self, clean_env) -> None:
        settings = TelemetrySettings(random_seed=9)
        first = settings.build_synthesizer().spike_process(hours=2)
        second = settings.build_synthesizer().spike_process(hours=2)
        assert [p.value for p in first] == [p.value for p in second]


class TestLoader:
    def test_yaml_file_is_applied(self, clean_env, tmp_path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "internal_temp_max: 37.8\n"
            "maintenance_due_soon_days: 30\n"
            "log_format: text\n"
        )
        clean_env.setenv("CONFIG_PATH", str(config_file))

        settings = load_config()

        assert settings.maintenance_due_soon_days == 30
        assert settings.log_format == "text"
        assert settings.registry.internal_temperature.max == pytest.approx(37.8)

    def test_environment_beats_yaml(self, clean_env, tmp_path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("battery_warning: 50\n")
        clean_env.setenv("CONFIG_PATH", str(config_file))
        clean_env.setenv("NTU_BATTERY_WARNING", "45")

        settings = load_config()

        assert settings.registry.battery.warning == 45

    def test_missing_yaml_file(self, clean_env, tmp_path) -> None:
        clean_env.setenv("CONFIG_PATH", str(tmp_path / "missing.yaml"))
        with pytest.raises(ConfigurationError, match="not found"):
            load_config()

    def test_invalid_yaml(self, clean_env, tmp_path) -> None:
        config_file = tmp_path / "broken.yaml"
        config_file.write_text("battery_warning: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_yaml_config(str(config_file))

    def test_no_config_path_means_no_yaml(self, clean_env) -> None:
        assert load_yaml_config() == {}

    def test_bad_thresholds_fail_at_load(self, clean_env) -> None:
        clean_env.setenv("NTU_SURFACE_TEMP_ALERT_MAX", "36.0")
        with pytest.raises(ConfigurationError):
            load_config()

    def test_validation_errors_exit(self, clean_env, capsys) -> None:
        clean_env.setenv("NTU_HISTORY_HOURS", "0")
        with pytest.raises(SystemExit) as exc_info:
            load_config()

        assert exc_info.value.code == 1
        assert "history_hours" in capsys.readouterr().err

    def test_registry_is_built_once_and_shared(self, clean_env) -> None:
        clean_env.setenv("NTU_BATTERY_WARNING", "35")
        settings = load_config()

        assert settings.registry is settings.registry
        classifier = settings.build_classifier()
        assert classifier.registry is settings.registry
        assert classifier.classify(MetricKind.BATTERY, 33) == Severity.WARNING

    def test_format_validation_errors(self) -> None:
        messages = format_validation_errors(
            [
                {"loc": ("history_hours",), "msg": "Input should be greater than 0", "input": 0},
                {"loc": (), "msg": "Value error, min_variance too large"},
            ]
        )
        assert messages == [
            "Configuration error: 'history_hours' Input should be greater than 0, got: 0",
            "Configuration error: Value error, min_variance too large",
        ]

