"""Tests for ConfigManager."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest

from proctime.exceptions import ConfigValidationError, InvalidConfigError
from proctime.models.timer_configuration import LogLevel, TimerBackend, TimerConfiguration
from proctime.services.config_manager import ConfigManager

FOREIGN_BACKEND = "posix" if sys.platform == "win32" else "windows"


def write_json(path: Path, data) -> str:
    path.write_text(json.dumps(data))
    return str(path)


def test_missing_file_yields_defaults(tmp_path):
    manager = ConfigManager(str(Path(tmp_path) / "absent.json"))
    config = manager.load_config()

    assert config.backend == TimerBackend.AUTO
    assert config.checked is False
    assert manager.current_config is config


def test_load_config_from_file(tmp_path):
    path = write_json(Path(tmp_path) / "c.json", {"checked": True})
    manager = ConfigManager()

    config = manager.load_config(path)

    assert config.checked is True
    assert manager.config_file == path


def test_malformed_file_raises(tmp_path):
    path = Path(tmp_path) / "broken.json"
    path.write_text("{not json")

    with pytest.raises(InvalidConfigError):
        ConfigManager().load_config(str(path))


def test_out_of_range_value_raises(tmp_path):
    path = write_json(Path(tmp_path) / "c.json", {"crosscheck": {"burn_seconds": 0}})

    with pytest.raises(InvalidConfigError):
        ConfigManager().load_config(path)


@pytest.mark.parametrize(
    "crosscheck",
    [{"tolerance_seconds": "fast"}, {"tolerance_seconds": None}, {"burn_seconds": None}],
)
def test_non_numeric_crosscheck_value_raises(tmp_path, crosscheck):
    path = write_json(Path(tmp_path) / "c.json", {"crosscheck": crosscheck})

    with pytest.raises(InvalidConfigError):
        ConfigManager().load_config(path)


def test_foreign_backend_fails_validation(tmp_path):
    path = write_json(Path(tmp_path) / "c.json", {"backend": FOREIGN_BACKEND})

    with pytest.raises(ConfigValidationError) as exc_info:
        ConfigManager().load_config(path)

    assert FOREIGN_BACKEND in exc_info.value.details["errors"][0]


def test_env_overrides_applied(monkeypatch):
    monkeypatch.setenv("PROCTIME_LOG_LEVEL", "debug")
    monkeypatch.setenv("PROCTIME_CHECKED", "yes")
    monkeypatch.setenv("PROCTIME_TOLERANCE", "0.5")
    monkeypatch.setenv("PROCTIME_BACKEND", "AUTO")

    config = ConfigManager().load_config_with_env_override()

    assert config.log_level == LogLevel.DEBUG
    assert config.checked is True
    assert config.get_tolerance_seconds() == 0.5
    assert config.backend == TimerBackend.AUTO


def test_env_overrides_layer_over_file(tmp_path, monkeypatch):
    path = write_json(Path(tmp_path) / "c.json", {"checked": True})
    monkeypatch.setenv("PROCTIME_CHECKED", "0")

    config = ConfigManager().load_config_with_env_override(path)
    assert config.checked is False


def test_invalid_env_override_is_skipped(monkeypatch, caplog):
    caplog.set_level(logging.WARNING, logger="proctime")
    monkeypatch.setenv("PROCTIME_CHECKED", "maybe")
    monkeypatch.setenv("PROCTIME_BURN_SECONDS", "-3")

    config = ConfigManager().load_config_with_env_override()

    assert config.checked is False
    assert config.get_burn_seconds() == 0.25
    assert "PROCTIME_CHECKED" in caplog.text
    assert "PROCTIME_BURN_SECONDS" in caplog.text


def test_save_config_writes_and_backs_up(tmp_path):
    path = Path(tmp_path) / "saved.json"
    path.write_text("{}")
    manager = ConfigManager()
    config = TimerConfiguration(checked=True)

    assert manager.save_config(config, str(path)) is True

    assert json.loads(path.read_text())["checked"] is True
    assert Path(f"{path}.backup").read_text() == "{}"
    assert manager.config_file == str(path)


def test_failed_save_keeps_original_file(tmp_path, monkeypatch):
    path = Path(tmp_path) / "saved.json"
    path.write_text('{"checked": true}')

    def failing_write(self, file_path):
        Path(file_path).write_text("")
        raise OSError("disk full")

    monkeypatch.setattr(TimerConfiguration, "to_file", failing_write)
    manager = ConfigManager()

    assert manager.save_config(TimerConfiguration(), str(path)) is False

    assert path.exists()
    assert path.read_text() == '{"checked": true}'
    assert manager.config_file is None


def test_failed_first_save_leaves_no_file(tmp_path, monkeypatch):
    path = Path(tmp_path) / "fresh.json"

    def failing_write(self, file_path):
        raise OSError("disk full")

    monkeypatch.setattr(TimerConfiguration, "to_file", failing_write)

    assert ConfigManager().save_config(TimerConfiguration(), str(path)) is False
    assert not path.exists()
    assert not Path(f"{path}.backup").exists()


def test_save_config_requires_path():
    with pytest.raises(ValueError):
        ConfigManager().save_config(TimerConfiguration())


def test_save_invalid_config_raises(tmp_path):
    config = TimerConfiguration(backend=FOREIGN_BACKEND)
    with pytest.raises(ConfigValidationError):
        ConfigManager().save_config(config, str(Path(tmp_path) / "c.json"))


def test_low_tolerance_is_a_warning():
    config = TimerConfiguration(crosscheck={"tolerance_seconds": 0.001})
    result = ConfigManager().validate_config(config)

    assert result.is_valid
    assert result.warnings
