"""Tests for configuration defaults, environment overrides and persistence."""

import json
import sys

import pytest

from pen_compat_matrix.config.settings import (
    AppConfig, DisplayConfig, LogLevel, SourceConfig, get_config, init_config
)
from pen_compat_matrix.models import FormatOptions, ViewMode


def test_defaults():
    config = AppConfig()
    assert config.sources.sources == ["wacom-pen-compat.xml"]
    assert config.sources.fetch_timeout == 30
    assert not config.sources.report_conflicts
    assert config.display.get_view_mode() is ViewMode.GROUPED
    assert config.display.get_format_options() == FormatOptions()
    assert config.log_level is LogLevel.INFO


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PEN_COMPAT_SOURCES", "a.xml, https://example.org/b.xml")
    monkeypatch.setenv("PEN_COMPAT_VIEW_MODE", "BY_PEN")
    monkeypatch.setenv("PEN_COMPAT_DEBUG", "yes")
    monkeypatch.setenv("PEN_COMPAT_LOG_LEVEL", "debug")

    config = AppConfig()
    assert config.sources.sources == ["a.xml", "https://example.org/b.xml"]
    assert config.display.view_mode == "by-pen"
    assert config.debug_mode
    assert config.log_level is LogLevel.DEBUG


def test_invalid_environment_values_are_ignored(monkeypatch):
    monkeypatch.setenv("PEN_COMPAT_VIEW_MODE", "diagonal")
    monkeypatch.setenv("PEN_COMPAT_LOG_LEVEL", "chatty")
    config = AppConfig()
    assert config.display.view_mode == "grouped"
    assert config.log_level is LogLevel.INFO


@pytest.mark.parametrize("kwargs", [
    {"sources": SourceConfig(fetch_timeout=0)},
    {"sources": SourceConfig(sources=[])},
    {"display": DisplayConfig(view_mode="diagonal")},
])
def test_invalid_values_are_rejected(kwargs):
    with pytest.raises(ValueError):
        AppConfig(**kwargs)


def test_save_and_load_round_trip(tmp_path):
    config = AppConfig()
    config.sources.sources = ["one.xml", "two.xml"]
    config.display.view_mode = "by-tablet"
    config.display.organize_by_family = True
    config.log_level = LogLevel.WARNING

    path = tmp_path / "config.json"
    config.save_to_file(path)
    assert json.loads(path.read_text(encoding="utf-8"))["log_level"] == "WARNING"

    loaded = AppConfig.load_from_file(path)
    assert loaded.sources.sources == ["one.xml", "two.xml"]
    assert loaded.display.get_view_mode() is ViewMode.BY_TABLET
    assert loaded.display.organize_by_family
    assert loaded.log_level is LogLevel.WARNING


def test_load_rejects_bad_files(tmp_path):
    with pytest.raises(FileNotFoundError):
        AppConfig.load_from_file(tmp_path / "absent.json")

    garbage = tmp_path / "garbage.json"
    garbage.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        AppConfig.load_from_file(garbage)

    unknown_key = tmp_path / "unknown.json"
    unknown_key.write_text(json.dumps({"display": {"colour": "red"}}), encoding="utf-8")
    with pytest.raises(ValueError):
        AppConfig.load_from_file(unknown_key)


def test_init_config_falls_back_to_defaults(tmp_path):
    garbage = tmp_path / "garbage.json"
    garbage.write_text("[]", encoding="utf-8")
    config = init_config(garbage)
    assert get_config() is config
    assert config.sources.sources == ["wacom-pen-compat.xml"]


def test_get_config_requires_init():
    with pytest.raises(RuntimeError):
        get_config()


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="XDG paths are Linux only")
def test_config_dir_follows_xdg(tmp_path):
    assert AppConfig().get_config_file_path() == tmp_path / "xdg" / "pen-compat-matrix" / "config.json"


def test_view_mode_is_checked_by_the_validator(monkeypatch):
    from pen_compat_matrix.utils import validators

    checked = []
    original = validators.Validator.validate_view_mode

    def spy(self, name):
        checked.append(name)
        return original(self, name)

    monkeypatch.setattr(validators.Validator, "validate_view_mode", spy)
    AppConfig(display=DisplayConfig(view_mode="by_pen"))
    with pytest.raises(ValueError, match="diagonal"):
        AppConfig(display=DisplayConfig(view_mode="diagonal"))
    assert checked == ["by_pen", "diagonal"]


def test_platform_dirs_are_created(tmp_path, monkeypatch):
    from pen_compat_matrix.utils.platform_utils import get_platform_log_dir

    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("LOCALAPPDATA", str(tmp_path / "local"))
    log_dir = get_platform_log_dir("pen-compat-matrix")
    assert log_dir.is_dir()
    assert AppConfig().get_config_dir().is_dir()
