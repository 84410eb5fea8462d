"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path
from zoneinfo import ZoneInfo

import yaml

from worktrack.config import Config


def test_defaults(config: Config, tmp_path: Path) -> None:
    assert config.home == tmp_path
    assert config.log_level == "INFO"
    assert config.timezone == "UTC"
    assert config.progress_precision == 1


def test_save_and_load(tmp_path: Path, monkeypatch) -> None:
    for var in ("WORKTRACK_HOME", "WORKTRACK_LOG_LEVEL", "WORKTRACK_TIMEZONE"):
        monkeypatch.delenv(var, raising=False)
    Config(home=tmp_path, log_level="DEBUG", timezone="Europe/Prague", progress_precision=2).save()

    loaded = Config.load(tmp_path)

    assert loaded.log_level == "DEBUG"
    assert loaded.timezone == "Europe/Prague"
    assert loaded.progress_precision == 2
    assert yaml.safe_load((tmp_path / "config.yaml").read_text())["log_level"] == "DEBUG"


def test_env_overrides(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("WORKTRACK_HOME", str(tmp_path))
    monkeypatch.setenv("WORKTRACK_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("WORKTRACK_TIMEZONE", "America/New_York")

    config = Config.load()

    assert config.home == tmp_path
    assert config.log_level == "WARNING"
    assert config.clock().tz == ZoneInfo("America/New_York")


def test_unknown_yaml_keys_ignored(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("WORKTRACK_HOME", raising=False)
    (tmp_path / "config.yaml").write_text("progress_precision: '3'\nbogus: 1\n")

    config = Config.load(tmp_path)

    assert config.progress_precision == 3
    assert not hasattr(config, "bogus")
