"""Tests for the worktrack CLI."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from worktrack.cli import main


def test_init_writes_config(tmp_path: Path) -> None:
    runner = CliRunner()
    target = tmp_path / "wt"

    result = runner.invoke(main, ["--home", str(tmp_path), "init", str(target)])

    assert result.exit_code == 0, result.output
    assert (target / "config.yaml").exists()
    assert "Initialized worktrack" in result.output


def test_config_shows_effective_values(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("WORKTRACK_HOME", raising=False)
    monkeypatch.setenv("WORKTRACK_TIMEZONE", "Europe/Prague")
    runner = CliRunner()

    result = runner.invoke(main, ["--home", str(tmp_path), "config"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["home"] == str(tmp_path.resolve())
    assert data["timezone"] == "Europe/Prague"


def test_demo_runs_cascade(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("WORKTRACK_HOME", raising=False)
    runner = CliRunner()

    result = runner.invoke(main, ["--home", str(tmp_path), "demo", "--minutes", "90"])

    assert result.exit_code == 0, result.output
    assert "Stopped after 1.50h" in result.output
    assert "work.logged" in result.output
    assert result.output.count("work.logged") == 1


def test_demo_rejects_non_positive_minutes(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["--home", str(tmp_path), "demo", "--minutes", "0"])
    assert result.exit_code != 0
