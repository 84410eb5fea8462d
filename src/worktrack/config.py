"""worktrack configuration management."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from worktrack.clock import SystemClock


@dataclass
class Config:
    """worktrack configuration."""

    home: Path = field(default_factory=lambda: Path.home() / ".worktrack")
    log_level: str = "INFO"
    timezone: str = "UTC"

    # Decimal places for progress percentages in responses
    progress_precision: int = 1

    @classmethod
    def load(cls, home: Path | None = None) -> Config:
        """Load config from YAML file, env vars, then defaults."""
        config = cls()

        if home:
            config.home = home

        # Override from env
        env_home = os.environ.get("WORKTRACK_HOME")
        if env_home:
            config.home = Path(env_home)

        env_log = os.environ.get("WORKTRACK_LOG_LEVEL")
        if env_log:
            config.log_level = env_log

        env_tz = os.environ.get("WORKTRACK_TIMEZONE")
        if env_tz:
            config.timezone = env_tz

        # Load YAML config if exists
        config_file = config.config_file
        if config_file.exists():
            with open(config_file) as f:
                data = yaml.safe_load(f) or {}
            for key, value in data.items():
                if hasattr(config, key):
                    current = getattr(config, key)
                    if isinstance(current, Path):
                        setattr(config, key, Path(value))
                    else:
                        setattr(config, key, type(current)(value))

        return config

    @property
    def config_file(self) -> Path:
        return self.home / "config.yaml"

    def clock(self) -> SystemClock:
        return SystemClock(self.timezone)

    def save(self) -> None:
        """Save current config to YAML."""
        self.home.mkdir(parents=True, exist_ok=True)
        data = {
            "log_level": self.log_level,
            "timezone": self.timezone,
            "progress_precision": self.progress_precision,
        }
        with open(self.config_file, "w") as f:
            yaml.dump(data, f, default_flow_style=False)

    def to_dict(self) -> dict:
        return {
            "home": str(self.home),
            "log_level": self.log_level,
            "timezone": self.timezone,
            "progress_precision": self.progress_precision,
        }
