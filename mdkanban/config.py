# mdkanban configuration
# Values come from config.yaml, then the environment, then CLI flags.
# The resulting AppConfig is frozen and handed to every component.

import os
import yaml
from pathlib import Path
from dataclasses import dataclass, fields
from typing import Mapping, Optional

from .errors import ConfigError

CONFIG_ENV = "MDKANBAN_CONFIG"

# Environment variable -> AppConfig field
ENV_VARS = {
    "CONFIG_DIR": "config_dir",
    "TASKS_DIR": "tasks_dir",
    "TITLE": "title",
    "MDKANBAN_POLL_INTERVAL": "poll_interval",
    "MDKANBAN_LOG_LEVEL": "log_level",
}


@dataclass(frozen=True)
class AppConfig:
    """Runtime configuration for the kanban backend."""

    # Storage roots
    config_dir: str = "config"   # tags.json, sort.json, images/
    tasks_dir: str = "tasks"     # <board>/<lane>/<card>.md

    # Display
    title: str = ""

    # Change watcher
    poll_interval: float = 1.0

    log_level: str = "INFO"

    def __post_init__(self):
        try:
            interval = float(self.poll_interval)
        except (TypeError, ValueError):
            raise ConfigError(f"poll_interval must be a number, got {self.poll_interval!r}")
        if interval <= 0:
            raise ConfigError(f"poll_interval must be > 0, got {interval}")
        object.__setattr__(self, "poll_interval", interval)
        object.__setattr__(self, "config_dir", os.path.expanduser(str(self.config_dir)))
        object.__setattr__(self, "tasks_dir", os.path.expanduser(str(self.tasks_dir)))
        object.__setattr__(self, "title", "" if self.title is None else str(self.title))
        object.__setattr__(self, "log_level", str(self.log_level).upper())

    @property
    def config_path(self) -> Path:
        return Path(self.config_dir)

    @property
    def tasks_path(self) -> Path:
        return Path(self.tasks_dir)

    @classmethod
    def load(
        cls,
        path: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
        **overrides,
    ) -> "AppConfig":
        """
        Build a config from defaults, YAML, environment and overrides.

        A missing YAML file means defaults. A YAML file that exists but
        cannot be read or parsed raises ConfigError. Overrides whose value
        is None are ignored so CLI flags can be passed straight through.
        """
        if env is None:
            env = os.environ

        values = {}
        cfg_path = path or env.get(CONFIG_ENV)
        if cfg_path:
            values.update(_read_yaml(Path(cfg_path)))

        for var, name in ENV_VARS.items():
            if var in env:
                values[name] = env[var]

        values.update({k: v for k, v in overrides.items() if v is not None})

        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})


def _read_yaml(cfg_path: Path) -> dict:
    if not cfg_path.exists():
        return {}
    try:
        with open(cfg_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot load config {cfg_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config {cfg_path} must be a mapping, got {type(data).__name__}")
    return data
