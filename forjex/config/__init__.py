"""Configuration Management Package"""

import json
import os
import sys
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

from forjex import FALLBACK_MESSAGE, INITIAL_COMMIT_MESSAGE


@dataclass
class Config:
    """Tunable settings with sensible defaults."""
    branch: str = "main"
    remote: str = "origin"
    initial_message: str = INITIAL_COMMIT_MESSAGE
    fallback_message: str = FALLBACK_MESSAGE
    min_content_length: int = 10  # Shorter diff lines are treated as noise
    max_names: int = 2  # Identifiers named in a description before "and N more"
    git_timeout: Optional[float] = None  # Seconds; None waits forever
    github_api_url: str = "https://api.github.com"

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        for name in ('branch', 'remote', 'initial_message', 'fallback_message', 'github_api_url'):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                warnings.append(f"Invalid {name} '{value}', using '{getattr(defaults, name)}'")
                setattr(self, name, getattr(defaults, name))

        for name in ('min_content_length', 'max_names'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                warnings.append(f"Invalid {name} '{value}', using {getattr(defaults, name)}")
                setattr(self, name, getattr(defaults, name))

        if self.git_timeout is not None:
            if not isinstance(self.git_timeout, (int, float)) or self.git_timeout <= 0:
                warnings.append(f"Invalid git_timeout '{self.git_timeout}', using no timeout")
                self.git_timeout = None

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


def apply_env_overrides(config: Config) -> Config:
    """Environment beats the config file."""
    branch = os.environ.get('FORJEX_BRANCH')
    if branch:
        config.branch = branch
    timeout = os.environ.get('FORJEX_GIT_TIMEOUT')
    if timeout:
        try:
            config.git_timeout = float(timeout)
        except ValueError:
            print(f"Config warning: Invalid FORJEX_GIT_TIMEOUT '{timeout}', ignoring", file=sys.stderr)
    return config


class ConfigManager:
    """Loads configuration from the project directory or home directory."""

    CONFIG_FILENAME = ".forjexrc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        for path in (Path.cwd() / self.CONFIG_FILENAME, Path.home() / self.CONFIG_FILENAME):
            if path.exists():
                self._config = self._load_from_file(path)
                self._config_path = path
                return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top level must be an object")
            return Config.from_dict(data)
        except (json.JSONDecodeError, ValueError, IOError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


__all__ = [
    "Config",
    "ConfigManager",
    "apply_env_overrides",
    "load_config",
    "get_config_path",
]
