"""Configuration Management Package"""

import json
import logging
import sys
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """User configuration with sensible defaults."""
    output: str = "CHANGELOG.md"
    repo_url: Optional[str] = None  # Overrides the URL derived from the origin remote
    host: Optional[str] = None
    link_references: bool = True
    max_typos: int = 5  # Typos listed before collapsing into "N more..."
    max_suggestions: int = 5

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults silently after warning.
        """
        warnings = []
        defaults = Config()

        if not isinstance(self.output, str) or not self.output.strip():
            warnings.append(f"Invalid output '{self.output}', using '{defaults.output}'")
            self.output = defaults.output

        if not isinstance(self.link_references, bool):
            warnings.append(f"Invalid link_references '{self.link_references}', using {str(defaults.link_references).lower()}")
            self.link_references = defaults.link_references

        if not isinstance(self.max_typos, int) or self.max_typos <= 0:
            warnings.append(f"Invalid max_typos '{self.max_typos}', using {defaults.max_typos}")
            self.max_typos = defaults.max_typos

        if not isinstance(self.max_suggestions, int) or self.max_suggestions < 0:
            warnings.append(f"Invalid max_suggestions '{self.max_suggestions}', using {defaults.max_suggestions}")
            self.max_suggestions = defaults.max_suggestions

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        # Validate and print warnings to stderr
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Manages loading configuration."""

    CONFIG_FILENAME = ".relnotesrc"

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
        logger.debug("loading config from %s", path)
        try:
            with open(path, 'r') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
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
    "load_config",
    "get_config_path",
]
