"""Configuration Management Package"""

import json
import os
import sys
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Optional

DEFAULT_MODEL = "gemini-2.5-flash-lite"
DEFAULT_MODELS = [DEFAULT_MODEL]


@dataclass
class Config:
    """User configuration with sensible defaults."""
    model: str = DEFAULT_MODEL
    models: list[str] = field(default_factory=lambda: list(DEFAULT_MODELS))
    api_base_url: str = "https://generativelanguage.googleapis.com"
    api_version: str = "v1beta"
    timeout: float = 20.0
    max_subject_length: int = 72
    include_diff_in_body: bool = False

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        if not isinstance(self.models, list) or not all(isinstance(m, str) and m.strip() for m in self.models) or not self.models:
            warnings.append(f"Invalid models '{self.models}', using {defaults.models}")
            self.models = defaults.models

        if not isinstance(self.model, str) or not self.model.strip():
            warnings.append(f"Invalid model '{self.model}', using '{self.models[0]}'")
            self.model = self.models[0]
        elif self.model not in self.models:
            # An explicitly chosen model is always selectable
            self.models = [self.model, *self.models]

        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)) or self.timeout <= 0:
            warnings.append(f"Invalid timeout '{self.timeout}', using {defaults.timeout}")
            self.timeout = defaults.timeout

        if isinstance(self.max_subject_length, bool) or not isinstance(self.max_subject_length, int) or self.max_subject_length <= 0:
            warnings.append(f"Invalid max_subject_length '{self.max_subject_length}', using {defaults.max_subject_length}")
            self.max_subject_length = defaults.max_subject_length

        if not isinstance(self.api_version, str) or not self.api_version.strip():
            warnings.append(f"Invalid api_version '{self.api_version}', using '{defaults.api_version}'")
            self.api_version = defaults.api_version

        if not isinstance(self.api_base_url, str) or not self.api_base_url.startswith(("http://", "https://")):
            warnings.append(f"Invalid api_base_url '{self.api_base_url}', using '{defaults.api_base_url}'")
            self.api_base_url = defaults.api_base_url

        if not isinstance(self.include_diff_in_body, bool):
            warnings.append(f"Invalid include_diff_in_body '{self.include_diff_in_body}', using {defaults.include_diff_in_body}")
            self.include_diff_in_body = defaults.include_diff_in_body

        return warnings

    def apply_env(self) -> list[str]:
        """Apply SMART_COMMIT_MODEL / SMART_COMMIT_TIMEOUT overrides."""
        warnings = []
        env_model = os.environ.get('SMART_COMMIT_MODEL')
        if env_model and env_model.strip():
            self.model = env_model.strip()
            if self.model not in self.models:
                self.models = [self.model, *self.models]

        env_timeout = os.environ.get('SMART_COMMIT_TIMEOUT')
        if env_timeout:
            try:
                timeout = float(env_timeout)
            except ValueError:
                timeout = 0
            if timeout > 0:
                self.timeout = timeout
            else:
                warnings.append(f"Invalid SMART_COMMIT_TIMEOUT '{env_timeout}', using {self.timeout}")
        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Manages loading and saving configuration."""

    CONFIG_FILENAME = ".smartcommitrc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        local_path = Path.cwd() / self.CONFIG_FILENAME
        if local_path.exists():
            self._config = self._load_from_file(local_path)
            self._config_path = local_path
            return self._config

        home_path = Path.home() / self.CONFIG_FILENAME
        if home_path.exists():
            self._config = self._load_from_file(home_path)
            self._config_path = home_path
            return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            print(f"Config warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()
        if not isinstance(data, dict):
            print(f"Config warning: {path} must contain a JSON object", file=sys.stderr)
            return Config()
        return Config.from_dict(data)

    def save(self, config: Config, global_config: bool = True) -> Path:
        path = Path.home() / self.CONFIG_FILENAME if global_config else Path.cwd() / self.CONFIG_FILENAME
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
        return path

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
    "DEFAULT_MODEL",
    "DEFAULT_MODELS",
]
