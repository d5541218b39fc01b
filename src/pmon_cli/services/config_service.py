"""Configuration service for pmon.

Loads and saves ``config.json`` under the platform config directory and
exposes dot-separated get/set/reset helpers used by ``pmon config``.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir
from pydantic import BaseModel, ValidationError

from pmon_cli.models.config_models import AppConfig
from pmon_cli.utils.logger import get_logger


class ConfigService:
    """Single source of truth for persisted timer defaults."""

    def __init__(self, config_dir: Path | None = None):
        self.config_dir = config_dir or Path(user_config_dir("pmon_cli"))
        self.config_path = self.config_dir / "config.json"
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self._config: AppConfig | None = None
        self.logger = get_logger("config")

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from disk, falling back to defaults."""
        if not self.config_path.exists():
            return AppConfig()
        try:
            return AppConfig.model_validate_json(
                self.config_path.read_text(encoding="utf-8")
            )
        except (ValidationError, ValueError) as e:
            self.logger.warning(
                "ignoring invalid config %s: %s", self.config_path, e
            )
            return AppConfig()

    def save_config(self, config: AppConfig | None = None) -> None:
        """Save configuration to disk."""
        if config is not None:
            self._config = config
        with open(self.config_path, "w", encoding="utf-8") as f:
            json.dump(self.config.model_dump(), f, indent=2)

    @staticmethod
    def _lookup(config: AppConfig, key: str) -> Any:
        value: Any = config
        for part in key.split("."):
            if not isinstance(value, BaseModel) or part not in type(value).model_fields:
                raise KeyError(key)
            value = getattr(value, part)
        return value

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key.

        Raises KeyError for unknown keys.
        """
        return self._lookup(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a value by dot-separated key, validate, and save.

        Raises KeyError for unknown keys and pydantic.ValidationError for
        values the model rejects.
        """
        current = self.get(key)
        if isinstance(current, BaseModel):
            raise KeyError(key)

        config_dict = self.config.model_dump()
        *parents, leaf = key.split(".")
        node = config_dict
        for part in parents:
            node = node[part]
        node[leaf] = value

        self.save_config(AppConfig.model_validate(config_dict))
        self.logger.info("config set: %s=%r", key, value)

    def reset(self, key: str | None = None) -> None:
        """Reset one key, or the whole configuration, to defaults."""
        if key is None:
            self.save_config(AppConfig())
        else:
            self.set(key, self._lookup(AppConfig(), key))
        self.logger.info("config reset: %s", key or "all")


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Return the process-wide config service."""
    return ConfigService()
