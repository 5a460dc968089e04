"""Configuration persistence manager."""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

from .config import NFWordsConfig
from .defaults import create_default_config

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manager for configuration persistence.

    Saves and loads the user configuration as JSON. Path values are
    serialized as strings and restored by ``NFWordsConfig.__post_init__``.
    Falls back to the default configuration if the file doesn't exist or
    is invalid.
    """

    def __init__(self, config_file: Path | None = None):
        self.config_file = config_file or Path.home() / ".nfwords" / "config.json"

    def save_config(self, config: NFWordsConfig) -> None:
        """Save configuration to JSON file.

        Args:
            config: Configuration to save

        Raises:
            OSError: If unable to create directory or write file
        """
        self.config_file.parent.mkdir(parents=True, exist_ok=True)

        config_dict = self._paths_to_strings(asdict(config))

        with self.config_file.open("w", encoding="utf-8") as f:
            json.dump(config_dict, f, indent=2, ensure_ascii=False)

    def load_config(self, **overrides) -> NFWordsConfig:
        """Load configuration from JSON file.

        Args:
            **overrides: Values that take precedence over the stored ones

        Returns:
            Loaded configuration, or default configuration if file doesn't exist

        Note:
            If the file exists but is invalid, falls back to default configuration
            and logs a warning.
        """
        if not self.config_file.exists():
            return create_default_config(**overrides)

        try:
            with self.config_file.open("r", encoding="utf-8") as f:
                config_dict = json.load(f)
            config_dict.update(overrides)
            return NFWordsConfig(**config_dict)

        except (json.JSONDecodeError, TypeError, ValueError) as e:
            logger.warning(f"Invalid config file {self.config_file}, using defaults: {e}")
            return create_default_config(**overrides)

    def config_exists(self) -> bool:
        """Check if configuration file exists."""
        return self.config_file.exists()

    def delete_config(self) -> None:
        """Delete the configuration file.

        This forces the application to use default configuration on next load.
        """
        if self.config_file.exists():
            self.config_file.unlink()

    @staticmethod
    def _paths_to_strings(data: dict[str, Any]) -> dict[str, Any]:
        """Convert Path objects to strings in a (possibly nested) dict."""
        result: dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(value, Path):
                result[key] = str(value)
            elif isinstance(value, dict):
                result[key] = ConfigManager._paths_to_strings(value)
            else:
                result[key] = value
        return result
