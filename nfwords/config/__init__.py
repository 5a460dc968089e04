"""Configuration management for NFwords."""

from .config import EarlyMasteryRule, NFWordsConfig, TierThresholds
from .config_manager import ConfigManager
from .defaults import create_default_config

__all__ = [
    "NFWordsConfig",
    "TierThresholds",
    "EarlyMasteryRule",
    "ConfigManager",
    "create_default_config",
]
