"""Default configuration values for NFwords."""

from .config import NFWordsConfig


def create_default_config(**overrides) -> NFWordsConfig:
    """Create a default configuration with optional overrides.

    Args:
        **overrides: Keyword arguments to override default values

    Returns:
        NFWordsConfig with defaults and overrides applied

    Example:
        config = create_default_config(
            buffer_cap=2,
            strict_invariants=True
        )
    """
    return NFWordsConfig(**overrides)
