"""Helpers shared by the CLI commands."""

from pathlib import Path

from nfwords.config import ConfigManager, NFWordsConfig
from nfwords.services import StudyStore, WordPoolService


def load_config(args, **overrides) -> NFWordsConfig:
    """Load the configuration file named on the command line, or the default one."""
    manager = ConfigManager(Path(args.config)) if args.config else ConfigManager()
    if args.db:
        overrides["db_path"] = Path(args.db)
    pack = getattr(args, "pack", None)
    if pack:
        overrides["word_pool_path"] = Path(pack)
    return manager.load_config(**overrides)


def open_store(config: NFWordsConfig) -> StudyStore:
    """Open the study database, creating it if needed."""
    store = StudyStore(config.db_path)
    store.initialize()
    return store


def load_word_pool(config: NFWordsConfig) -> WordPoolService:
    """Load the configured word pack, or the sample words."""
    word_pool = WordPoolService(config.word_pool_path)
    word_pool.load()
    return word_pool
