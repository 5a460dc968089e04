"""Configuration classes for NFwords."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class TierThresholds:
    """Upper bounds (seconds, exclusive) of the four easiest familiarity tiers.

    Anything at or above ``difficult`` is very difficult.
    """

    very_familiar: float = 1.0
    familiar: float = 2.0
    unfamiliar: float = 3.5
    difficult: float = 5.0

    def __post_init__(self):
        bounds = [self.very_familiar, self.familiar, self.unfamiliar, self.difficult]
        if bounds[0] < 0:
            raise ValueError(f"Tier thresholds must be non-negative, got {bounds}")
        if any(lower >= upper for lower, upper in zip(bounds, bounds[1:])):
            raise ValueError(f"Tier thresholds must be strictly ascending, got {bounds}")


@dataclass(frozen=True)
class EarlyMasteryRule:
    """Conditions under which a word stops being shown before its target."""

    min_exposures: int = 3
    min_right_ratio: float = 0.8
    max_avg_dwell: float = 2.0


@dataclass(frozen=True)
class NFWordsConfig:
    """Immutable configuration for scheduling and study sessions.

    All configuration is frozen (immutable) so the same instance can be
    shared between the session and the background writer thread.
    """

    # Dwell-time classification
    tier_thresholds: TierThresholds = field(default_factory=TierThresholds)
    min_exposures: int = 1  # Records with fewer exposures are not classified
    top_difficult_count: int = 10

    # Exposure policy
    early_mastery: EarlyMasteryRule = field(default_factory=EarlyMasteryRule)
    new_word_exposures: int = 10
    review_word_exposures: int = 5
    fixed_exposure_count: int = 10
    min_word_exposures: int = 2
    max_word_exposures: int = 15
    adaptive_max_duration_days: int = 10  # Goals this short use the adaptive strategy

    # Task planning
    front_load_ratio: float = 0.7  # Share of days in the front period
    front_load_words: float = 0.9  # Share of words introduced in the front period
    back_day_min_words: int = 50
    daily_review_cap: int = 20

    # Card queue
    buffer_cap: int = 3  # Longest allowed run of cards for one word
    visible_window: int = 3
    shuffle_cards: bool = True
    strict_invariants: bool = False
    completion_grace_delay: float = 0.5  # Seconds before the CLI shows the report

    # Reading passage trigger
    passage_difficulty_rate: float = 0.3
    passage_min_hard_words: int = 10
    passage_word_count: int = 10

    # Storage
    db_path: Path = field(default_factory=lambda: Path.home() / ".nfwords" / "nfwords.db")
    word_pool_path: Path | None = None
    background_workers: int = 2

    # DeepSeek reading passage client
    deepseek_api_url: str = "https://api.deepseek.com/v1/chat/completions"
    deepseek_api_key: str = ""
    deepseek_model: str = "deepseek-chat"
    deepseek_timeout: float = 30.0
    max_requests_per_day: int = 100
    max_articles_per_day: int = 10

    def __post_init__(self):
        """Convert string paths and nested dicts to their proper types."""
        if isinstance(self.db_path, str):
            object.__setattr__(self, "db_path", Path(self.db_path))
        if isinstance(self.word_pool_path, str):
            object.__setattr__(self, "word_pool_path", Path(self.word_pool_path))
        if isinstance(self.tier_thresholds, dict):
            object.__setattr__(self, "tier_thresholds", TierThresholds(**self.tier_thresholds))
        if isinstance(self.early_mastery, dict):
            object.__setattr__(self, "early_mastery", EarlyMasteryRule(**self.early_mastery))
        if self.buffer_cap < 1:
            raise ValueError(f"buffer_cap must be at least 1, got {self.buffer_cap}")
        if self.min_word_exposures > self.max_word_exposures:
            raise ValueError(
                f"min_word_exposures ({self.min_word_exposures}) exceeds "
                f"max_word_exposures ({self.max_word_exposures})"
            )
