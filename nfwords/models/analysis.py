"""Data models for dwell-time analysis results."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from .record import LearningRecord


class FamiliarityTier(str, Enum):
    """Familiarity tiers, ordered from easiest to hardest."""

    VERY_FAMILIAR = "very_familiar"
    FAMILIAR = "familiar"
    UNFAMILIAR = "unfamiliar"
    DIFFICULT = "difficult"
    VERY_DIFFICULT = "very_difficult"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")

    @property
    def is_hard(self) -> bool:
        """Whether words in this tier count towards the difficulty rate."""
        return self in HARD_TIERS


HARD_TIERS = (
    FamiliarityTier.UNFAMILIAR,
    FamiliarityTier.DIFFICULT,
    FamiliarityTier.VERY_DIFFICULT,
)
EASY_TIERS = (FamiliarityTier.VERY_FAMILIAR, FamiliarityTier.FAMILIAR)


class DwellTrend(str, Enum):
    """Direction of dwell time between the two halves of a record set."""

    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


@dataclass(frozen=True)
class RankedWord:
    """A classified record together with its display text."""

    word_id: int
    text: str
    avg_dwell_time: float
    tier: FamiliarityTier
    record: LearningRecord


@dataclass(frozen=True)
class DwellTimeAnalysis:
    """Snapshot of a dwell-time classification.

    Records are copies taken at analysis time; later swipes do not change
    an existing analysis. ``tiers_by_word`` is a read-only view.
    """

    very_familiar: tuple[LearningRecord, ...] = ()
    familiar: tuple[LearningRecord, ...] = ()
    unfamiliar: tuple[LearningRecord, ...] = ()
    difficult: tuple[LearningRecord, ...] = ()
    very_difficult: tuple[LearningRecord, ...] = ()
    sorted_records: tuple[LearningRecord, ...] = ()
    sorted_with_words: tuple[RankedWord, ...] = ()
    avg_dwell_time: float = 0.0
    median_dwell_time: float = 0.0
    difficulty_rate: float = 0.0
    mastery_rate: float = 0.0
    tiers_by_word: Mapping[int, FamiliarityTier] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def total_words(self) -> int:
        return len(self.sorted_records)

    @property
    def is_empty(self) -> bool:
        return not self.sorted_records

    def records_in(self, tier: FamiliarityTier) -> tuple[LearningRecord, ...]:
        """Return the records classified into ``tier``."""
        return {
            FamiliarityTier.VERY_FAMILIAR: self.very_familiar,
            FamiliarityTier.FAMILIAR: self.familiar,
            FamiliarityTier.UNFAMILIAR: self.unfamiliar,
            FamiliarityTier.DIFFICULT: self.difficult,
            FamiliarityTier.VERY_DIFFICULT: self.very_difficult,
        }[tier]

    @property
    def distribution(self) -> dict[FamiliarityTier, int]:
        """Number of words per tier, in tier order."""
        return {tier: len(self.records_in(tier)) for tier in FamiliarityTier}

    @property
    def hard_word_count(self) -> int:
        return sum(len(self.records_in(tier)) for tier in HARD_TIERS)

    def tier_of(self, word_id: int) -> FamiliarityTier | None:
        """Tier of a word, or None if it was not classified."""
        return self.tiers_by_word.get(word_id)

    def top_difficult_word_ids(self, count: int = 10) -> list[int]:
        """Ids of the ``count`` words with the longest mean dwell time."""
        return [record.word_id for record in self.sorted_records[:count]]

    def top_difficult_words(self, count: int = 10) -> list[str]:
        """Display text of the ``count`` words with the longest mean dwell time."""
        return [ranked.text for ranked in self.sorted_with_words[:count]]

    def brief_summary(self) -> str:
        """One-line summary, e.g. ``'12 words, avg 2.3s, 40% hard'``."""
        if self.is_empty:
            return "no words studied"
        return (
            f"{self.total_words} words, avg {self.avg_dwell_time:.1f}s, "
            f"{self.difficulty_rate:.0%} hard"
        )
