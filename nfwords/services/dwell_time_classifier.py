"""Service for classifying word familiarity from dwell time."""

import logging
import statistics
from collections.abc import Iterable
from dataclasses import replace
from types import MappingProxyType

from nfwords.config import NFWordsConfig, TierThresholds
from nfwords.interfaces import WordLookup
from nfwords.models import (
    DwellTimeAnalysis,
    DwellTrend,
    FamiliarityTier,
    LearningRecord,
    RankedWord,
)

logger = logging.getLogger(__name__)

TREND_MIN_RECORDS = 10


class DwellTimeClassifier:
    """Buckets learning records into five familiarity tiers.

    A word's tier depends only on its mean dwell time. Records with fewer
    than ``min_exposures`` exposures are ignored, so words that were never
    shown do not dilute the rates.
    """

    def __init__(
        self,
        thresholds: TierThresholds | None = None,
        min_exposures: int = 1,
    ):
        """Initialize the classifier.

        Args:
            thresholds: Tier boundaries in seconds (defaults 1.0/2.0/3.5/5.0)
            min_exposures: Minimum exposures for a record to be classified
        """
        self.thresholds = thresholds or TierThresholds()
        self.min_exposures = min_exposures

    @classmethod
    def from_config(cls, config: NFWordsConfig) -> "DwellTimeClassifier":
        return cls(thresholds=config.tier_thresholds, min_exposures=config.min_exposures)

    def classify(self, avg_dwell_time: float) -> FamiliarityTier:
        """Return the tier for a mean dwell time in seconds."""
        if avg_dwell_time < self.thresholds.very_familiar:
            return FamiliarityTier.VERY_FAMILIAR
        if avg_dwell_time < self.thresholds.familiar:
            return FamiliarityTier.FAMILIAR
        if avg_dwell_time < self.thresholds.unfamiliar:
            return FamiliarityTier.UNFAMILIAR
        if avg_dwell_time < self.thresholds.difficult:
            return FamiliarityTier.DIFFICULT
        return FamiliarityTier.VERY_DIFFICULT

    def eligible(self, records: Iterable[LearningRecord]) -> list[LearningRecord]:
        """Records with enough exposures to be classified."""
        return [r for r in records if r.total_exposure_count >= max(self.min_exposures, 1)]

    def analyze(
        self,
        records: Iterable[LearningRecord],
        word_lookup: WordLookup | None = None,
    ) -> DwellTimeAnalysis:
        """Classify records and compute summary statistics.

        Args:
            records: Learning records to analyze
            word_lookup: Optional word id -> text resolver for display

        Returns:
            A fresh analysis snapshot. No eligible records yields an empty
            analysis with zero rates.
        """
        eligible = [replace(r) for r in self.eligible(records)]
        if not eligible:
            logger.debug("No eligible records to analyze")
            return DwellTimeAnalysis()

        tiers: dict[FamiliarityTier, list[LearningRecord]] = {t: [] for t in FamiliarityTier}
        tiers_by_word: dict[int, FamiliarityTier] = {}
        for record in eligible:
            tier = self.classify(record.avg_dwell_time)
            tiers[tier].append(record)
            tiers_by_word[record.word_id] = tier

        ranked = sorted(eligible, key=lambda r: (-r.avg_dwell_time, r.word_id))
        ranked_words = tuple(
            RankedWord(
                word_id=r.word_id,
                text=self._resolve_text(r.word_id, word_lookup),
                avg_dwell_time=r.avg_dwell_time,
                tier=tiers_by_word[r.word_id],
                record=r,
            )
            for r in ranked
        )

        dwell_times = [r.avg_dwell_time for r in eligible]
        total = len(eligible)
        hard = sum(1 for tier in tiers_by_word.values() if tier.is_hard)

        analysis = DwellTimeAnalysis(
            very_familiar=tuple(tiers[FamiliarityTier.VERY_FAMILIAR]),
            familiar=tuple(tiers[FamiliarityTier.FAMILIAR]),
            unfamiliar=tuple(tiers[FamiliarityTier.UNFAMILIAR]),
            difficult=tuple(tiers[FamiliarityTier.DIFFICULT]),
            very_difficult=tuple(tiers[FamiliarityTier.VERY_DIFFICULT]),
            sorted_records=tuple(ranked),
            sorted_with_words=ranked_words,
            avg_dwell_time=sum(dwell_times) / total,
            median_dwell_time=statistics.median(dwell_times),
            difficulty_rate=hard / total,
            mastery_rate=len(tiers[FamiliarityTier.VERY_FAMILIAR]) / total,
            tiers_by_word=MappingProxyType(tiers_by_word),
        )
        logger.debug(f"Analyzed {total} records: {analysis.brief_summary()}")
        return analysis

    def analyze_trend(self, records: Iterable[LearningRecord]) -> DwellTrend:
        """Compare mean dwell time of the first and second half of the records.

        Records are ordered by word id, which follows pack order. Fewer than
        ten eligible records are reported as stable.
        """
        eligible = sorted(self.eligible(records), key=lambda r: r.word_id)
        if len(eligible) < TREND_MIN_RECORDS:
            return DwellTrend.STABLE

        middle = len(eligible) // 2
        first = statistics.fmean(r.avg_dwell_time for r in eligible[:middle])
        second = statistics.fmean(r.avg_dwell_time for r in eligible[middle:])

        if second == first or abs(second - first) < first * 0.1:
            return DwellTrend.STABLE
        if second < first * 0.9:
            return DwellTrend.IMPROVING
        return DwellTrend.DECLINING

    @staticmethod
    def _resolve_text(word_id: int, word_lookup: WordLookup | None) -> str:
        if word_lookup is None:
            return str(word_id)
        text = word_lookup(word_id)
        return text if text else str(word_id)
