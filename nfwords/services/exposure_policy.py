"""Exposure strategies: how often to show a word and when to stop."""

import logging
from enum import Enum

from nfwords.config import EarlyMasteryRule, NFWordsConfig, TierThresholds
from nfwords.models import FamiliarityTier, LearningGoal, LearningRecord

from .dwell_time_classifier import DwellTimeClassifier

logger = logging.getLogger(__name__)

# Base exposure count per familiarity tier for words with history.
TIER_BASE_EXPOSURES = {
    FamiliarityTier.VERY_FAMILIAR: 3,
    FamiliarityTier.FAMILIAR: 5,
    FamiliarityTier.UNFAMILIAR: 7,
    FamiliarityTier.DIFFICULT: 10,
    FamiliarityTier.VERY_DIFFICULT: 10,
}


class ExposureStrategyKind(str, Enum):
    FIXED = "fixed"
    ADAPTIVE = "adaptive"


class FixedExposureStrategy:
    """Show every word the same number of times, with no early stop."""

    def __init__(self, count: int = 10):
        if count < 1:
            raise ValueError(f"count must be at least 1, got {count}")
        self.count = count

    @property
    def strategy_name(self) -> str:
        return ExposureStrategyKind.FIXED.value

    @property
    def strategy_description(self) -> str:
        return f"Every word is shown {self.count} times"

    def calculate_exposures(self, record: LearningRecord) -> int:
        return self.count

    def should_continue_exposure(self, record: LearningRecord) -> bool:
        return record.remaining_exposures > 0


class AdaptiveExposureStrategy:
    """Adjust exposure counts to dwell time, swipes and program phase.

    Words the learner clearly knows stop early: once a word has at least
    ``rule.min_exposures`` exposures, a right-swipe ratio of at least
    ``rule.min_right_ratio`` and a mean dwell below ``rule.max_avg_dwell``
    its remaining cards are dropped.
    """

    def __init__(
        self,
        current_day: int = 1,
        total_days: int = 1,
        rule: EarlyMasteryRule | None = None,
        thresholds: TierThresholds | None = None,
        new_word_exposures: int = 10,
        min_exposures: int = 2,
        max_exposures: int = 15,
    ):
        """Initialize the strategy.

        Args:
            current_day: 1-based day of the goal being studied
            total_days: Goal duration in days
            rule: Early mastery conditions
            thresholds: Dwell-time tier boundaries
            new_word_exposures: Exposures for words without history
            min_exposures: Lower bound of a calculated count
            max_exposures: Upper bound of a dwell/swipe based count
        """
        self.current_day = current_day
        self.total_days = max(total_days, 1)
        self.rule = rule or EarlyMasteryRule()
        self.classifier = DwellTimeClassifier(thresholds=thresholds)
        self.new_word_exposures = new_word_exposures
        self.min_exposures = min_exposures
        self.max_exposures = max_exposures

    @property
    def strategy_name(self) -> str:
        return ExposureStrategyKind.ADAPTIVE.value

    @property
    def strategy_description(self) -> str:
        return (
            f"Adaptive exposures for day {self.current_day} of {self.total_days}, "
            f"stopping early on mastered words"
        )

    @property
    def phase_modifier(self) -> float:
        """More exposures early in the program, fewer towards the end."""
        progress = self.current_day / self.total_days
        if progress < 0.3:
            return 1.2
        if progress < 0.7:
            return 1.0
        return 0.8

    def calculate_exposures(self, record: LearningRecord) -> int:
        if not record.has_exposures:
            base = self.new_word_exposures
        else:
            base = TIER_BASE_EXPOSURES[self.classifier.classify(record.avg_dwell_time)]
            net_right = record.swipe_right_count - record.swipe_left_count
            if net_right > 0:
                base -= net_right
            elif net_right < 0:
                base += 2 * -net_right
            base = min(max(base, self.min_exposures), self.max_exposures)

        return max(int(base * self.phase_modifier), self.min_exposures)

    def should_continue_exposure(self, record: LearningRecord) -> bool:
        if record.remaining_exposures == 0:
            return False
        return not self.is_mastered(record)

    def is_mastered(self, record: LearningRecord) -> bool:
        """Whether the record satisfies the early mastery rule."""
        return (
            record.total_exposure_count >= self.rule.min_exposures
            and record.right_swipe_ratio >= self.rule.min_right_ratio
            and record.avg_dwell_time < self.rule.max_avg_dwell
        )


def select_strategy_kind(goal: LearningGoal, config: NFWordsConfig) -> ExposureStrategyKind:
    """Short goals use the adaptive strategy, longer ones a fixed count."""
    if goal.duration_days <= config.adaptive_max_duration_days:
        return ExposureStrategyKind.ADAPTIVE
    return ExposureStrategyKind.FIXED


def strategy_for_goal(
    goal: LearningGoal,
    config: NFWordsConfig,
    day: int | None = None,
) -> FixedExposureStrategy | AdaptiveExposureStrategy:
    """Build the exposure strategy for a goal.

    Args:
        goal: The learning goal being studied
        config: Policy constants
        day: Plan day; defaults to the goal's current day

    Returns:
        A strategy implementing the ExposureStrategy protocol
    """
    kind = select_strategy_kind(goal, config)
    if kind == ExposureStrategyKind.FIXED:
        strategy = FixedExposureStrategy(config.fixed_exposure_count)
    else:
        strategy = AdaptiveExposureStrategy(
            current_day=day if day is not None else goal.current_day,
            total_days=goal.duration_days,
            rule=config.early_mastery,
            thresholds=config.tier_thresholds,
            new_word_exposures=config.new_word_exposures,
            min_exposures=config.min_word_exposures,
            max_exposures=config.max_word_exposures,
        )
    logger.debug(f"Using {strategy.strategy_name} exposure strategy for goal {goal.id}")
    return strategy
