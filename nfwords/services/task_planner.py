"""Service for planning daily study tasks for a learning goal."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import ClassVar

from nfwords.config import NFWordsConfig
from nfwords.interfaces import ExposureStrategy
from nfwords.models import DailyTask, DwellTimeAnalysis, LearningGoal, LearningRecord

from .dwell_time_classifier import DwellTimeClassifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlannerConfig:
    """Shape of the new-word curve and default exposure counts."""

    front_load_ratio: float = 0.7
    front_load_words: float = 0.9
    back_day_min_words: int = 50
    daily_review_cap: int = 20
    new_word_exposures: int = 10
    review_word_exposures: int = 5

    STANDARD: ClassVar["PlannerConfig"]
    INTENSIVE: ClassVar["PlannerConfig"]
    RELAXED: ClassVar["PlannerConfig"]

    @classmethod
    def from_config(cls, config: NFWordsConfig) -> "PlannerConfig":
        return cls(
            front_load_ratio=config.front_load_ratio,
            front_load_words=config.front_load_words,
            back_day_min_words=config.back_day_min_words,
            daily_review_cap=config.daily_review_cap,
            new_word_exposures=config.new_word_exposures,
            review_word_exposures=config.review_word_exposures,
        )


PlannerConfig.STANDARD = PlannerConfig()
PlannerConfig.INTENSIVE = PlannerConfig(
    front_load_ratio=0.6,
    front_load_words=0.95,
    daily_review_cap=30,
    new_word_exposures=12,
    review_word_exposures=6,
)
PlannerConfig.RELAXED = PlannerConfig(
    front_load_ratio=0.8,
    front_load_words=0.85,
    daily_review_cap=15,
    new_word_exposures=8,
    review_word_exposures=4,
)


class TaskPlanner:
    """Front-loaded planner.

    Most words are introduced early: the first ``front_load_ratio`` of the
    days share ``front_load_words`` of the goal's words evenly, and the
    remaining days share the rest with a floor of ``back_day_min_words``.
    Counts are capped so no day runs past the goal, and the last day picks
    up the rounding remainder. Reviews come from the previous day's
    hardest words.
    """

    planner_name = "front_loaded"

    def __init__(
        self,
        config: PlannerConfig | None = None,
        classifier: DwellTimeClassifier | None = None,
        pool_excludes_consumed: bool = False,
    ):
        """Initialize the planner.

        Args:
            config: Curve and exposure parameters (defaults to STANDARD)
            classifier: Classifier used on previous-day records
            pool_excludes_consumed: True if callers pass pools that no longer
                contain already introduced words, so selection starts at 0
        """
        self.config = config or PlannerConfig.STANDARD
        self.classifier = classifier or DwellTimeClassifier()
        self.pool_excludes_consumed = pool_excludes_consumed

    def front_days(self, goal: LearningGoal) -> int:
        return max(1, int(self.config.front_load_ratio * goal.duration_days))

    def curve_count(self, goal: LearningGoal, day: int) -> int:
        """Uncapped new word count the curve gives a 1-based day."""
        front_days = self.front_days(goal)
        if day <= front_days:
            return int(goal.total_words * self.config.front_load_words / front_days)
        back_days = goal.duration_days - front_days
        back_words = int(goal.total_words * round(1 - self.config.front_load_words, 6))
        return max(back_words // back_days, self.config.back_day_min_words)

    def daily_new_word_counts(self, goal: LearningGoal) -> list[int]:
        """New word count for every day of the goal.

        Each day takes its curve count, capped at the words not yet
        scheduled. The last day takes whatever is left, so the counts
        always sum to ``goal.total_words``.
        """
        counts: list[int] = []
        scheduled = 0
        for day in range(1, goal.duration_days + 1):
            remaining = goal.total_words - scheduled
            if day == goal.duration_days:
                count = remaining
            else:
                count = min(self.curve_count(goal, day), remaining)
            counts.append(count)
            scheduled += count
        return counts

    def new_word_count(self, goal: LearningGoal, day: int) -> int:
        """Number of new words scheduled for a 1-based day."""
        return self.daily_new_word_counts(goal)[day - 1]

    def new_word_offset(self, goal: LearningGoal, day: int) -> int:
        """Pool index of the first new word for a day."""
        if self.pool_excludes_consumed:
            return 0
        return sum(self.daily_new_word_counts(goal)[: day - 1])

    def generate_daily_task(
        self,
        goal: LearningGoal,
        day: int,
        word_pool: Sequence[int],
        previous_day_records: Iterable[LearningRecord] | None = None,
        previous_analysis: DwellTimeAnalysis | None = None,
        exposure_strategy: ExposureStrategy | None = None,
    ) -> DailyTask:
        """Build the task for one day of a goal.

        Args:
            goal: The learning goal
            day: 1-based plan day
            word_pool: Word ids in pack order
            previous_day_records: Records saved after the previous day's session
            previous_analysis: Precomputed analysis of those records
            exposure_strategy: Overrides the default per-word exposure counts

        Returns:
            The day's task. Days without previous analysis have no reviews.

        Raises:
            ValueError: If ``day`` is outside the goal's duration
        """
        if not 1 <= day <= goal.duration_days:
            raise ValueError(f"day must be between 1 and {goal.duration_days}, got {day}")

        offset = self.new_word_offset(goal, day)
        count = self.new_word_count(goal, day)
        new_words = list(word_pool[offset : offset + count])

        previous_records = list(previous_day_records or [])
        review_words = self._select_review_words(
            day, previous_records, previous_analysis, exclude=set(new_words)
        )

        exposure_targets = self._exposure_targets(
            new_words, review_words, previous_records, previous_analysis, exposure_strategy
        )

        task = DailyTask(
            goal_id=goal.id,
            day=day,
            date=goal.date_for_day(day),
            new_words=new_words,
            review_words=review_words,
            exposure_targets=exposure_targets,
            total_exposures=sum(exposure_targets.values()),
        )
        logger.info(
            f"Planned day {day}/{goal.duration_days}: {len(new_words)} new, "
            f"{len(review_words)} review, {task.total_exposures} exposures"
        )
        return task

    def generate_complete_plan(
        self, goal: LearningGoal, word_pool: Sequence[int]
    ) -> list[DailyTask]:
        """Build tasks for every day of the goal.

        Future days have no real session data, so none of them get reviews;
        reviews are added when a day's task is regenerated from saved records.
        """
        return [
            self.generate_daily_task(goal, day, word_pool)
            for day in range(1, goal.duration_days + 1)
        ]

    def _select_review_words(
        self,
        day: int,
        previous_records: list[LearningRecord],
        previous_analysis: DwellTimeAnalysis | None,
        exclude: set[int],
    ) -> list[int]:
        if day == 1:
            return []

        analysis = previous_analysis
        if analysis is None and previous_records:
            analysis = self.classifier.analyze(previous_records)
        if analysis is None or analysis.is_empty:
            logger.debug(f"No previous analysis for day {day}, skipping reviews")
            return []

        candidates = analysis.top_difficult_word_ids(analysis.total_words)
        return [w for w in candidates if w not in exclude][: self.config.daily_review_cap]

    def _exposure_targets(
        self,
        new_words: list[int],
        review_words: list[int],
        previous_records: list[LearningRecord],
        previous_analysis: DwellTimeAnalysis | None,
        exposure_strategy: ExposureStrategy | None,
    ) -> dict[int, int]:
        targets: dict[int, int] = {}
        if exposure_strategy is None:
            for word_id in new_words:
                targets[word_id] = self.config.new_word_exposures
            for word_id in review_words:
                targets[word_id] = self.config.review_word_exposures
            return targets

        history = {r.word_id: r for r in previous_records}
        if previous_analysis is not None:
            history.update({r.word_id: r for r in previous_analysis.sorted_records})

        for word_id in new_words:
            targets[word_id] = exposure_strategy.calculate_exposures(
                LearningRecord.initial(word_id)
            )
        for word_id in review_words:
            record = history.get(word_id) or LearningRecord.initial(word_id)
            targets[word_id] = exposure_strategy.calculate_exposures(record)
        return targets


class BalancedTaskPlanner(TaskPlanner):
    """Even planner: every day gets the same number of new words.

    The remainder of the division goes to the last day.
    """

    planner_name = "balanced"

    def curve_count(self, goal: LearningGoal, day: int) -> int:
        return goal.total_words // goal.duration_days


def planner_for_goal(
    goal: LearningGoal,
    config: NFWordsConfig | None = None,
    classifier: DwellTimeClassifier | None = None,
    pool_excludes_consumed: bool = False,
) -> TaskPlanner:
    """Pick a planner variant from the goal's duration.

    Up to a week is intensive, up to 15 days standard, up to 30 days
    relaxed and anything longer uses the balanced planner. The standard
    curve takes its parameters from ``config`` when one is given.
    """
    if goal.duration_days <= 7:
        planner_config = PlannerConfig.INTENSIVE
    elif goal.duration_days <= 15:
        planner_config = PlannerConfig.from_config(config) if config else PlannerConfig.STANDARD
    elif goal.duration_days <= 30:
        planner_config = PlannerConfig.RELAXED
    else:
        return BalancedTaskPlanner(
            classifier=classifier, pool_excludes_consumed=pool_excludes_consumed
        )
    return TaskPlanner(
        config=planner_config, classifier=classifier, pool_excludes_consumed=pool_excludes_consumed
    )
