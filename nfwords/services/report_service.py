"""Service for building daily study reports."""

import logging
from collections.abc import Iterable
from datetime import date

from nfwords.config import NFWordsConfig, create_default_config
from nfwords.interfaces import WordLookup
from nfwords.models import (
    EASY_TIERS,
    HARD_TIERS,
    DailyReport,
    DwellTimeAnalysis,
    LearningRecord,
    WordSummary,
)

from .dwell_time_classifier import DwellTimeClassifier

logger = logging.getLogger(__name__)


class ReportService:
    """Turns the learning records of a finished session into a DailyReport."""

    def __init__(
        self,
        classifier: DwellTimeClassifier | None = None,
        config: NFWordsConfig | None = None,
    ):
        self.config = config or create_default_config()
        self.classifier = classifier or DwellTimeClassifier.from_config(self.config)

    def analyze(
        self, records: Iterable[LearningRecord], word_lookup: WordLookup | None = None
    ) -> DwellTimeAnalysis:
        return self.classifier.analyze(records, word_lookup)

    def generate_report(
        self,
        records: Iterable[LearningRecord],
        goal_id: int | None,
        day: int,
        study_duration: float = 0.0,
        swipe_right_count: int = 0,
        swipe_left_count: int = 0,
        word_lookup: WordLookup | None = None,
        report_date: date | None = None,
    ) -> DailyReport:
        """Classify the session's records and assemble the report.

        Args:
            records: Learning records of the session
            goal_id: Goal the session belongs to
            day: 1-based plan day
            study_duration: Session length in seconds
            swipe_right_count: Final right-swipe counter of the queue
            swipe_left_count: Final left-swipe counter of the queue
            word_lookup: Optional word id -> text resolver
            report_date: Defaults to today

        Returns:
            The report; an empty report if no word was shown
        """
        records = list(records)
        analysis = self.analyze(records, word_lookup)
        report_date = report_date or date.today()

        if analysis.is_empty:
            logger.info(f"No studied words for day {day}, creating empty report")
            return DailyReport(
                goal_id=goal_id,
                day=day,
                report_date=report_date,
                study_duration=study_duration,
                swipe_right_count=swipe_right_count,
                swipe_left_count=swipe_left_count,
            )

        summaries = [
            WordSummary(
                word_id=ranked.word_id,
                word=ranked.text,
                avg_dwell_time=ranked.avg_dwell_time,
                swipe_left_count=ranked.record.swipe_left_count,
                swipe_right_count=ranked.record.swipe_right_count,
                total_exposures=ranked.record.total_exposure_count,
            )
            for ranked in analysis.sorted_with_words
        ]

        report = DailyReport(
            goal_id=goal_id,
            day=day,
            report_date=report_date,
            total_words_studied=analysis.total_words,
            total_exposures=sum(s.total_exposures for s in summaries),
            study_duration=study_duration,
            swipe_right_count=swipe_right_count,
            swipe_left_count=swipe_left_count,
            avg_dwell_time=analysis.avg_dwell_time,
            median_dwell_time=analysis.median_dwell_time,
            dwell_trend=self.classifier.analyze_trend(records),
            sorted_by_dwell_time=summaries,
            familiar_words=[
                r.word_id for tier in EASY_TIERS for r in analysis.records_in(tier)
            ],
            unfamiliar_words=[
                r.word_id for tier in HARD_TIERS for r in analysis.records_in(tier)
            ],
        )
        logger.info(f"Report for day {day}: {analysis.brief_summary()}")
        return report

    def should_generate_passage(self, analysis: DwellTimeAnalysis) -> bool:
        """Whether the session was hard enough to warrant a reading passage."""
        return (
            analysis.difficulty_rate > self.config.passage_difficulty_rate
            and analysis.hard_word_count >= self.config.passage_min_hard_words
        )

    def passage_words(self, analysis: DwellTimeAnalysis) -> list[str]:
        """The hardest words to build a passage around."""
        return analysis.top_difficult_words(self.config.passage_word_count)
