"""Orchestrator for running one day's study session."""

import logging
import random
import time
from collections.abc import Callable

from nfwords.config import NFWordsConfig
from nfwords.exceptions import PassageGenerationError, StorageError
from nfwords.interfaces import Clock, PresenterProtocol, StudySessionStore
from nfwords.models import (
    Card,
    DailyReport,
    DailyTask,
    LearningGoal,
    SessionResult,
    SwipeDirection,
    SwipeEvent,
    TaskStatus,
)
from nfwords.services import (
    BackgroundWriter,
    DwellTimeClassifier,
    PassageService,
    ReportService,
    WordPoolService,
    planner_for_goal,
    strategy_for_goal,
)

from .card_queue import AdaptiveCardQueue

logger = logging.getLogger(__name__)


class DailySessionRunner:
    """Orchestrate a study session from stored goal to saved report.

    Missing goals, tasks or records never stop a session: the runner falls
    back to the sample words and default exposure counts. Writes go through
    the background writer, so storage failures are logged without affecting
    the session. A failed reading passage request is reported as a warning.
    """

    def __init__(
        self,
        config: NFWordsConfig,
        store: StudySessionStore,
        word_pool: WordPoolService,
        presenter: PresenterProtocol,
        writer: BackgroundWriter,
        passage_service: PassageService | None = None,
        clock: Clock = time.monotonic,
        rng: random.Random | None = None,
    ):
        """Initialize the session runner.

        Args:
            config: Configuration
            store: Study store for goals, tasks, records and reports
            word_pool: Loaded word pool of the goal's pack
            presenter: Output presenter
            writer: Executes storage writes off the session
            passage_service: Optional reading passage client
            clock: Monotonic clock for dwell and session timing
            rng: Random source for shuffling cards
        """
        self.config = config
        self.store = store
        self.word_pool = word_pool
        self.presenter = presenter
        self.writer = writer
        self.passage_service = passage_service
        self.clock = clock
        self.rng = rng
        self.classifier = DwellTimeClassifier.from_config(config)
        self.report_service = ReportService(self.classifier, config)
        self.goal: LearningGoal | None = None
        self.task: DailyTask | None = None
        self.queue: AdaptiveCardQueue | None = None
        self._lookup = word_pool.lookup_text

    def prepare(self) -> AdaptiveCardQueue:
        """Load today's goal and task and build the card queue.

        Returns:
            A queue ready for the first swipe
        """
        goal = self._load_goal()
        task = self._load_task(goal) if goal is not None else None

        if goal is None or task is None:
            goal, task = self._fallback_goal_and_task()

        self.goal = goal
        self.task = task
        strategy = strategy_for_goal(goal, self.config, day=task.day)

        targets = dict(task.exposure_targets)
        for word_id in task.word_ids:
            targets.setdefault(word_id, self.config.new_word_exposures)

        self.presenter.show_task(task)
        self.queue = AdaptiveCardQueue.from_targets(
            targets,
            strategy,
            config=self.config,
            rng=self.rng,
            report_service=self.report_service,
            task=task,
            goal_id=goal.id,
            pack_id=goal.pack_id,
            word_lookup=self._lookup,
            clock=self.clock,
            event_sink=self._record_event,
            on_complete=self._persist_session,
        )
        return self.queue

    def run(self, answer: Callable[[Card], SwipeDirection]) -> SessionResult:
        """Run a whole session, asking ``answer`` for every card.

        Args:
            answer: Shows a card to the learner and returns their swipe

        Returns:
            SessionResult with the report and optional reading passage
        """
        queue = self.prepare()
        while not queue.is_complete:
            card = queue.current_card
            if card is None:
                # Nothing was scheduled; finish with an empty report.
                queue.handle_swipe(-1, SwipeDirection.RIGHT, 0.0)
                break
            queue.handle_current_swipe(answer(card))
        return self.finish(queue)

    def finish(self, queue: AdaptiveCardQueue) -> SessionResult:
        """Post-process a completed queue: show the report, maybe a passage."""
        result = SessionResult(report=queue.report, completed_count=queue.completed_count)
        if queue.report is not None:
            self.presenter.show_report(queue.report)

        analysis = self.report_service.analyze(queue.records, self._lookup)
        if self.passage_service is None or not self.report_service.should_generate_passage(
            analysis
        ):
            return result

        words = self.report_service.passage_words(analysis)
        word_ids = analysis.top_difficult_word_ids(self.config.passage_word_count)
        try:
            passage = self.passage_service.generate_reading_passage(words, word_ids)
        except PassageGenerationError as e:
            logger.warning(f"Reading passage generation failed: {e}")
            self.presenter.show_warning(f"Reading passage unavailable: {e}")
            result.passage_error = str(e)
            return result

        result.passage = passage
        self.presenter.show_passage(passage)
        self.writer.submit("save passage", self.store.save_passage, passage, queue.goal_id)
        return result

    def _load_goal(self) -> LearningGoal | None:
        try:
            goal = self.store.fetch_current_goal()
        except StorageError as e:
            logger.warning(f"Could not load the current goal: {e}")
            return None
        if goal is None:
            logger.info("No active learning goal found")
        return goal

    def _load_task(self, goal: LearningGoal) -> DailyTask | None:
        try:
            task = self.store.fetch_today_task()
            previous = (
                self.store.fetch_records_for_day(goal.current_day - 1, goal.id)
                if goal.current_day > 1
                else []
            )
        except StorageError as e:
            logger.warning(f"Could not load today's task: {e}")
            return None

        if task is not None and (task.status != TaskStatus.PENDING or not previous):
            return task

        # Plan (or re-plan) today's task so reviews reflect the last real session.
        planner = planner_for_goal(goal, self.config, self.classifier)
        strategy = strategy_for_goal(goal, self.config, day=goal.current_day)
        planned = planner.generate_daily_task(
            goal,
            goal.current_day,
            self.word_pool.word_ids[: goal.total_words],
            previous_day_records=previous,
            exposure_strategy=strategy,
        )
        if task is not None:
            planned.id = task.id
        self.writer.submit("save task", self.store.save_tasks, [planned])
        return planned

    def _fallback_goal_and_task(self) -> tuple[LearningGoal, DailyTask]:
        words = WordPoolService.default_words()
        self._lookup = {word.id: word.text for word in words}.get
        self.presenter.show_warning("No study plan found, practising the sample words")
        goal = LearningGoal(
            pack_id=0,
            pack_name="sample",
            total_words=len(words),
            duration_days=1,
        )
        targets = {word.id: self.config.new_word_exposures for word in words}
        task = DailyTask(
            goal_id=None,
            day=1,
            date=goal.start_date,
            new_words=list(targets),
            exposure_targets=targets,
            total_exposures=sum(targets.values()),
        )
        return goal, task

    def _record_event(self, event: SwipeEvent) -> None:
        if self.goal is None or self.goal.id is None:
            return
        self.writer.submit(
            "record swipe",
            self.store.record_swipe_event,
            event.pack_id,
            event.word_id,
            event.direction,
            event.dwell_time,
            event.session_id,
        )

    def _persist_session(self, report: DailyReport | None) -> None:
        goal = self.goal
        task = self.task
        if goal is None or goal.id is None or task is None:
            logger.info("Sample session finished, nothing to persist")
            return

        records = [r for r in self.queue.records if r.has_exposures] if self.queue else []
        self.writer.submit(
            "save records", self.store.save_records, records, task.day, goal.id
        )
        if report is not None:
            self.writer.submit("save report", self.store.save_report, report)
        self.writer.submit("update task", self.store.update_task, task)

        goal.completed_exposures += task.completed_exposures
        goal.completed_words += len(task.new_words)
        goal.advance_day()
        self.writer.submit("update goal", self.store.update_goal, goal)
