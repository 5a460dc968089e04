"""Protocols for the study store."""

from collections.abc import Callable
from typing import Protocol

from nfwords.models import (
    DailyReport,
    DailyTask,
    LearningGoal,
    LearningRecord,
    ReadingPassage,
    SwipeDirection,
)

# Monotonic seconds, e.g. ``time.monotonic``.
Clock = Callable[[], float]

# Maps a word id to its display text, or None when unknown.
WordLookup = Callable[[int], str | None]


class StudyStoreReader(Protocol):
    """Read side of the study store."""

    def fetch_current_goal(self) -> LearningGoal | None:
        """Return the active learning goal, or None if there is none."""
        ...

    def fetch_today_task(self) -> DailyTask | None:
        """Return the task for the current goal's current day, or None."""
        ...

    def fetch_records_for_day(
        self, day: int, goal_id: int | None = None
    ) -> list[LearningRecord]:
        """Return the learning records saved after the given day's session.

        Args:
            day: 1-based plan day
            goal_id: Goal the records belong to (defaults to the current goal)

        Returns:
            Records for that day (empty when none were saved)
        """
        ...


class StudyStoreWriter(Protocol):
    """Write side of the study store.

    Writers are called from a background thread and may raise; callers log
    failures instead of propagating them.
    """

    def record_swipe_event(
        self,
        pack_id: int | None,
        word_id: int,
        direction: SwipeDirection,
        dwell_time: float,
        session_id: str,
    ) -> None:
        """Append one swipe to the event log."""
        ...

    def save_records(
        self, records: list[LearningRecord], day: int, goal_id: int | None = None
    ) -> None:
        """Persist the learning records of a finished session."""
        ...

    def save_report(self, report: DailyReport) -> int:
        """Persist a daily report and return its id."""
        ...

    def update_task(self, task: DailyTask) -> None:
        """Persist task progress and status."""
        ...

    def update_goal(self, goal: LearningGoal) -> None:
        """Persist goal progress and status."""
        ...

    def save_tasks(self, tasks: list[DailyTask]) -> None:
        """Insert or replace planned tasks."""
        ...

    def save_passage(self, passage: ReadingPassage, goal_id: int | None = None) -> None:
        """Persist a generated reading passage."""
        ...


class StudySessionStore(StudyStoreReader, StudyStoreWriter, Protocol):
    """Everything a study session reads and writes."""
