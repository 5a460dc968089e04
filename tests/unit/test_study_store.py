"""Tests for StudyStore."""

import sqlite3
from datetime import date

import pytest

from nfwords.exceptions import StorageError
from nfwords.models import (
    DailyReport,
    DailyTask,
    DwellTrend,
    GoalStatus,
    LearningGoal,
    ReadingPassage,
    SwipeDirection,
    TaskStatus,
    Topic,
    WordSummary,
)
from nfwords.services import StudyStore


@pytest.fixture
def goal():
    return LearningGoal(
        pack_id=42, pack_name="cet4", total_words=100, duration_days=10,
        start_date=date(2024, 3, 1),
    )


@pytest.fixture
def saved_goal(store, goal):
    store.save_goal(goal)
    return goal


class TestInitialization:
    """Tests for database setup."""

    def test_creates_database(self, temp_dir):
        store = StudyStore(temp_dir / "nested" / "study.db")
        assert not store.is_available()
        store.initialize()
        assert store.is_available()

    def test_initialize_twice(self, store):
        store.initialize()

    def test_unreadable_database(self, temp_dir):
        path = temp_dir / "broken.db"
        path.write_text("not a database")
        with pytest.raises(StorageError):
            StudyStore(path).initialize()


class TestGoals:
    """Tests for goal persistence."""

    def test_save_and_fetch(self, store, goal):
        goal_id = store.save_goal(goal)
        assert goal.id == goal_id

        loaded = store.fetch_current_goal()
        assert loaded == goal

    def test_no_goal(self, store):
        assert store.fetch_current_goal() is None
        assert store.fetch_latest_goal() is None

    def test_update_goal(self, store, saved_goal):
        saved_goal.current_day = 4
        saved_goal.completed_words = 36
        store.update_goal(saved_goal)
        assert store.fetch_current_goal().current_day == 4

    def test_abandon_active_goals(self, store, saved_goal):
        assert store.abandon_active_goals() == 1
        assert store.fetch_current_goal() is None
        assert store.fetch_latest_goal().status == GoalStatus.ABANDONED

    def test_current_goal_is_newest_active(self, store, saved_goal):
        newer = LearningGoal(pack_id=1, pack_name="gre", total_words=50, duration_days=5)
        store.save_goal(newer)
        assert store.fetch_current_goal().id == newer.id


class TestTasks:
    """Tests for task persistence."""

    def _task(self, goal, day=1):
        return DailyTask(
            goal_id=goal.id,
            day=day,
            date=goal.date_for_day(day),
            new_words=[1, 2],
            review_words=[7],
            exposure_targets={1: 10, 2: 10, 7: 5},
            total_exposures=25,
        )

    def test_save_and_fetch(self, store, saved_goal):
        task = self._task(saved_goal)
        store.save_tasks([task])

        loaded = store.fetch_today_task()
        assert loaded == task
        assert loaded.exposure_targets[7] == 5

    def test_replace_same_day(self, store, saved_goal):
        store.save_tasks([self._task(saved_goal)])
        task = self._task(saved_goal)
        task.start()
        task.completed_exposures = 25
        task.complete()
        store.update_task(task)

        loaded = store.fetch_task(saved_goal.id, 1)
        assert loaded.status == TaskStatus.COMPLETED
        assert loaded.completed_exposures == 25
        assert loaded.start_time is not None

    def test_today_follows_current_day(self, store, saved_goal):
        store.save_tasks([self._task(saved_goal, 1), self._task(saved_goal, 2)])
        saved_goal.current_day = 2
        store.update_goal(saved_goal)
        assert store.fetch_today_task().day == 2

    def test_no_goal_no_task(self, store):
        assert store.fetch_today_task() is None


class TestLearningRecords:
    """Tests for learning record persistence."""

    def test_save_and_fetch_for_day(self, store, saved_goal, make_record):
        records = [make_record(word_id=2, lefts=2, dwell=3.0), make_record(word_id=1, rights=1)]
        store.save_records(records, day=1)

        loaded = store.fetch_records_for_day(1)
        assert [r.word_id for r in loaded] == [1, 2]
        assert loaded[1] == records[0]
        assert store.fetch_records_for_day(2) == []

    def test_resave_replaces(self, store, saved_goal, make_record):
        store.save_records([make_record(word_id=1, rights=1)], day=1)
        store.save_records([make_record(word_id=1, rights=3)], day=1)
        (record,) = store.fetch_records_for_day(1)
        assert record.swipe_right_count == 3

    def test_without_goal(self, store, make_record):
        with pytest.raises(StorageError):
            store.save_records([make_record()], day=1)
        assert store.fetch_records_for_day(1) == []

    def test_explicit_goal_id(self, store, make_record):
        store.save_records([make_record()], day=1, goal_id=9)
        assert len(store.fetch_records_for_day(1, goal_id=9)) == 1

    def test_explicit_goal_id_after_goal_completes(self, store, saved_goal, make_record):
        saved_goal.status = GoalStatus.COMPLETED
        store.update_goal(saved_goal)

        store.save_records([make_record(word_id=4, rights=1)], day=1, goal_id=saved_goal.id)

        (record,) = store.fetch_records_for_day(1, goal_id=saved_goal.id)
        assert record.word_id == 4


class TestSwipeEvents:
    """Tests for swipe event logging."""

    def test_record_and_fetch(self, store):
        store.record_swipe_event(42, 7, SwipeDirection.LEFT, 2.5, "session-1")
        store.record_swipe_event(42, 8, "right", 0.8, "session-1")
        store.record_swipe_event(42, 9, SwipeDirection.RIGHT, 1.0, "session-2")

        events = store.fetch_swipe_events("session-1")
        assert [e.word_id for e in events] == [7, 8]
        assert events[0].direction == SwipeDirection.LEFT
        assert events[1].direction == SwipeDirection.RIGHT
        assert events[0].dwell_time == 2.5


class TestReports:
    """Tests for report persistence."""

    def test_save_and_fetch(self, store):
        report = DailyReport(
            goal_id=1,
            day=3,
            report_date=date(2024, 3, 3),
            total_words_studied=2,
            total_exposures=12,
            study_duration=95.0,
            swipe_right_count=8,
            swipe_left_count=4,
            avg_dwell_time=2.0,
            median_dwell_time=2.0,
            dwell_trend=DwellTrend.DECLINING,
            sorted_by_dwell_time=[
                WordSummary(2, "paradigm", 3.0, 3, 2, 5),
                WordSummary(1, "abandon", 1.0, 1, 6, 7),
            ],
            familiar_words=[1],
            unfamiliar_words=[2],
        )
        report_id = store.save_report(report)

        loaded = store.fetch_report(1, 3)
        assert loaded.id == report_id
        assert loaded == report
        assert loaded.dwell_trend is DwellTrend.DECLINING

    def test_missing_report(self, store):
        assert store.fetch_report(1, 1) is None

    def test_report_without_goal(self, store):
        store.save_report(DailyReport(goal_id=None, day=1))
        assert store.fetch_report(None, 1) is not None


class TestPassages:
    """Tests for passage persistence."""

    def test_save_and_fetch(self, store):
        passage = ReadingPassage(
            content="Climate change is inevitable.",
            target_words=["inevitable"],
            target_word_ids=[25],
            topic=Topic.ENVIRONMENT,
        )
        store.save_passage(passage, goal_id=1)

        (loaded,) = store.fetch_passages(goal_id=1)
        assert loaded == passage
        assert store.fetch_passages(goal_id=2) == []


class TestErrors:
    """Tests for error translation."""

    def test_sqlite_errors_become_storage_errors(self, store):
        with pytest.raises(StorageError):
            with store._connect() as conn:
                conn.execute("SELECT * FROM missing_table")

    def test_storage_error_chains_cause(self, store):
        with pytest.raises(StorageError) as exc_info:
            with store._connect() as conn:
                conn.execute("INSERT INTO goals (id) VALUES (1)")
        assert isinstance(exc_info.value.__cause__, sqlite3.Error)
