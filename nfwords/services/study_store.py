"""SQLite-backed store for goals, tasks, learning records and reports."""

import json
import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, datetime, timezone
from pathlib import Path

from nfwords.exceptions import StorageError
from nfwords.models import (
    DailyReport,
    DailyTask,
    DwellTrend,
    GoalStatus,
    LearningGoal,
    LearningRecord,
    ReadingPassage,
    SwipeDirection,
    SwipeEvent,
    WordSummary,
)

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".nfwords" / "nfwords.db"

SCHEMA = """
CREATE TABLE IF NOT EXISTS goals (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    pack_id INTEGER NOT NULL,
    pack_name TEXT NOT NULL DEFAULT '',
    total_words INTEGER NOT NULL,
    duration_days INTEGER NOT NULL,
    daily_new_words INTEGER NOT NULL DEFAULT 0,
    start_date TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'in_progress',
    current_day INTEGER NOT NULL DEFAULT 1,
    completed_words INTEGER NOT NULL DEFAULT 0,
    completed_exposures INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    goal_id INTEGER NOT NULL,
    day INTEGER NOT NULL,
    date TEXT NOT NULL,
    new_words TEXT NOT NULL DEFAULT '[]',
    review_words TEXT NOT NULL DEFAULT '[]',
    exposure_targets TEXT NOT NULL DEFAULT '{}',
    total_exposures INTEGER NOT NULL DEFAULT 0,
    completed_exposures INTEGER NOT NULL DEFAULT 0,
    status TEXT NOT NULL DEFAULT 'pending',
    start_time TEXT,
    end_time TEXT,
    UNIQUE (goal_id, day)
);
CREATE TABLE IF NOT EXISTS learning_records (
    goal_id INTEGER NOT NULL,
    day INTEGER NOT NULL,
    word_id INTEGER NOT NULL,
    target_exposures INTEGER NOT NULL,
    remaining_exposures INTEGER NOT NULL,
    total_exposure_count INTEGER NOT NULL,
    swipe_right_count INTEGER NOT NULL,
    swipe_left_count INTEGER NOT NULL,
    avg_dwell_time REAL NOT NULL,
    last_dwell_time REAL NOT NULL,
    PRIMARY KEY (goal_id, day, word_id)
);
CREATE TABLE IF NOT EXISTS swipe_events (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    pack_id INTEGER,
    word_id INTEGER NOT NULL,
    direction TEXT NOT NULL,
    dwell_time REAL NOT NULL,
    session_id TEXT NOT NULL,
    timestamp TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS reports (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    goal_id INTEGER,
    day INTEGER NOT NULL,
    report_date TEXT NOT NULL,
    payload TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS passages (
    id TEXT PRIMARY KEY,
    goal_id INTEGER,
    content TEXT NOT NULL,
    target_words TEXT NOT NULL DEFAULT '[]',
    target_word_ids TEXT NOT NULL DEFAULT '[]',
    topic TEXT NOT NULL,
    created_at TEXT NOT NULL
);
"""


class StudyStore:
    """Persistent storage for study progress.

    Every method opens its own connection, so the store can be used from the
    background writer thread while the session runs on the main thread.
    SQLite errors are raised as StorageError.
    """

    def __init__(self, db_path: Path = DEFAULT_DB_PATH):
        """Initialize the study store.

        Args:
            db_path: Path to the SQLite database file
        """
        self.db_path = db_path

    def initialize(self) -> None:
        """Create the database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.executescript(SCHEMA)

    def is_available(self) -> bool:
        return self.db_path.exists()

    # Goals

    def save_goal(self, goal: LearningGoal) -> int:
        """Insert a new goal and return its id (also set on ``goal``)."""
        with self._connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO goals
                    (pack_id, pack_name, total_words, duration_days, daily_new_words,
                     start_date, status, current_day, completed_words, completed_exposures)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    goal.pack_id,
                    goal.pack_name,
                    goal.total_words,
                    goal.duration_days,
                    goal.daily_new_words,
                    goal.start_date.isoformat(),
                    goal.status.value,
                    goal.current_day,
                    goal.completed_words,
                    goal.completed_exposures,
                ),
            )
            goal.id = cursor.lastrowid
        logger.debug(f"Saved goal {goal.id} for pack {goal.pack_name!r}")
        return goal.id  # type: ignore[return-value]

    def update_goal(self, goal: LearningGoal) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                UPDATE goals SET status = ?, current_day = ?, completed_words = ?,
                    completed_exposures = ?
                WHERE id = ?
                """,
                (
                    goal.status.value,
                    goal.current_day,
                    goal.completed_words,
                    goal.completed_exposures,
                    goal.id,
                ),
            )

    def fetch_current_goal(self) -> LearningGoal | None:
        """Return the most recently created goal that is still in progress."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM goals WHERE status = ? ORDER BY id DESC LIMIT 1",
                (GoalStatus.IN_PROGRESS.value,),
            ).fetchone()
        return self._row_to_goal(row) if row else None

    def fetch_latest_goal(self) -> LearningGoal | None:
        """Return the most recently created goal regardless of its status."""
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM goals ORDER BY id DESC LIMIT 1").fetchone()
        return self._row_to_goal(row) if row else None

    def abandon_active_goals(self) -> int:
        """Mark every in-progress goal as abandoned and return how many changed."""
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE goals SET status = ? WHERE status = ?",
                (GoalStatus.ABANDONED.value, GoalStatus.IN_PROGRESS.value),
            )
            return cursor.rowcount

    # Tasks

    def save_tasks(self, tasks: list[DailyTask]) -> None:
        """Insert or replace tasks, keyed by goal and day."""
        with self._connect() as conn:
            for task in tasks:
                cursor = conn.execute(
                    """
                    INSERT OR REPLACE INTO tasks
                        (goal_id, day, date, new_words, review_words, exposure_targets,
                         total_exposures, completed_exposures, status, start_time, end_time)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    self._task_params(task),
                )
                task.id = cursor.lastrowid

    def update_task(self, task: DailyTask) -> None:
        self.save_tasks([task])

    def fetch_task(self, goal_id: int, day: int) -> DailyTask | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM tasks WHERE goal_id = ? AND day = ?",
                (goal_id, day),
            ).fetchone()
        return self._row_to_task(row) if row else None

    def fetch_today_task(self) -> DailyTask | None:
        """Return the task for the current goal's current day."""
        goal = self.fetch_current_goal()
        if goal is None or goal.id is None:
            return None
        return self.fetch_task(goal.id, goal.current_day)

    # Learning records

    def save_records(
        self, records: list[LearningRecord], day: int, goal_id: int | None = None
    ) -> None:
        """Persist the learning records of a day's session.

        Args:
            records: Records to save
            day: 1-based plan day
            goal_id: Goal the records belong to; defaults to the current goal

        Raises:
            StorageError: If there is no goal to attach the records to
        """
        goal_id = goal_id if goal_id is not None else self._current_goal_id()
        with self._connect() as conn:
            conn.executemany(
                """
                INSERT OR REPLACE INTO learning_records
                    (goal_id, day, word_id, target_exposures, remaining_exposures,
                     total_exposure_count, swipe_right_count, swipe_left_count,
                     avg_dwell_time, last_dwell_time)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        goal_id,
                        day,
                        r.word_id,
                        r.target_exposures,
                        r.remaining_exposures,
                        r.total_exposure_count,
                        r.swipe_right_count,
                        r.swipe_left_count,
                        r.avg_dwell_time,
                        r.last_dwell_time,
                    )
                    for r in records
                ],
            )
        logger.debug(f"Saved {len(records)} learning records for goal {goal_id} day {day}")

    def fetch_records_for_day(self, day: int, goal_id: int | None = None) -> list[LearningRecord]:
        if goal_id is None:
            goal = self.fetch_current_goal()
            if goal is None:
                return []
            goal_id = goal.id
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM learning_records WHERE goal_id = ? AND day = ? ORDER BY word_id",
                (goal_id, day),
            ).fetchall()
        return [LearningRecord.from_dict(dict(row)) for row in rows]

    # Swipe events

    def record_swipe_event(
        self,
        pack_id: int | None,
        word_id: int,
        direction: SwipeDirection,
        dwell_time: float,
        session_id: str,
    ) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO swipe_events (pack_id, word_id, direction, dwell_time,
                    session_id, timestamp)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    pack_id,
                    word_id,
                    SwipeDirection(direction).value,
                    dwell_time,
                    session_id,
                    datetime.now(timezone.utc).isoformat(),
                ),
            )

    def fetch_swipe_events(self, session_id: str) -> list[SwipeEvent]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM swipe_events WHERE session_id = ? ORDER BY id",
                (session_id,),
            ).fetchall()
        return [
            SwipeEvent(
                pack_id=row["pack_id"],
                word_id=row["word_id"],
                direction=SwipeDirection(row["direction"]),
                dwell_time=row["dwell_time"],
                session_id=row["session_id"],
                timestamp=datetime.fromisoformat(row["timestamp"]),
            )
            for row in rows
        ]

    # Reports

    def save_report(self, report: DailyReport) -> int:
        """Persist a report and return its row id (also set on ``report``)."""
        with self._connect() as conn:
            cursor = conn.execute(
                "INSERT INTO reports (goal_id, day, report_date, payload) VALUES (?, ?, ?, ?)",
                (
                    report.goal_id,
                    report.day,
                    report.report_date.isoformat(),
                    json.dumps(self._report_payload(report), ensure_ascii=False),
                ),
            )
            report.id = cursor.lastrowid
        return report.id  # type: ignore[return-value]

    def fetch_report(self, goal_id: int | None, day: int) -> DailyReport | None:
        """Return the latest report saved for a goal's day, or None."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM reports WHERE goal_id IS ? AND day = ? ORDER BY id DESC LIMIT 1",
                (goal_id, day),
            ).fetchone()
        return self._row_to_report(row) if row else None

    # Passages

    def save_passage(self, passage: ReadingPassage, goal_id: int | None = None) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO passages
                    (id, goal_id, content, target_words, target_word_ids, topic, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    passage.id,
                    goal_id,
                    passage.content,
                    json.dumps(passage.target_words, ensure_ascii=False),
                    json.dumps(passage.target_word_ids),
                    passage.topic.value,
                    passage.created_at.isoformat(),
                ),
            )

    def fetch_passages(self, goal_id: int | None = None) -> list[ReadingPassage]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM passages WHERE goal_id IS ? ORDER BY created_at DESC",
                (goal_id,),
            ).fetchall()
        return [
            ReadingPassage(
                id=row["id"],
                content=row["content"],
                target_words=json.loads(row["target_words"]),
                target_word_ids=json.loads(row["target_word_ids"]),
                topic=row["topic"],
                created_at=datetime.fromisoformat(row["created_at"]),
            )
            for row in rows
        ]

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open study database {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(f"Study database error: {e}") from e
        finally:
            conn.close()

    def _current_goal_id(self) -> int:
        goal = self.fetch_current_goal()
        if goal is None or goal.id is None:
            raise StorageError("No active learning goal")
        return goal.id

    @staticmethod
    def _task_params(task: DailyTask) -> tuple:
        return (
            task.goal_id,
            task.day,
            task.date.isoformat(),
            json.dumps(task.new_words),
            json.dumps(task.review_words),
            json.dumps({str(k): v for k, v in task.exposure_targets.items()}),
            task.total_exposures,
            task.completed_exposures,
            task.status.value,
            task.start_time.isoformat() if task.start_time else None,
            task.end_time.isoformat() if task.end_time else None,
        )

    @staticmethod
    def _row_to_goal(row: sqlite3.Row) -> LearningGoal:
        return LearningGoal(
            id=row["id"],
            pack_id=row["pack_id"],
            pack_name=row["pack_name"],
            total_words=row["total_words"],
            duration_days=row["duration_days"],
            daily_new_words=row["daily_new_words"],
            start_date=date.fromisoformat(row["start_date"]),
            status=GoalStatus(row["status"]),
            current_day=row["current_day"],
            completed_words=row["completed_words"],
            completed_exposures=row["completed_exposures"],
        )

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> DailyTask:
        return DailyTask(
            id=row["id"],
            goal_id=row["goal_id"],
            day=row["day"],
            date=date.fromisoformat(row["date"]),
            new_words=json.loads(row["new_words"]),
            review_words=json.loads(row["review_words"]),
            exposure_targets={int(k): v for k, v in json.loads(row["exposure_targets"]).items()},
            total_exposures=row["total_exposures"],
            completed_exposures=row["completed_exposures"],
            status=row["status"],
            start_time=datetime.fromisoformat(row["start_time"]) if row["start_time"] else None,
            end_time=datetime.fromisoformat(row["end_time"]) if row["end_time"] else None,
        )

    @staticmethod
    def _report_payload(report: DailyReport) -> dict:
        return {
            "total_words_studied": report.total_words_studied,
            "total_exposures": report.total_exposures,
            "study_duration": report.study_duration,
            "swipe_right_count": report.swipe_right_count,
            "swipe_left_count": report.swipe_left_count,
            "avg_dwell_time": report.avg_dwell_time,
            "median_dwell_time": report.median_dwell_time,
            "dwell_trend": report.dwell_trend.value,
            "familiar_words": report.familiar_words,
            "unfamiliar_words": report.unfamiliar_words,
            "sorted_by_dwell_time": [
                {
                    "word_id": s.word_id,
                    "word": s.word,
                    "avg_dwell_time": s.avg_dwell_time,
                    "swipe_left_count": s.swipe_left_count,
                    "swipe_right_count": s.swipe_right_count,
                    "total_exposures": s.total_exposures,
                }
                for s in report.sorted_by_dwell_time
            ],
        }

    @staticmethod
    def _row_to_report(row: sqlite3.Row) -> DailyReport:
        payload = json.loads(row["payload"])
        summaries = [WordSummary(**item) for item in payload.pop("sorted_by_dwell_time", [])]
        trend = DwellTrend(payload.pop("dwell_trend", DwellTrend.STABLE.value))
        return DailyReport(
            id=row["id"],
            goal_id=row["goal_id"],
            day=row["day"],
            report_date=date.fromisoformat(row["report_date"]),
            sorted_by_dwell_time=summaries,
            dwell_trend=trend,
            **payload,
        )
