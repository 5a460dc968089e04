"""Daily task model."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass
class DailyTask:
    """Words to study on one day of a goal and how often to show each."""

    goal_id: int | None
    day: int
    date: date
    new_words: list[int] = field(default_factory=list)
    review_words: list[int] = field(default_factory=list)
    exposure_targets: dict[int, int] = field(default_factory=dict)
    total_exposures: int = 0
    completed_exposures: int = 0
    status: TaskStatus = TaskStatus.PENDING
    start_time: datetime | None = None
    end_time: datetime | None = None
    id: int | None = None

    def __post_init__(self):
        if isinstance(self.status, str):
            self.status = TaskStatus(self.status)

    @property
    def total_words(self) -> int:
        return len(self.new_words) + len(self.review_words)

    @property
    def word_ids(self) -> list[int]:
        """New words followed by review words, without duplicates."""
        seen: set[int] = set()
        ordered = []
        for word_id in [*self.new_words, *self.review_words]:
            if word_id not in seen:
                seen.add(word_id)
                ordered.append(word_id)
        return ordered

    @property
    def progress(self) -> float:
        if self.total_exposures == 0:
            return 0.0
        return min(self.completed_exposures / self.total_exposures, 1.0)

    @property
    def remaining_exposures(self) -> int:
        return max(self.total_exposures - self.completed_exposures, 0)

    @property
    def estimated_minutes(self) -> int:
        """Rough study time assuming three seconds per exposure."""
        return self.total_exposures * 3 // 60

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    def target_for(self, word_id: int, default: int = 0) -> int:
        return self.exposure_targets.get(word_id, default)

    def start(self, now: datetime | None = None) -> None:
        if self.status == TaskStatus.PENDING:
            self.status = TaskStatus.IN_PROGRESS
            self.start_time = now or datetime.now()

    def complete(self, now: datetime | None = None) -> None:
        self.status = TaskStatus.COMPLETED
        self.end_time = now or datetime.now()
