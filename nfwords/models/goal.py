"""Learning goal model."""

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum


class GoalStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


@dataclass
class LearningGoal:
    """A plan to learn ``total_words`` words from a pack over ``duration_days`` days."""

    pack_id: int
    pack_name: str
    total_words: int
    duration_days: int
    daily_new_words: int = 0
    start_date: date = field(default_factory=date.today)
    status: GoalStatus = GoalStatus.IN_PROGRESS
    current_day: int = 1
    completed_words: int = 0
    completed_exposures: int = 0
    id: int | None = None

    def __post_init__(self):
        if self.duration_days < 1:
            raise ValueError(f"duration_days must be at least 1, got {self.duration_days}")
        if self.total_words < 0:
            raise ValueError(f"total_words must be >= 0, got {self.total_words}")
        if self.daily_new_words == 0 and self.total_words:
            self.daily_new_words = self.total_words // self.duration_days
        if isinstance(self.status, str):
            self.status = GoalStatus(self.status)

    @property
    def end_date(self) -> date:
        return self.start_date + timedelta(days=self.duration_days - 1)

    @property
    def progress(self) -> float:
        """Fraction of days completed (0.0 to 1.0)."""
        return min(max(self.current_day - 1, 0) / self.duration_days, 1.0)

    @property
    def days_remaining(self) -> int:
        return max(self.duration_days - self.current_day + 1, 0)

    @property
    def is_active(self) -> bool:
        return self.status == GoalStatus.IN_PROGRESS

    @property
    def is_completed(self) -> bool:
        return self.status == GoalStatus.COMPLETED

    def date_for_day(self, day: int) -> date:
        """Calendar date of a 1-based plan day."""
        return self.start_date + timedelta(days=day - 1)

    def advance_day(self) -> None:
        """Move to the next plan day, completing the goal after the last one."""
        if self.current_day >= self.duration_days:
            self.status = GoalStatus.COMPLETED
        else:
            self.current_day += 1
