"""Data models for NFwords."""

from .analysis import (
    EASY_TIERS,
    HARD_TIERS,
    DwellTimeAnalysis,
    DwellTrend,
    FamiliarityTier,
    RankedWord,
)
from .card import Card
from .goal import GoalStatus, LearningGoal
from .passage import ReadingPassage, Topic
from .record import LearningRecord, SwipeDirection
from .report import DailyReport, WordSummary
from .session import SessionResult, SwipeEvent, SwipeOutcome
from .task import DailyTask, TaskStatus
from .word import Word

__all__ = [
    "LearningRecord",
    "SwipeDirection",
    "Card",
    "Word",
    "FamiliarityTier",
    "HARD_TIERS",
    "EASY_TIERS",
    "DwellTrend",
    "RankedWord",
    "DwellTimeAnalysis",
    "LearningGoal",
    "GoalStatus",
    "DailyTask",
    "TaskStatus",
    "DailyReport",
    "WordSummary",
    "ReadingPassage",
    "Topic",
    "SwipeEvent",
    "SwipeOutcome",
    "SessionResult",
]
