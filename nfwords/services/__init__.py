"""Business logic services for NFwords."""

from .background_writer import BackgroundWriter
from .dwell_time_classifier import DwellTimeClassifier
from .dwell_timer import DwellTimer
from .exposure_policy import (
    AdaptiveExposureStrategy,
    ExposureStrategyKind,
    FixedExposureStrategy,
    select_strategy_kind,
    strategy_for_goal,
)
from .passage_service import PassageService
from .report_service import ReportService
from .study_store import StudyStore
from .task_planner import BalancedTaskPlanner, PlannerConfig, TaskPlanner, planner_for_goal
from .word_pool_service import WordPoolService

__all__ = [
    "DwellTimeClassifier",
    "FixedExposureStrategy",
    "AdaptiveExposureStrategy",
    "ExposureStrategyKind",
    "select_strategy_kind",
    "strategy_for_goal",
    "TaskPlanner",
    "BalancedTaskPlanner",
    "PlannerConfig",
    "planner_for_goal",
    "ReportService",
    "PassageService",
    "StudyStore",
    "WordPoolService",
    "DwellTimer",
    "BackgroundWriter",
]
