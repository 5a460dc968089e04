"""Orchestration of study sessions."""

from .card_queue import AdaptiveCardQueue, expand_targets
from .daily_session import DailySessionRunner

__all__ = ["AdaptiveCardQueue", "DailySessionRunner", "expand_targets"]
