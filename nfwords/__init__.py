"""
NFwords - Adaptive Vocabulary Exposure Scheduler

Schedules flash-card exposures for vocabulary goals, classifies word
familiarity from dwell time and sequences daily study sessions.
"""

__version__ = "1.0.0"
__author__ = "NFwords Contributors"
