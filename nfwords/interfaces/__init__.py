"""Protocol interfaces for dependency injection."""

from .exposure_strategy import ExposureStrategy
from .presenter import PresenterProtocol
from .storage import Clock, StudySessionStore, StudyStoreReader, StudyStoreWriter, WordLookup

__all__ = [
    "ExposureStrategy",
    "PresenterProtocol",
    "StudyStoreReader",
    "StudyStoreWriter",
    "StudySessionStore",
    "Clock",
    "WordLookup",
]
