"""Custom exceptions for NFwords."""

from .base import NFWordsException
from .passage import PassageGenerationError, QuotaExceededError
from .session import QueueInvariantError, SessionError
from .storage import StorageError, WordPoolError
from .validation import SetupError, ValidationError

__all__ = [
    "NFWordsException",
    "ValidationError",
    "SetupError",
    "StorageError",
    "WordPoolError",
    "QueueInvariantError",
    "SessionError",
    "PassageGenerationError",
    "QuotaExceededError",
]
