"""Storage-related exceptions."""

from .base import NFWordsException


class StorageError(NFWordsException):
    """Raised when reading from or writing to the study store fails."""

    pass


class WordPoolError(NFWordsException):
    """Raised when a word pool file cannot be read or parsed."""

    pass
