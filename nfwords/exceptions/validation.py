"""Validation-related exceptions."""

from .base import NFWordsException


class ValidationError(NFWordsException):
    """Raised when input validation fails."""

    pass


class SetupError(NFWordsException):
    """Raised when a goal or session cannot be set up from the stored data."""

    pass
