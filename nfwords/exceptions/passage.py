"""Reading passage generation exceptions."""

from .base import NFWordsException


class PassageGenerationError(NFWordsException):
    """Raised when the reading passage API request fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class QuotaExceededError(PassageGenerationError):
    """Raised when the daily request or article quota has been used up."""

    pass
