"""Study session exceptions."""

from .base import NFWordsException


class SessionError(NFWordsException):
    """Raised when a study session is used in an invalid state."""

    pass


class QueueInvariantError(SessionError):
    """Raised when reordering the card queue changed its size or contents.

    Only raised when strict invariant checking is enabled; otherwise the
    violation is logged and the queue keeps its previous order.
    """

    pass
