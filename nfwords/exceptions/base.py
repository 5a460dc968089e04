"""Base exception classes for NFwords."""


class NFWordsException(Exception):
    """Base exception for all NFwords errors.

    All custom exceptions in the nfwords package should inherit
    from this base class for consistent error handling.
    """

    pass
