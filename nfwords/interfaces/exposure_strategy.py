"""Protocol for exposure strategies."""

from typing import Protocol

from nfwords.models import LearningRecord


class ExposureStrategy(Protocol):
    """Decides how often a word is shown and when to stop showing it.

    Implementations must be pure functions of the record they are given so
    that the queue can consult them after every swipe.
    """

    @property
    def strategy_name(self) -> str:
        """Short identifier, e.g. ``'adaptive'``."""
        ...

    @property
    def strategy_description(self) -> str:
        """Human-readable description of the strategy."""
        ...

    def calculate_exposures(self, record: LearningRecord) -> int:
        """Number of exposures to schedule for the record's word.

        Args:
            record: The word's learning record (may have no history yet)

        Returns:
            Target exposure count, at least 1
        """
        ...

    def should_continue_exposure(self, record: LearningRecord) -> bool:
        """Whether the word's remaining cards should still be shown.

        Args:
            record: The word's learning record after the latest swipe

        Returns:
            False once the word needs no further exposures
        """
        ...
