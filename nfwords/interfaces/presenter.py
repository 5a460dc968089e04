"""Presenter protocol for output abstraction."""

from typing import Protocol

from nfwords.models import DailyReport, DailyTask, ReadingPassage


class PresenterProtocol(Protocol):
    """Interface for presenting output to user (CLI, tests, etc).

    This protocol abstracts all output operations, allowing the same
    session logic to work with different presentation layers.
    """

    def show_info(self, message: str) -> None:
        """Display an informational message.

        Args:
            message: The informational message to display
        """
        ...

    def show_success(self, message: str) -> None:
        """Display a success message.

        Args:
            message: The success message to display
        """
        ...

    def show_warning(self, message: str) -> None:
        """Display a warning message.

        Args:
            message: The warning message to display
        """
        ...

    def show_error(self, message: str) -> None:
        """Display an error message.

        Args:
            message: The error message to display
        """
        ...

    def show_task(self, task: DailyTask) -> None:
        """Display a day's task before the session starts.

        Args:
            task: The task to display
        """
        ...

    def show_report(self, report: DailyReport) -> None:
        """Display the report of a finished session.

        Args:
            report: The report to display
        """
        ...

    def show_passage(self, passage: ReadingPassage) -> None:
        """Display a generated reading passage.

        Args:
            passage: The passage to display
        """
        ...
