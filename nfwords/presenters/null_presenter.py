"""Null presenter for testing (no output)."""

from nfwords.models import DailyReport, DailyTask, ReadingPassage


class NullPresenter:
    """Present output to nowhere (testing implementation)."""

    def show_info(self, message: str) -> None:
        """Display an informational message (no-op)."""
        pass

    def show_success(self, message: str) -> None:
        """Display a success message (no-op)."""
        pass

    def show_warning(self, message: str) -> None:
        """Display a warning message (no-op)."""
        pass

    def show_error(self, message: str) -> None:
        """Display an error message (no-op)."""
        pass

    def show_task(self, task: DailyTask) -> None:
        """Display a day's task (no-op)."""
        pass

    def show_report(self, report: DailyReport) -> None:
        """Display a session report (no-op)."""
        pass

    def show_passage(self, passage: ReadingPassage) -> None:
        """Display a reading passage (no-op)."""
        pass
