"""Console presenter for CLI output."""

from nfwords.models import DailyReport, DailyTask, ReadingPassage


class ConsolePresenter:
    """Present output to console (CLI implementation)."""

    def __init__(self, max_report_words: int = 10):
        self.max_report_words = max_report_words

    def show_info(self, message: str) -> None:
        """Display an informational message."""
        print(message)

    def show_success(self, message: str) -> None:
        """Display a success message."""
        print(f"[OK] {message}")

    def show_warning(self, message: str) -> None:
        """Display a warning message."""
        print(f"[WARN] {message}")

    def show_error(self, message: str) -> None:
        """Display an error message."""
        print(f"[ERROR] {message}")

    def show_task(self, task: DailyTask) -> None:
        """Display a day's task before the session starts."""
        print(f"\nDay {task.day} ({task.date.isoformat()}):")
        print(f"  New words: {len(task.new_words)}")
        print(f"  Review words: {len(task.review_words)}")
        print(f"  Exposures: {task.total_exposures} (~{task.estimated_minutes} min)")

    def show_report(self, report: DailyReport) -> None:
        """Display the report of a finished session."""
        print(f"\nDay {report.day} Report ({report.report_date.isoformat()}):")
        print(f"  Words studied: {report.total_words_studied}")
        print(f"  Exposures: {report.total_exposures}")
        print(f"  Study time: {report.study_duration_formatted}")
        print(f"  Swipes: {report.swipe_right_count} right / {report.swipe_left_count} left")
        print(
            f"  Dwell: {report.avg_dwell_time:.2f}s average, "
            f"{report.median_dwell_time:.2f}s median, {report.dwell_trend.value}"
        )
        print(f"  Mastery: {report.mastery_rate:.0%}")

        hardest = report.top_difficult_words(self.max_report_words)
        if hardest:
            print("\nHardest words:")
            for summary in hardest:
                print(
                    f"  {summary.word:<20} {summary.dwell_time_formatted:>6} "
                    f"{summary.swipe_indicator}"
                )

    def show_passage(self, passage: ReadingPassage) -> None:
        """Display a generated reading passage."""
        print(f"\nReading passage ({passage.topic.value}, {passage.word_count} words):\n")
        print(passage.content)
        print(f"\nTarget words: {', '.join(passage.target_words)}")
