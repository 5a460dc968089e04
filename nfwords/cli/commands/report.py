"""CLI command for showing a saved daily report."""

from nfwords.exceptions import NFWordsException
from nfwords.presenters import ConsolePresenter

from .common import load_config, open_store


def report_command(args) -> int:
    """Execute the report subcommand.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    presenter = ConsolePresenter()

    try:
        config = load_config(args)
        presenter.max_report_words = config.top_difficult_count
        store = open_store(config)

        goal = store.fetch_current_goal() or store.fetch_latest_goal()
        if goal is None:
            presenter.show_error("No learning goal. Create one with 'nfwords plan'.")
            return 1

        if args.day is not None:
            day = args.day
        else:
            day = goal.current_day if goal.is_completed else goal.current_day - 1
        if day < 1:
            presenter.show_info("No day of the current goal has been studied yet")
            return 1

        daily_report = store.fetch_report(goal.id, day)
        if daily_report is None:
            presenter.show_error(f"No report saved for day {day}")
            return 1

        presenter.show_report(daily_report)
        return 0

    except NFWordsException as e:
        presenter.show_error(f"Error: {e}")
        return 1
