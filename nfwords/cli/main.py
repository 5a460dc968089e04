"""Main CLI entry point for nfwords."""

import argparse
import logging
import sys

from nfwords import __version__
from nfwords.cli.commands import plan, report, study


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="nfwords",
        description="Adaptive vocabulary exposure scheduler",
        epilog="Use 'nfwords <command> --help' for command-specific help",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="Path to a JSON configuration file")
    parser.add_argument("--db", help="Path to the study database")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # nfwords plan <days>
    plan_parser = subparsers.add_parser(
        "plan",
        help="Create a learning goal and its daily plan",
        description="Create a learning goal from a word pack and plan every day of it",
    )
    plan_parser.add_argument("days", type=int, help="Goal duration in days")
    plan_parser.add_argument("--pack", help="Path to a JSONL word pack (default: sample words)")
    plan_parser.add_argument(
        "--words",
        type=int,
        default=None,
        help="Number of words to learn (default: the whole pack)",
    )
    plan_parser.add_argument("--name", default=None, help="Display name of the pack")

    # nfwords study
    study_parser = subparsers.add_parser(
        "study",
        help="Study today's cards",
        description="Run today's session: answer 'r' if you know the word, 'l' if not",
    )
    study_parser.add_argument("--pack", help="Path to the goal's JSONL word pack")
    study_parser.add_argument("--seed", type=int, default=None, help="Seed for card shuffling")
    study_parser.add_argument(
        "--no-passage",
        action="store_true",
        help="Never request a reading passage",
    )

    # nfwords report
    report_parser = subparsers.add_parser(
        "report",
        help="Show a saved daily report",
        description="Show the report of a finished day of the current goal",
    )
    report_parser.add_argument(
        "--day",
        type=int,
        default=None,
        help="Plan day (default: the last finished day)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Dispatch to appropriate command
    if args.command == "plan":
        return plan.plan_command(args)
    elif args.command == "study":
        return study.study_command(args)
    elif args.command == "report":
        return report.report_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
