"""CLI command for creating a learning goal and its plan."""

import zlib

from nfwords.exceptions import NFWordsException, SetupError, ValidationError
from nfwords.models import LearningGoal
from nfwords.presenters import ConsolePresenter
from nfwords.services import DwellTimeClassifier, planner_for_goal

from .common import load_config, load_word_pool, open_store


def validate_plan_args(args) -> None:
    """Reject goal parameters that cannot be planned.

    Raises:
        ValidationError: If the duration or word count is not positive
    """
    if args.days < 1:
        raise ValidationError("A goal must last at least one day")
    if args.words is not None and args.words < 1:
        raise ValidationError("--words must be at least 1")


def plan_command(args) -> int:
    """Execute the plan subcommand.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    presenter = ConsolePresenter()

    try:
        validate_plan_args(args)
        config = load_config(args)
        word_pool = load_word_pool(config)
        store = open_store(config)

        pool = word_pool.word_ids
        if not pool:
            raise SetupError("The word pack is empty")
        total_words = min(args.words, len(pool)) if args.words else len(pool)

        pack_name = args.name or (
            config.word_pool_path.stem if config.word_pool_path else "sample"
        )
        goal = LearningGoal(
            pack_id=zlib.crc32(pack_name.encode("utf-8")),
            pack_name=pack_name,
            total_words=total_words,
            duration_days=args.days,
        )

        abandoned = store.abandon_active_goals()
        if abandoned:
            presenter.show_info(f"Abandoned {abandoned} previous goal(s)")

        store.save_goal(goal)
        planner = planner_for_goal(goal, config, DwellTimeClassifier.from_config(config))
        tasks = planner.generate_complete_plan(goal, pool[:total_words])
        store.save_tasks(tasks)

        presenter.show_success(
            f"Goal created: {total_words} words from '{pack_name}' in {args.days} days "
            f"({planner.planner_name} plan)"
        )
        for task in tasks:
            presenter.show_info(
                f"  Day {task.day:>3} {task.date.isoformat()}: {len(task.new_words)} new words, "
                f"{task.total_exposures} exposures"
            )
        return 0

    except NFWordsException as e:
        presenter.show_error(f"Error: {e}")
        return 1
