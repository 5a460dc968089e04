"""CLI command for studying today's cards."""

import random
import time

from nfwords.exceptions import NFWordsException
from nfwords.models import Card, SwipeDirection
from nfwords.orchestration import DailySessionRunner
from nfwords.presenters import ConsolePresenter
from nfwords.services import BackgroundWriter, PassageService

from .common import load_config, load_word_pool, open_store

ANSWERS = {
    "r": SwipeDirection.RIGHT,
    "y": SwipeDirection.RIGHT,
    "l": SwipeDirection.LEFT,
    "n": SwipeDirection.LEFT,
}


def ask(card: Card) -> SwipeDirection:
    """Show a card and read the learner's answer from stdin."""
    while True:
        answer = input(f"\n  {card.text}   [r]ight = know / [l]eft = don't know: ")
        direction = ANSWERS.get(answer.strip().lower()[:1])
        if direction is not None:
            return direction
        print("  Please answer 'r' or 'l'.")


def study_command(args) -> int:
    """Execute the study subcommand.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    presenter = ConsolePresenter()

    presenter.show_info("NFwords - Vocabulary Study Session")
    presenter.show_info("=" * 50)

    try:
        config = load_config(args)
        presenter.max_report_words = config.top_difficult_count
        store = open_store(config)
        word_pool = load_word_pool(config)
    except NFWordsException as e:
        presenter.show_error(f"Error: {e}")
        return 1

    passage_service = None
    if not args.no_passage:
        passage_service = PassageService(config)
        if not passage_service.is_configured():
            presenter.show_info("No DeepSeek API key configured, reading passages disabled")
            passage_service = None

    rng = random.Random(args.seed) if args.seed is not None else None

    with BackgroundWriter(max_workers=config.background_workers) as writer:
        runner = DailySessionRunner(
            config=config,
            store=store,
            word_pool=word_pool,
            presenter=presenter,
            writer=writer,
            passage_service=passage_service,
            rng=rng,
        )

        try:
            queue = runner.prepare()
            while not queue.is_complete:
                card = queue.current_card
                if card is None:
                    queue.handle_swipe(-1, SwipeDirection.RIGHT, 0.0)
                    break
                outcome = queue.handle_current_swipe(ask(card))
                if outcome.early_mastery:
                    presenter.show_success(f"'{card.text}' mastered early")
                presenter.show_info(
                    f"  {outcome.completed_count}/{queue.total_count} "
                    f"({queue.progress:.0%})"
                )

            # Let the last answer settle before the report replaces it.
            time.sleep(config.completion_grace_delay)
            result = runner.finish(queue)

        except KeyboardInterrupt:
            if runner.queue is not None:
                runner.queue.reset()
            presenter.show_warning("\nSession interrupted, today's results were not saved")
            return 1
        except NFWordsException as e:
            presenter.show_error(f"Error: {e}")
            return 1

    if writer.failures:
        presenter.show_warning(f"{writer.failures} write(s) to the study database failed")
    presenter.show_success(f"Session complete: {result.completed_count} exposures")
    return 0
