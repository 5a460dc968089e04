"""Adaptive card queue for a single study session."""

import logging
import random
import time
import uuid
from collections.abc import Callable, Sequence

from nfwords.config import NFWordsConfig, create_default_config
from nfwords.exceptions import QueueInvariantError
from nfwords.interfaces import Clock, ExposureStrategy, WordLookup
from nfwords.models import (
    Card,
    DailyReport,
    DailyTask,
    LearningRecord,
    SwipeDirection,
    SwipeEvent,
    SwipeOutcome,
)
from nfwords.services import DwellTimer, ReportService
from nfwords.utils import space_cards, verify_spacing

logger = logging.getLogger(__name__)

Spacer = Callable[[Sequence[Card], int], list[Card]]


def expand_targets(
    exposure_targets: dict[int, int], word_lookup: WordLookup | None = None
) -> list[Card]:
    """Create one card per planned exposure, grouped by word.

    Slot ids are assigned sequentially and are unique within the result.
    """
    cards = []
    slot_id = 0
    for word_id, count in exposure_targets.items():
        text = (word_lookup(word_id) if word_lookup else None) or str(word_id)
        for _ in range(count):
            cards.append(Card(slot_id=slot_id, word_id=word_id, text=text))
            slot_id += 1
    return cards


class AdaptiveCardQueue:
    """Ordered cards of one session, reacting to every swipe.

    The queue owns its cards, counters and learning records. Each swipe
    updates the word's record, removes the front card and, once the
    exposure strategy says the word needs no more practice, removes the
    word's other cards too. Every card leaves the queue exactly once, either
    swiped or evicted, so ``completed_count + remaining_count`` always equals
    ``total_count``.
    """

    def __init__(
        self,
        cards: Sequence[Card],
        learning_records: dict[int, LearningRecord],
        exposure_strategy: ExposureStrategy,
        report_service: ReportService | None = None,
        config: NFWordsConfig | None = None,
        task: DailyTask | None = None,
        goal_id: int | None = None,
        pack_id: int | None = None,
        day: int = 1,
        word_lookup: WordLookup | None = None,
        dwell_timer: DwellTimer | None = None,
        clock: Clock = time.monotonic,
        event_sink: Callable[[SwipeEvent], None] | None = None,
        on_state_change: Callable[[SwipeOutcome], None] | None = None,
        on_complete: Callable[[DailyReport | None], None] | None = None,
        spacer: Spacer = space_cards,
    ):
        """Initialize the queue and space out its cards.

        Args:
            cards: Cards in planned order
            learning_records: Record per word id, updated in place
            exposure_strategy: Decides when a word's remaining cards are dropped
            report_service: Builds the report when the queue drains
            config: Queue settings (buffer cap, window, strict invariants)
            task: Day task whose ``completed_exposures`` follows the queue
            goal_id: Goal the session belongs to
            pack_id: Vocabulary pack, passed to swipe events
            day: 1-based plan day
            word_lookup: Word id -> text resolver for the report
            dwell_timer: Timer measuring the current card; stopped at the end
            clock: Monotonic clock for the session duration
            event_sink: Receives every swipe, e.g. for persistence
            on_state_change: Called with the outcome of every swipe
            on_complete: Called with the report once the queue drains
            spacer: Reordering function applied to the cards
        """
        self.config = config or create_default_config()
        self.learning_records = learning_records
        self.exposure_strategy = exposure_strategy
        self.report_service = report_service
        self.task = task
        self.goal_id = goal_id if goal_id is not None else (task.goal_id if task else None)
        self.pack_id = pack_id
        self.day = task.day if task else day
        self.word_lookup = word_lookup
        self.dwell_timer = dwell_timer or DwellTimer(clock)
        self.event_sink = event_sink
        self.on_state_change = on_state_change
        self.on_complete = on_complete
        self.session_id = str(uuid.uuid4())

        self._clock = clock
        self._started_at = clock()
        self._finished_at: float | None = None
        self._spacer = spacer

        self.queue: list[Card] = self._apply_spacing(list(cards))
        self.total_count = len(self.queue)
        self.visible_cards: tuple[Card, ...] = ()
        self.completed_count = 0
        self.right_swipe_count = 0
        self.left_swipe_count = 0
        self.report: DailyReport | None = None
        self._complete = False
        self._last_outcome: SwipeOutcome | None = None
        self._refresh_visible()

        if self.task is not None:
            self.task.start()
        if self.queue:
            self.dwell_timer.start()
        logger.info(
            f"Session {self.session_id} started with {self.total_count} cards "
            f"for {len(self.learning_records)} words ({exposure_strategy.strategy_name})"
        )

    @classmethod
    def from_targets(
        cls,
        exposure_targets: dict[int, int],
        exposure_strategy: ExposureStrategy,
        config: NFWordsConfig | None = None,
        rng: random.Random | None = None,
        **kwargs,
    ) -> "AdaptiveCardQueue":
        """Build a queue from per-word exposure counts.

        Each word gets ``count`` cards and a fresh learning record with that
        target. Cards are shuffled first when ``config.shuffle_cards`` is set.

        Args:
            exposure_targets: Word id -> number of exposures
            exposure_strategy: Strategy consulted after each swipe
            config: Queue settings
            rng: Random source for shuffling
            **kwargs: Passed on to the constructor
        """
        config = config or create_default_config()
        cards = expand_targets(exposure_targets, kwargs.get("word_lookup"))
        if config.shuffle_cards:
            (rng or random.Random()).shuffle(cards)
        records = {
            word_id: LearningRecord.initial(word_id, count)
            for word_id, count in exposure_targets.items()
        }
        return cls(cards, records, exposure_strategy, config=config, **kwargs)

    @property
    def current_card(self) -> Card | None:
        return self.queue[0] if self.queue else None

    @property
    def remaining_count(self) -> int:
        return len(self.queue)

    @property
    def progress(self) -> float:
        if self.total_count == 0:
            return 1.0
        return self.completed_count / self.total_count

    @property
    def is_complete(self) -> bool:
        return self._complete

    @property
    def study_duration(self) -> float:
        end = self._finished_at if self._finished_at is not None else self._clock()
        return max(end - self._started_at, 0.0)

    @property
    def records(self) -> list[LearningRecord]:
        return list(self.learning_records.values())

    def handle_current_swipe(self, direction: SwipeDirection) -> SwipeOutcome:
        """Swipe the front card, using the dwell timer for its dwell time."""
        card = self.current_card
        if card is None:
            return self.handle_swipe(-1, direction, 0.0)
        return self.handle_swipe(card.word_id, direction, self.dwell_timer.lap())

    def handle_swipe(
        self, word_id: int, direction: SwipeDirection, dwell_time: float
    ) -> SwipeOutcome:
        """Apply a swipe to the front card.

        Args:
            word_id: Word of the card that was answered
            direction: Swipe direction
            dwell_time: Seconds the card was shown

        Returns:
            The queue state after the swipe
        """
        direction = SwipeDirection(direction)

        if self._complete or not self.queue:
            logger.warning(f"Swipe for word {word_id} after session {self.session_id} ended")
            if not self._complete:
                self._finish()
            return self._last_outcome or self._outcome(word_id, direction, 0)

        front = self.queue[0]
        if front.word_id != word_id:
            logger.warning(
                f"Swipe for word {word_id} but the front card is word {front.word_id}"
            )

        evicted = 0
        record = self.learning_records.get(word_id)
        if record is None:
            logger.warning(f"No learning record for word {word_id}, skipping record update")
        else:
            record.record_swipe(direction, dwell_time)
            if not self.exposure_strategy.should_continue_exposure(record):
                evicted = self._evict_other_cards(word_id, front)

        self.queue.pop(0)
        self.completed_count += 1 + evicted
        if direction == SwipeDirection.RIGHT:
            self.right_swipe_count += 1
        else:
            self.left_swipe_count += 1
        if self.task is not None:
            self.task.completed_exposures += 1 + evicted

        self._refresh_visible()
        self._emit(word_id, direction, dwell_time)

        if not self.queue:
            self._finish()

        outcome = self._outcome(word_id, direction, evicted)
        self._last_outcome = outcome
        if self.on_state_change is not None:
            self.on_state_change(outcome)
        return outcome

    def reset(self) -> None:
        """Stop the dwell timer; safe to call repeatedly."""
        self.dwell_timer.reset()

    def _evict_other_cards(self, word_id: int, front: Card) -> int:
        remaining = [card for card in self.queue if card is front or card.word_id != word_id]
        evicted = len(self.queue) - len(remaining)
        if evicted:
            logger.debug(f"Word {word_id} mastered early, removed {evicted} cards")
        self.queue = remaining
        return evicted

    def _apply_spacing(self, cards: list[Card]) -> list[Card]:
        spaced = self._spacer(cards, self.config.buffer_cap)
        if verify_spacing(cards, spaced):
            return spaced

        message = (
            f"Card spacing changed the queue contents ({len(cards)} cards in, "
            f"{len(spaced)} out)"
        )
        if self.config.strict_invariants:
            raise QueueInvariantError(message)
        logger.error(f"{message}, keeping the original order")
        return cards

    def _refresh_visible(self) -> None:
        self.visible_cards = tuple(self.queue[: self.config.visible_window])

    def _emit(self, word_id: int, direction: SwipeDirection, dwell_time: float) -> None:
        if self.event_sink is None:
            return
        event = SwipeEvent(
            pack_id=self.pack_id,
            word_id=word_id,
            direction=direction,
            dwell_time=max(dwell_time, 0.0),
            session_id=self.session_id,
        )
        try:
            self.event_sink(event)
        except Exception as e:
            logger.error(f"Failed to record swipe event for word {word_id}: {e}")

    def _finish(self) -> None:
        self.dwell_timer.stop()
        self._finished_at = self._clock()
        self._complete = True

        if self.report_service is not None:
            self.report = self.report_service.generate_report(
                self.records,
                goal_id=self.goal_id,
                day=self.day,
                study_duration=self.study_duration,
                swipe_right_count=self.right_swipe_count,
                swipe_left_count=self.left_swipe_count,
                word_lookup=self.word_lookup,
            )
        if self.task is not None:
            self.task.complete()

        logger.info(
            f"Session {self.session_id} complete: {self.completed_count} exposures, "
            f"{self.right_swipe_count} right / {self.left_swipe_count} left"
        )
        if self.on_complete is not None:
            self.on_complete(self.report)

    def _outcome(self, word_id: int, direction: SwipeDirection, evicted: int) -> SwipeOutcome:
        return SwipeOutcome(
            word_id=word_id,
            direction=direction,
            evicted_count=evicted,
            completed_count=self.completed_count,
            remaining_count=len(self.queue),
            visible_cards=self.visible_cards,
            is_complete=self._complete,
            report=self.report,
        )
