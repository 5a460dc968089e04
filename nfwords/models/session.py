"""Models describing study session state changes."""

from dataclasses import dataclass, field
from datetime import datetime

from .card import Card
from .passage import ReadingPassage
from .record import SwipeDirection
from .report import DailyReport


@dataclass(frozen=True)
class SwipeEvent:
    """A single answered card, as handed to the persistence sink."""

    pack_id: int | None
    word_id: int
    direction: SwipeDirection
    dwell_time: float
    session_id: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class SwipeOutcome:
    """Queue state after a swipe has been applied."""

    word_id: int
    direction: SwipeDirection
    evicted_count: int = 0
    completed_count: int = 0
    remaining_count: int = 0
    visible_cards: tuple[Card, ...] = ()
    is_complete: bool = False
    report: DailyReport | None = None

    @property
    def early_mastery(self) -> bool:
        """Whether this swipe removed the word's remaining cards."""
        return self.evicted_count > 0


@dataclass
class SessionResult:
    """Everything a finished study session produced."""

    report: DailyReport | None
    completed_count: int = 0
    passage: ReadingPassage | None = None
    passage_error: str | None = None

    @property
    def has_passage(self) -> bool:
        return self.passage is not None
