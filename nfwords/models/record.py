"""Per-word learning record model."""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class SwipeDirection(str, Enum):
    """Learner's answer for a single card."""

    LEFT = "left"  # don't know
    RIGHT = "right"  # know


@dataclass
class LearningRecord:
    """Exposure statistics for one word within one learning goal.

    Invariants maintained by ``record_swipe`` and ``revise_target``:

    - ``total_exposure_count == swipe_right_count + swipe_left_count``
    - ``remaining_exposures == max(target_exposures - total_exposure_count, 0)``
    - ``avg_dwell_time`` is the exact running mean of all dwell samples.
    """

    word_id: int
    target_exposures: int = 10
    remaining_exposures: int = 10
    total_exposure_count: int = 0
    swipe_right_count: int = 0
    swipe_left_count: int = 0
    avg_dwell_time: float = 0.0
    last_dwell_time: float = 0.0

    @classmethod
    def initial(cls, word_id: int, target_exposures: int = 10) -> "LearningRecord":
        """Create a record for a word that has not been shown yet."""
        if target_exposures < 0:
            raise ValueError(f"target_exposures must be >= 0, got {target_exposures}")
        return cls(
            word_id=word_id,
            target_exposures=target_exposures,
            remaining_exposures=target_exposures,
        )

    def record_swipe(self, direction: SwipeDirection, dwell_time: float) -> None:
        """Apply one exposure to the record.

        Args:
            direction: Which way the card was swiped
            dwell_time: Seconds the card was visible; negative values count as 0
        """
        sample = max(dwell_time, 0.0)

        if direction == SwipeDirection.RIGHT:
            self.swipe_right_count += 1
        else:
            self.swipe_left_count += 1
        self.total_exposure_count += 1

        self.avg_dwell_time += (sample - self.avg_dwell_time) / self.total_exposure_count
        self.last_dwell_time = sample
        self.remaining_exposures = max(self.target_exposures - self.total_exposure_count, 0)

    def revise_target(self, target_exposures: int) -> None:
        """Change the exposure target and recompute the remaining count."""
        if target_exposures < 0:
            raise ValueError(f"target_exposures must be >= 0, got {target_exposures}")
        self.target_exposures = target_exposures
        self.remaining_exposures = max(target_exposures - self.total_exposure_count, 0)

    @property
    def has_exposures(self) -> bool:
        return self.total_exposure_count > 0

    @property
    def right_swipe_ratio(self) -> float:
        """Share of exposures swiped right (0.0 when never shown)."""
        if self.total_exposure_count == 0:
            return 0.0
        return self.swipe_right_count / self.total_exposure_count

    @property
    def familiarity_score(self) -> float:
        """Familiarity from 0 to 100.

        Weighted 60% on the right-swipe ratio and 40% on dwell time, where a
        mean dwell of 3 seconds or more scores zero.
        """
        if self.total_exposure_count == 0:
            return 0.0
        dwell_score = max(0.0, (3.0 - self.avg_dwell_time) / 3.0)
        return (self.right_swipe_ratio * 0.6 + dwell_score * 0.4) * 100

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LearningRecord":
        return cls(
            word_id=int(data["word_id"]),
            target_exposures=int(data.get("target_exposures", 10)),
            remaining_exposures=int(data.get("remaining_exposures", 0)),
            total_exposure_count=int(data.get("total_exposure_count", 0)),
            swipe_right_count=int(data.get("swipe_right_count", 0)),
            swipe_left_count=int(data.get("swipe_left_count", 0)),
            avg_dwell_time=float(data.get("avg_dwell_time", 0.0)),
            last_dwell_time=float(data.get("last_dwell_time", 0.0)),
        )
