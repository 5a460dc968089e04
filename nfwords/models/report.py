"""Daily study report models."""

from dataclasses import dataclass, field
from datetime import date

from .analysis import DwellTrend


@dataclass(frozen=True)
class WordSummary:
    """Per-word line of a daily report."""

    word_id: int
    word: str
    avg_dwell_time: float
    swipe_left_count: int
    swipe_right_count: int
    total_exposures: int

    @property
    def difficulty_score(self) -> float:
        """Higher means harder: dwell weighs 10 per second, each left swipe 5."""
        return self.avg_dwell_time * 10 + self.swipe_left_count * 5

    @property
    def swipe_indicator(self) -> str:
        if self.swipe_right_count > self.swipe_left_count:
            return f"→{self.swipe_right_count}"
        if self.swipe_left_count > self.swipe_right_count:
            return f"←{self.swipe_left_count}"
        return f"↔{self.swipe_right_count}"

    @property
    def dwell_time_formatted(self) -> str:
        return f"{self.avg_dwell_time:.1f}s"


@dataclass
class DailyReport:
    """Summary of one completed study session."""

    goal_id: int | None
    day: int
    report_date: date = field(default_factory=date.today)
    total_words_studied: int = 0
    total_exposures: int = 0
    study_duration: float = 0.0
    swipe_right_count: int = 0
    swipe_left_count: int = 0
    avg_dwell_time: float = 0.0
    median_dwell_time: float = 0.0
    dwell_trend: DwellTrend = DwellTrend.STABLE
    sorted_by_dwell_time: list[WordSummary] = field(default_factory=list)
    familiar_words: list[int] = field(default_factory=list)
    unfamiliar_words: list[int] = field(default_factory=list)
    id: int | None = None

    @property
    def familiar_count(self) -> int:
        return len(self.familiar_words)

    @property
    def unfamiliar_count(self) -> int:
        return len(self.unfamiliar_words)

    @property
    def mastery_rate(self) -> float:
        """Share of studied words in the two easiest tiers."""
        if self.total_words_studied == 0:
            return 0.0
        return self.familiar_count / self.total_words_studied

    @property
    def study_duration_formatted(self) -> str:
        minutes, seconds = divmod(int(self.study_duration), 60)
        return f"{minutes}:{seconds:02d}"

    def top_difficult_words(self, count: int = 10) -> list[WordSummary]:
        return self.sorted_by_dwell_time[:count]
