"""Pytest configuration and shared fixtures."""

import pytest

from nfwords.config import NFWordsConfig
from nfwords.models import DailyReport, DailyTask, LearningRecord, ReadingPassage, SwipeDirection
from nfwords.presenters import NullPresenter
from nfwords.services import BackgroundWriter, StudyStore


@pytest.fixture
def temp_dir(tmp_path):
    """Provide a temporary directory for test files."""
    return tmp_path


@pytest.fixture
def test_config(temp_dir):
    """Provide a test configuration with temporary paths and strict invariants."""
    return NFWordsConfig(
        db_path=temp_dir / "nfwords.db",
        strict_invariants=True,
        completion_grace_delay=0.0,
        background_workers=1,
    )


@pytest.fixture
def null_presenter():
    """Provide a null presenter for testing (no output)."""
    return NullPresenter()


@pytest.fixture
def store(test_config):
    """Provide an initialized study store in the temporary directory."""
    study_store = StudyStore(test_config.db_path)
    study_store.initialize()
    return study_store


@pytest.fixture
def sync_writer():
    """Provide a background writer that runs writes inline."""
    return BackgroundWriter(synchronous=True)


@pytest.fixture
def make_record():
    """Factory fixture for LearningRecords with a given swipe history.

    ``dwell`` is applied to every swipe; rights are recorded before lefts.
    """

    def _make(word_id=1, target=10, rights=0, lefts=0, dwell=1.0):
        record = LearningRecord.initial(word_id, target)
        for _ in range(rights):
            record.record_swipe(SwipeDirection.RIGHT, dwell)
        for _ in range(lefts):
            record.record_swipe(SwipeDirection.LEFT, dwell)
        return record

    return _make


class FakeClock:
    """A manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock():
    """Provide a clock that only moves when advanced."""
    return FakeClock()


class RecordingPresenter:
    """A real presenter implementation that records all calls for assertion."""

    def __init__(self):
        self.infos: list[str] = []
        self.successes: list[str] = []
        self.warnings: list[str] = []
        self.errors: list[str] = []
        self.tasks: list[DailyTask] = []
        self.reports: list[DailyReport] = []
        self.passages: list[ReadingPassage] = []

    def show_info(self, message: str) -> None:
        self.infos.append(message)

    def show_success(self, message: str) -> None:
        self.successes.append(message)

    def show_warning(self, message: str) -> None:
        self.warnings.append(message)

    def show_error(self, message: str) -> None:
        self.errors.append(message)

    def show_task(self, task: DailyTask) -> None:
        self.tasks.append(task)

    def show_report(self, report: DailyReport) -> None:
        self.reports.append(report)

    def show_passage(self, passage: ReadingPassage) -> None:
        self.passages.append(passage)


@pytest.fixture
def recording_presenter():
    """Provide a presenter that records all calls for assertion."""
    return RecordingPresenter()
