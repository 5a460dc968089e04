"""Integration tests for running a daily study session."""

import json
import random
from unittest.mock import MagicMock, patch

import pytest
import requests

from nfwords.config import NFWordsConfig
from nfwords.models import GoalStatus, LearningGoal, SwipeDirection, TaskStatus
from nfwords.orchestration import DailySessionRunner
from nfwords.services import (
    BackgroundWriter,
    PassageService,
    StudyStore,
    WordPoolService,
    planner_for_goal,
)


class GoalFirstWriter(BackgroundWriter):
    """Inline writer that holds record writes until the goal update has run."""

    def __init__(self):
        super().__init__(synchronous=True)
        self.held: list[tuple] = []

    def submit(self, description, func, *args, **kwargs):
        if description == "save records":
            self.held.append((description, func, args, kwargs))
            return
        super().submit(description, func, *args, **kwargs)
        if description == "update goal":
            for held_description, held_func, held_args, held_kwargs in self.held:
                super().submit(held_description, held_func, *held_args, **held_kwargs)
            self.held.clear()


class TestDailySession:
    """Integration tests using a real store and word pool with an inline writer."""

    @pytest.fixture
    def config(self, temp_dir):
        return NFWordsConfig(
            db_path=temp_dir / "nfwords.db",
            strict_invariants=True,
            completion_grace_delay=0.0,
            deepseek_api_key="sk-test",
        )

    @pytest.fixture
    def word_pool(self):
        pool = WordPoolService()
        pool.load()
        return pool

    @pytest.fixture
    def goal(self, store, config, word_pool):
        """A three day goal over the sample words with its plan saved."""
        goal = LearningGoal(pack_id=7, pack_name="sample", total_words=30, duration_days=3)
        store.save_goal(goal)
        tasks = planner_for_goal(goal, config).generate_complete_plan(goal, word_pool.word_ids)
        store.save_tasks(tasks)
        return goal

    @pytest.fixture
    def make_runner(self, config, store, word_pool, recording_presenter, sync_writer, fake_clock):
        def _make(passage_service=None, **kwargs):
            return DailySessionRunner(
                config=config,
                store=kwargs.get("store", store),
                word_pool=kwargs.get("word_pool", word_pool),
                presenter=kwargs.get("presenter", recording_presenter),
                writer=kwargs.get("writer", sync_writer),
                passage_service=passage_service,
                clock=fake_clock,
                rng=random.Random(3),
            )

        return _make

    @staticmethod
    def knows_everything(card):
        return SwipeDirection.RIGHT

    def test_session_is_persisted(self, make_runner, store, goal, recording_presenter):
        runner = make_runner()
        result = runner.run(self.knows_everything)

        task = runner.task
        assert result.completed_count == task.total_exposures
        assert task.completed_exposures == task.total_exposures
        assert recording_presenter.tasks == [task]
        assert recording_presenter.reports == [result.report]

        saved_task = store.fetch_task(goal.id, 1)
        assert saved_task.status == TaskStatus.COMPLETED
        assert saved_task.completed_exposures == task.total_exposures

        records = store.fetch_records_for_day(1, goal.id)
        assert sorted(r.word_id for r in records) == sorted(task.word_ids)
        # Instant right swipes master every word after three exposures.
        assert all(r.total_exposure_count == 3 for r in records)

        report = store.fetch_report(goal.id, 1)
        assert report.total_words_studied == len(task.word_ids)
        assert report.mastery_rate == 1.0

        events = store.fetch_swipe_events(runner.queue.session_id)
        assert len(events) == 3 * len(task.word_ids)

        saved_goal = store.fetch_current_goal()
        assert saved_goal.current_day == 2
        assert saved_goal.completed_words == len(task.new_words)
        assert saved_goal.completed_exposures == task.total_exposures

    def test_no_passage_for_easy_session(self, make_runner, goal, config):
        with patch("nfwords.services.passage_service.requests.post") as mock_post:
            result = make_runner(PassageService(config)).run(self.knows_everything)
        assert not result.has_passage
        mock_post.assert_not_called()

    def test_passage_for_hard_session(
        self, make_runner, store, goal, config, fake_clock, recording_presenter
    ):
        def struggles(card):
            fake_clock.advance(4.0)
            return SwipeDirection.LEFT

        response = MagicMock()
        response.status_code = 200
        response.json.return_value = {
            "choices": [{"message": {"content": "Students assess arbitrary claims."}}]
        }

        with patch("nfwords.services.passage_service.requests.post", return_value=response):
            result = make_runner(PassageService(config)).run(struggles)

        assert result.has_passage
        assert len(result.passage.target_words) == 10
        assert recording_presenter.passages == [result.passage]
        assert [p.id for p in store.fetch_passages(goal.id)] == [result.passage.id]
        assert result.report.unfamiliar_count == result.report.total_words_studied

    def test_passage_failure_is_a_warning(
        self, make_runner, goal, config, fake_clock, recording_presenter
    ):
        def struggles(card):
            fake_clock.advance(4.0)
            return SwipeDirection.LEFT

        with patch(
            "nfwords.services.passage_service.requests.post",
            side_effect=requests.exceptions.Timeout(),
        ):
            result = make_runner(PassageService(config)).run(struggles)

        assert result.report is not None
        assert not result.has_passage
        assert "timed out" in result.passage_error
        assert any("Reading passage unavailable" in w for w in recording_presenter.warnings)

    def test_sample_session_without_goal(self, make_runner, store, recording_presenter):
        runner = make_runner()
        result = runner.run(self.knows_everything)

        assert result.report.total_words_studied == 30
        assert result.report.sorted_by_dwell_time[0].word in {
            w.text for w in WordPoolService.default_words()
        }
        assert any("sample words" in w for w in recording_presenter.warnings)
        assert store.fetch_latest_goal() is None
        assert store.fetch_swipe_events(runner.queue.session_id) == []

    def test_unreadable_store_falls_back(self, make_runner, temp_dir, recording_presenter):
        path = temp_dir / "broken.db"
        path.write_text("not a database")

        result = make_runner(store=StudyStore(path)).run(self.knows_everything)

        assert result.report.total_words_studied == 30
        assert recording_presenter.warnings

    def test_failed_writes_do_not_stop_session(
        self, make_runner, store, goal, sync_writer, null_presenter, monkeypatch
    ):
        def broken(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(store, "save_report", broken)
        result = make_runner(presenter=null_presenter).run(self.knows_everything)

        assert result.report is not None
        assert sync_writer.failures == 1
        assert store.fetch_current_goal().current_day == 2

    def test_next_day_reviews_previous_words(self, make_runner, store, goal):
        first = make_runner()
        first.run(self.knows_everything)
        studied = set(first.task.word_ids)

        second = make_runner()
        second.prepare()

        task = second.task
        assert task.day == 2
        assert task.date == goal.date_for_day(2)
        assert task.review_words
        assert set(task.review_words) <= studied
        assert not set(task.review_words) & set(task.new_words)
        assert store.fetch_task(goal.id, 2).review_words == task.review_words

    def test_final_day_records_survive_goal_completion(self, make_runner, store, config):
        goal = LearningGoal(pack_id=7, pack_name="sample", total_words=30, duration_days=1)
        store.save_goal(goal)
        store.save_tasks(
            planner_for_goal(goal, config).generate_complete_plan(goal, list(range(1, 31)))
        )
        writer = GoalFirstWriter()

        make_runner(writer=writer).run(self.knows_everything)

        assert writer.failures == 0
        assert store.fetch_current_goal() is None
        assert store.fetch_latest_goal().status == GoalStatus.COMPLETED
        assert len(store.fetch_records_for_day(1, goal.id)) == 30

    def test_replanned_back_day_stays_inside_goal(
        self, make_runner, store, config, temp_dir, make_record
    ):
        path = temp_dir / "big.jsonl"
        entries = [{"wid": i, "w": f"word{i}", "tr": [["n.", "词"]]} for i in range(1, 1001)]
        path.write_text("\n".join(json.dumps(e, ensure_ascii=False) for e in entries), "utf-8")
        big_pool = WordPoolService(path)
        big_pool.load()

        goal = LearningGoal(pack_id=8, pack_name="big", total_words=100, duration_days=10)
        store.save_goal(goal)
        planner = planner_for_goal(goal, config)
        store.save_tasks(planner.generate_complete_plan(goal, big_pool.word_ids[:100]))
        stored_new_words = store.fetch_task(goal.id, 8).new_words

        goal.current_day = 8
        store.update_goal(goal)
        store.save_records(
            [make_record(word_id=w, rights=1, lefts=1, dwell=2.0) for w in range(73, 85)],
            day=7,
            goal_id=goal.id,
        )

        runner = make_runner(word_pool=big_pool)
        runner.prepare()

        task = runner.task
        assert task.day == 8
        assert task.review_words
        assert task.new_words == stored_new_words == list(range(85, 101))
        assert store.fetch_task(goal.id, 8).new_words == task.new_words
