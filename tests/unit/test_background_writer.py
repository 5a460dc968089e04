"""Tests for BackgroundWriter."""

import logging
import threading

from nfwords.services import BackgroundWriter


class TestSynchronousWriter:
    """Tests for inline execution."""

    def test_runs_inline(self, sync_writer):
        calls = []
        sync_writer.submit("append", calls.append, 1)
        assert calls == [1]

    def test_passes_keyword_arguments(self, sync_writer):
        results = {}
        sync_writer.submit("store", results.update, key="value")
        assert results == {"key": "value"}

    def test_failure_is_logged_and_counted(self, sync_writer, caplog):
        def failing():
            raise OSError("disk full")

        with caplog.at_level(logging.ERROR):
            sync_writer.submit("save records", failing)
            sync_writer.submit("save report", failing)

        assert sync_writer.failures == 2
        assert "Background write failed (save records): disk full" in caplog.text


class TestThreadedWriter:
    """Tests for execution on the worker pool."""

    def test_runs_off_calling_thread(self):
        threads = []
        with BackgroundWriter(max_workers=1) as writer:
            writer.submit("record thread", lambda: threads.append(threading.current_thread()))
            writer.flush()
        assert threads and threads[0] is not threading.current_thread()

    def test_flush_waits_for_all_writes(self):
        calls = []
        writer = BackgroundWriter(max_workers=2)
        for i in range(20):
            writer.submit("append", calls.append, i)
        writer.flush()
        writer.shutdown()
        assert sorted(calls) == list(range(20))

    def test_failure_does_not_raise_on_flush(self, caplog):
        def failing():
            raise ValueError("bad row")

        with caplog.at_level(logging.ERROR):
            with BackgroundWriter(max_workers=1) as writer:
                writer.submit("bad", failing)
                writer.flush()

        assert writer.failures == 1
        assert "bad row" in caplog.text
