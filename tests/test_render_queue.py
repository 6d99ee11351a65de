"""Tests for the render context."""

import threading
import time

import pytest

from map_mcp_tools.render_queue import (
    RenderQueue,
    RenderQueueClosedError,
    RenderQueueFullError,
)


@pytest.fixture
def render_queue():
    q = RenderQueue(maxsize=8)
    yield q
    q.close()


class TestRenderQueue:
    def test_jobs_run_in_fifo_order(self, render_queue: RenderQueue):
        seen = []
        for i in range(5):
            render_queue.post(lambda i=i: seen.append(i))
        assert render_queue.drain(timeout=5)
        assert seen == [0, 1, 2, 3, 4]

    def test_future_result(self, render_queue: RenderQueue):
        future = render_queue.post(lambda: 42)
        assert future.result(timeout=5) == 42

    def test_future_exception(self, render_queue: RenderQueue):
        def boom():
            raise RuntimeError("surface gone")

        future = render_queue.post(boom)
        with pytest.raises(RuntimeError, match="surface gone"):
            future.result(timeout=5)
        # The worker survives a failing job.
        assert render_queue.post(lambda: "ok").result(timeout=5) == "ok"

    def test_jobs_run_on_worker_thread(self, render_queue: RenderQueue):
        assert not render_queue.is_render_thread()
        assert render_queue.post(render_queue.is_render_thread).result(timeout=5) is True

    def test_full_queue_rejects(self):
        q = RenderQueue(maxsize=1)
        release = threading.Event()
        started = threading.Event()

        def block():
            started.set()
            release.wait(5)

        try:
            q.post(block)
            assert started.wait(5)
            q.post(lambda: None)  # fills the single slot
            with pytest.raises(RenderQueueFullError):
                q.post(lambda: None)
        finally:
            release.set()
            q.close()

    def test_post_after_close(self):
        q = RenderQueue()
        q.close()
        assert q.closed
        with pytest.raises(RenderQueueClosedError):
            q.post(lambda: None)

    def test_close_runs_pending_jobs(self):
        q = RenderQueue()
        seen = []
        q.post(lambda: seen.append(1))
        q.close()
        assert seen == [1]
        assert q.drain(timeout=1)

    def test_post_does_not_wait_behind_drain(self):
        q = RenderQueue(maxsize=1)
        drainer = threading.Thread(target=q.drain, args=(2,))
        release = threading.Event()
        started = threading.Event()

        def block():
            started.set()
            release.wait(5)

        try:
            q.post(block)
            assert started.wait(5)
            q.post(lambda: None)
            drainer.start()
            time.sleep(0.1)

            began = time.monotonic()
            with pytest.raises(RenderQueueFullError):
                q.post(lambda: None)
            assert time.monotonic() - began < 0.5
        finally:
            release.set()
            if drainer.is_alive():
                drainer.join(5)
            q.close()

    def test_drain_waits_for_free_slot(self):
        q = RenderQueue(maxsize=1)
        release = threading.Event()
        started = threading.Event()
        seen = []

        def block():
            started.set()
            release.wait(5)
            seen.append("blocked")

        try:
            q.post(block)
            assert started.wait(5)
            q.post(lambda: seen.append("pending"))
            threading.Timer(0.1, release.set).start()
            assert q.drain(timeout=5)
            assert seen == ["blocked", "pending"]
        finally:
            release.set()
            q.close()

    def test_drain_times_out_when_full(self):
        q = RenderQueue(maxsize=1)
        release = threading.Event()
        started = threading.Event()

        def block():
            started.set()
            release.wait(5)

        try:
            q.post(block)
            assert started.wait(5)
            q.post(lambda: None)
            assert q.drain(timeout=0.1) is False
        finally:
            release.set()
            q.close()
