"""Test fire-and-forget dispatch of client calls."""

import asyncio
import concurrent.futures
import logging
import threading

from capture_hub.hub.dispatch import AsyncDispatcher
from capture_hub.hub.hub import Hub


class AsyncClient:
    """Client whose capture methods are coroutines."""

    def __init__(self, fail: bool = False, delay: float = 0.0) -> None:
        self.fail = fail
        self.delay = delay
        self.messages: list[str] = []

    async def capture_message(self, message, level, hint, scope):
        await asyncio.sleep(self.delay)
        if self.fail:
            raise ConnectionError("transport down")
        self.messages.append(message)


class GatedClient:
    """Client whose capture does not finish until ``release`` is set."""

    def __init__(self, release: threading.Event) -> None:
        self.release = release
        self.messages: list[str] = []

    async def capture_message(self, message, level, hint, scope):
        await asyncio.to_thread(self.release.wait, 5)
        self.messages.append(message)


class TestAsyncDispatchInLoop:
    async def test_returns_before_client_completes(self):
        client = AsyncClient(delay=0.01)
        hub = Hub(client=client)

        event_id = hub.capture_message("slow")

        assert event_id
        assert client.messages == []
        assert hub.dispatcher.pending == 1

        await hub.flush()
        assert client.messages == ["slow"]
        assert hub.dispatcher.pending == 0

    async def test_failure_is_logged_not_raised(self, caplog):
        hub = Hub(client=AsyncClient(fail=True))

        with caplog.at_level(logging.ERROR, logger="capture_hub.hub.dispatch"):
            event_id = hub.capture_message("lost")
            await hub.flush()

        assert hub.dispatcher.failures == 1
        assert f"event_id={event_id}" in caplog.text
        assert "capture_message" in caplog.text

    async def test_on_dispatch_error_callback(self):
        errors = []
        hub = Hub(
            client=AsyncClient(fail=True),
            on_dispatch_error=lambda method, event_id, exc: errors.append(
                (method, event_id, type(exc))
            ),
        )

        event_id = hub.capture_message("lost")
        await hub.flush()

        assert errors == [("capture_message", event_id, ConnectionError)]

    async def test_failing_callback_is_contained(self, caplog):
        def bad_callback(method, event_id, exc):
            raise RuntimeError("callback broke")

        hub = Hub(client=AsyncClient(fail=True), on_dispatch_error=bad_callback)

        with caplog.at_level(logging.WARNING, logger="capture_hub.hub.dispatch"):
            hub.capture_message("lost")
            await hub.flush()

        assert "on_dispatch_error callback failed" in caplog.text

    async def test_flush_without_pending(self):
        await Hub().flush()

    async def test_many_captures_all_complete(self):
        client = AsyncClient()
        hub = Hub(client=client)
        for i in range(20):
            hub.capture_message(f"m{i}")
        await hub.flush()
        assert sorted(client.messages) == sorted(f"m{i}" for i in range(20))


class TestDispatchWithoutLoop:
    def test_returns_before_client_completes(self):
        release = threading.Event()
        client = GatedClient(release)
        hub = Hub(client=client)

        event_id = hub.capture_message("sync caller")

        assert len(event_id) == 32
        assert client.messages == []
        assert hub.dispatcher.pending == 1

        release.set()
        assert hub.flush_sync(timeout=5)
        assert client.messages == ["sync caller"]
        assert hub.dispatcher.pending == 0

    def test_hung_client_does_not_block_caller(self):
        release = threading.Event()
        hub = Hub(client=GatedClient(release))

        hub.capture_message("stuck")

        assert hub.flush_sync(timeout=0.05) is False
        release.set()
        assert hub.flush_sync(timeout=5)

    def test_coroutine_failure_logged(self, caplog):
        hub = Hub(client=AsyncClient(fail=True))
        with caplog.at_level(logging.ERROR, logger="capture_hub.hub.dispatch"):
            event_id = hub.capture_message("x")
            assert hub.flush_sync(timeout=5)
        assert hub.dispatcher.failures == 1
        assert f"event_id={event_id}" in caplog.text

    def test_background_loop_reused(self):
        client = AsyncClient()
        hub = Hub(client=client)
        for i in range(5):
            hub.capture_message(f"m{i}")
        assert hub.flush_sync(timeout=5)
        assert sorted(client.messages) == [f"m{i}" for i in range(5)]

    async def test_async_flush_waits_for_background_calls(self):
        release = threading.Event()
        client = GatedClient(release)
        dispatcher = AsyncDispatcher()

        # Submitted from a worker thread, so it lands on the background loop.
        await asyncio.to_thread(
            dispatcher.dispatch, "capture_message", "bg", client.capture_message,
            "from thread", None, {}, None,
        )
        assert dispatcher.pending == 1

        release.set()
        await dispatcher.flush()
        assert client.messages == ["from thread"]
        assert dispatcher.pending == 0

class TestDispatcherDirect:
    def test_sync_raise_is_reported(self):
        errors = []
        dispatcher = AsyncDispatcher(
            on_dispatch_error=lambda m, e, exc: errors.append((m, e, str(exc)))
        )

        def explode(*args):
            raise ValueError("sync failure")

        dispatcher.dispatch("capture_event", "abc", explode, 1, 2)
        assert errors == [("capture_event", "abc", "sync failure")]

    def test_plain_return_value_ignored(self):
        dispatcher = AsyncDispatcher()
        dispatcher.dispatch("capture_event", "abc", lambda *a: "done")
        assert dispatcher.failures == 0
        assert dispatcher.pending == 0

    def test_concurrent_future_failure_reported(self):
        errors = []
        dispatcher = AsyncDispatcher(
            on_dispatch_error=lambda m, e, exc: errors.append(e)
        )
        future: concurrent.futures.Future = concurrent.futures.Future()

        dispatcher.dispatch("capture_message", "f1", lambda: future)
        assert errors == []

        future.set_exception(OSError("late failure"))
        assert errors == ["f1"]

    def test_concurrent_future_success(self):
        dispatcher = AsyncDispatcher()
        future: concurrent.futures.Future = concurrent.futures.Future()
        dispatcher.dispatch("capture_message", "f2", lambda: future)
        future.set_result("ok")
        assert dispatcher.failures == 0

    def test_concurrent_future_tracked_until_done(self):
        dispatcher = AsyncDispatcher()
        future: concurrent.futures.Future = concurrent.futures.Future()
        dispatcher.dispatch("capture_message", "f3", lambda: future)

        assert dispatcher.pending == 1
        assert dispatcher.wait(timeout=0.01) is False

        threading.Timer(0.01, future.set_result, args=("ok",)).start()
        assert dispatcher.wait(timeout=5)
        assert dispatcher.pending == 0

    async def test_flush_waits_for_concurrent_future(self):
        dispatcher = AsyncDispatcher()
        future: concurrent.futures.Future = concurrent.futures.Future()
        dispatcher.dispatch("capture_message", "f4", lambda: future)

        threading.Timer(0.01, future.set_exception, args=(OSError("late"),)).start()
        await dispatcher.flush()

        assert future.done()
        assert dispatcher.failures == 1
