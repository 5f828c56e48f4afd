"""
Test shutdown coordinator: critical task monitoring and handler ordering.
"""

import asyncio
import contextlib

import pytest

from lifecycle.shutdown_coordinator import ShutdownCoordinator
from lifecycle.task_registry import create_tracked_task, TaskCategory, TaskRegistry


class RecordingHandler:
    def __init__(self, name, priority, calls, error=None, delay=0.0):
        self.name = name
        self._priority = priority
        self.calls = calls
        self.error = error
        self.delay = delay

    @property
    def shutdown_priority(self) -> int:
        return self._priority

    async def shutdown(self) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        self.calls.append(self.name)
        if self.error:
            raise self.error


@pytest.fixture
def registry():
    return TaskRegistry()


@pytest.mark.asyncio
async def test_wait_for_shutdown_on_request(registry):
    """wait_for_shutdown returns once shutdown is requested."""
    coordinator = ShutdownCoordinator(registry=registry)

    async def dummy_task():
        while True:
            await asyncio.sleep(0.1)

    task = asyncio.create_task(dummy_task())
    registry.register(task, TaskCategory.STREAM, "Dummy stream task")

    asyncio.get_running_loop().call_later(0.05, coordinator.request_shutdown, "SIGINT")

    try:
        await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=2.0)
        assert coordinator.reason == "SIGINT"
    finally:
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task


@pytest.mark.asyncio
async def test_wait_for_shutdown_on_critical_task_failure(registry):
    coordinator = ShutdownCoordinator(registry=registry)

    async def failing_task():
        await asyncio.sleep(0.05)
        raise RuntimeError("Simulated critical task failure")

    task = asyncio.create_task(failing_task())
    registry.register(task, TaskCategory.RENDER, "Failing mirror task")

    await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=2.0)

    assert "Task failure" in coordinator.reason
    assert "Failing mirror task" in coordinator.reason
    assert registry.failed()[0].task is task


@pytest.mark.asyncio
async def test_non_critical_failure_is_ignored(registry):
    coordinator = ShutdownCoordinator(registry=registry)

    async def failing_task():
        raise RuntimeError("not important")

    task = asyncio.create_task(failing_task())
    registry.register(task, TaskCategory.GENERAL, "Side task")
    with contextlib.suppress(RuntimeError):
        await task

    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=0.1)


@pytest.mark.asyncio
async def test_handlers_run_by_descending_priority(registry):
    calls = []
    coordinator = ShutdownCoordinator(registry=registry)
    coordinator.register(RecordingHandler("led", 100, calls))
    coordinator.register(RecordingHandler("stream", 150, calls))
    coordinator.register(RecordingHandler("tasks", 120, calls))

    coordinator.request_shutdown("test")
    await coordinator.shutdown_all()

    assert calls == ["stream", "tasks", "led"]


@pytest.mark.asyncio
async def test_failing_or_slow_handler_does_not_stop_sequence(registry):
    calls = []
    coordinator = ShutdownCoordinator(timeout_per_handler=0.05, registry=registry)
    coordinator.register(RecordingHandler("broken", 150, calls, error=RuntimeError("boom")))
    coordinator.register(RecordingHandler("slow", 120, calls, delay=1.0))
    coordinator.register(RecordingHandler("led", 100, calls))

    await coordinator.shutdown_all()

    assert calls == ["broken", "led"]


def test_register_rejects_incomplete_handler(registry):
    coordinator = ShutdownCoordinator(registry=registry)

    with pytest.raises(ValueError):
        coordinator.register(object())


def test_get_handler_by_type(registry):
    coordinator = ShutdownCoordinator(registry=registry)
    handler = RecordingHandler("led", 100, [])
    coordinator.register(handler)

    assert coordinator.get_handler(RecordingHandler) is handler
    assert coordinator.get_handler(ShutdownCoordinator) is None


@pytest.mark.asyncio
async def test_create_tracked_task_registers_globally():
    async def work():
        return "done"

    task = create_tracked_task(work(), category=TaskCategory.SYSTEM, description="Tracked work")
    await task

    record = TaskRegistry.instance().get_record(task)
    assert record is not None
    assert record.info.description == "Tracked work"
    assert record.finished_return == "done"
    assert task.get_name() == "Tracked work"
