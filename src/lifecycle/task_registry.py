"""
Task Registry
-------------

Tracks the asyncio tasks the application starts, so the shutdown coordinator
can notice when a critical one dies and so failures are always logged.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum, auto
from typing import Dict, Optional, List, Any

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TASK)


class TaskCategory(Enum):
    """Logical grouping of asynchronous tasks."""
    STREAM = auto()     # DisplayCAL polling
    RENDER = auto()     # LED output
    SYSTEM = auto()
    GENERAL = auto()


@dataclass(frozen=True)
class TaskInfo:
    """Immutable metadata captured at task creation time."""
    id: int
    category: TaskCategory
    description: str
    created_at: str  # ISO UTC string


@dataclass
class TaskRecord:
    """Internal structure tracking task state."""
    task: asyncio.Task
    info: TaskInfo
    cancelled: bool = False
    finished_with_error: Optional[BaseException] = None
    finished_return: Optional[Any] = None


class TaskRegistry:
    """
    Global registry for the application's asyncio tasks.

    Responsibilities:
    - Track tasks and metadata
    - Detect and log task failures
    - Expose active / failed tasks to the shutdown coordinator
    """

    _instance: Optional["TaskRegistry"] = None

    def __init__(self) -> None:
        self._records: Dict[int, TaskRecord] = {}
        self._next_id: int = 1

    @classmethod
    def instance(cls) -> "TaskRegistry":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(self, task: asyncio.Task, category: TaskCategory, description: str) -> int:
        """Register a new task with metadata."""
        task_id = self._next_id
        self._next_id += 1

        info = TaskInfo(
            id=task_id,
            category=category,
            description=description,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self._records[task_id] = TaskRecord(task=task, info=info)

        log.debug(f"[Task {task_id}] Registered ({category.name}) - {description}")

        task.add_done_callback(self._on_task_done)
        return task_id

    def _on_task_done(self, task: asyncio.Task) -> None:
        record = self.get_record(task)
        if record is None:
            return

        if task.cancelled():
            record.cancelled = True
            log.debug(f"[Task {record.info.id}] Cancelled")
            return

        exc = task.exception()
        if exc:
            record.finished_with_error = exc
            log.error(
                f"[Task {record.info.id}] FAILED: {record.info.description}",
                error=f"{type(exc).__name__}: {exc}",
            )
        else:
            record.finished_return = task.result()
            log.debug(f"[Task {record.info.id}] Completed successfully")

    def get_record(self, task: asyncio.Task) -> Optional[TaskRecord]:
        for record in self._records.values():
            if record.task is task:
                return record
        return None

    def list_all(self) -> List[TaskRecord]:
        return list(self._records.values())

    def active(self) -> List[TaskRecord]:
        """Return only tasks that are still running."""
        return [r for r in self._records.values() if not r.task.done()]

    def failed(self) -> List[TaskRecord]:
        """Return tasks that ended with an exception."""
        return [r for r in self._records.values() if r.finished_with_error is not None]

    def summary(self) -> str:
        """Return human-readable summary for logs."""
        cancelled = sum(1 for r in self._records.values() if r.cancelled)
        return (
            f"Tasks: total={len(self._records)}, running={len(self.active())}, "
            f"failed={len(self.failed())}, cancelled={cancelled}"
        )


def create_tracked_task(
    coro,
    *,
    category: TaskCategory,
    description: str,
) -> asyncio.Task:
    """
    Create and register a task in a single call.
    """
    task = asyncio.get_running_loop().create_task(coro, name=description)
    TaskRegistry.instance().register(task=task, category=category, description=description)
    return task
