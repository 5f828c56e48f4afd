"""
Lifecycle subsystem
-------------------

Exports the public API for:
- cancellation tokens
- graceful shutdown
- task tracking & introspection
- shutdown handlers

External code should import from:
    from lifecycle import ShutdownCoordinator, CancellationToken
    from lifecycle.handlers import LEDShutdownHandler
"""

from .cancellation import CancellationToken, OperationCancelledError, CANCELLED, DEADLINE_EXCEEDED
from .shutdown_coordinator import ShutdownCoordinator
from .task_registry import TaskRegistry, TaskCategory, TaskInfo, create_tracked_task
from .shutdown_protocol import IShutdownHandler
from . import handlers

__all__ = [
    "CancellationToken",
    "OperationCancelledError",
    "CANCELLED",
    "DEADLINE_EXCEEDED",
    "ShutdownCoordinator",
    "TaskRegistry",
    "TaskCategory",
    "TaskInfo",
    "create_tracked_task",
    "IShutdownHandler",
    "handlers",
]
