from .led_shutdown_handler import LEDShutdownHandler
from .stream_shutdown_handler import StreamShutdownHandler
from .task_cancellation_handler import TaskCancellationHandler

__all__ = [
    "LEDShutdownHandler",
    "StreamShutdownHandler",
    "TaskCancellationHandler",
]
