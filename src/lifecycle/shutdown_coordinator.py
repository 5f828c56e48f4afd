"""
Shutdown coordinator that orchestrates graceful shutdown of all components.

Manages signal handlers, shutdown sequencing, and error handling across
multiple shutdown handlers in priority order.
"""

import asyncio
import signal
from typing import Dict, Iterable, List, Optional, Set

from lifecycle.shutdown_protocol import IShutdownHandler
from lifecycle.task_registry import TaskCategory, TaskRegistry
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)

DEFAULT_CRITICAL_CATEGORIES = frozenset({TaskCategory.STREAM, TaskCategory.RENDER})


class ShutdownCoordinator:
    """
    Coordinates graceful shutdown of multiple components.

    Example:
        coordinator = ShutdownCoordinator()
        coordinator.register(StreamShutdownHandler(...))
        coordinator.register(LEDShutdownHandler(...))

        coordinator.setup_signal_handlers(asyncio.get_running_loop())
        await coordinator.wait_for_shutdown()
        await coordinator.shutdown_all()
    """

    def __init__(
        self,
        timeout_per_handler: float = 5.0,
        total_timeout: float = 15.0,
        critical_categories: Iterable[TaskCategory] = DEFAULT_CRITICAL_CATEGORIES,
        registry: Optional[TaskRegistry] = None,
    ):
        """
        Args:
            timeout_per_handler: Timeout for each individual handler (seconds)
            total_timeout: Total timeout for entire shutdown sequence (seconds)
            critical_categories: Task categories whose failure triggers shutdown
            registry: Task registry to monitor (defaults to the global one)
        """
        self._handlers: List[IShutdownHandler] = []
        self._shutdown_event = asyncio.Event()
        self._timeout_per_handler = timeout_per_handler
        self._total_timeout = total_timeout
        self._critical_categories: Set[TaskCategory] = set(critical_categories)
        self._registry = registry or TaskRegistry.instance()
        self._shutdown_trigger: Dict[str, Optional[str]] = {"reason": None}

    @property
    def reason(self) -> Optional[str]:
        return self._shutdown_trigger["reason"]

    def register(self, handler: IShutdownHandler) -> None:
        """
        Register a shutdown handler.

        Handler must have:
        - shutdown_priority property (int)
        - async shutdown() method
        """
        if not hasattr(handler, "shutdown_priority"):
            raise ValueError(f"Handler {handler} missing shutdown_priority property")
        if not hasattr(handler, "shutdown"):
            raise ValueError(f"Handler {handler} missing shutdown() method")

        self._handlers.append(handler)
        log.debug(f"Registered shutdown handler: {handler.__class__.__name__}")

    def request_shutdown(self, reason: str) -> None:
        """Trigger shutdown from code (signal handlers call this too)."""
        if self._shutdown_event.is_set():
            return
        self._shutdown_trigger["reason"] = reason
        self._shutdown_event.set()

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """Install SIGINT (Ctrl+C) and SIGTERM handlers that trigger shutdown."""

        def signal_handler(sig: signal.Signals) -> None:
            log.info(f"Signal {sig.name} received → triggering shutdown")
            self.request_shutdown(sig.name)

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))

        log.info("Signal handlers installed (SIGINT, SIGTERM)")

    def _check_critical_task_failures(self) -> bool:
        """Return True (and record the reason) if a critical task has failed."""
        for record in self._registry.failed():
            if record.info.category in self._critical_categories:
                log.error(
                    f"❌ Critical task failed: {record.info.description} "
                    f"(category: {record.info.category.name})"
                )
                self.request_shutdown(f"Task failure: {record.info.description}")
                return True
        return False

    async def wait_for_shutdown(self) -> None:
        """
        Wait for a shutdown request or a critical task failure.

        Critical tasks that finish cleanly or get cancelled do not trigger
        shutdown on their own.
        """
        while not self._shutdown_event.is_set():
            if self._check_critical_task_failures():
                return

            critical_tasks = {
                r.task for r in self._registry.active()
                if r.info.category in self._critical_categories
            }

            shutdown_waiter = asyncio.ensure_future(self._shutdown_event.wait())
            try:
                await asyncio.wait(
                    critical_tasks | {shutdown_waiter},
                    return_when=asyncio.FIRST_COMPLETED,
                )
            finally:
                # Critical tasks are long-lived; only the waiter is ours to cancel
                if not shutdown_waiter.done():
                    shutdown_waiter.cancel()

        log.debug("Shutdown triggered", reason=self.reason)

    async def shutdown_all(self) -> None:
        """
        Execute graceful shutdown of all handlers in priority order.

        Handlers are called in descending priority order (highest first).
        A failing or slow handler is logged and skipped.
        """
        log.info("🛑 Initiating graceful shutdown sequence...")
        log.info(f"   Reason: {self.reason or 'UNKNOWN'}")

        sorted_handlers = sorted(self._handlers, key=lambda h: h.shutdown_priority, reverse=True)

        loop = asyncio.get_running_loop()
        start_time = loop.time()

        for handler in sorted_handlers:
            handler_name = handler.__class__.__name__

            elapsed = loop.time() - start_time
            if elapsed > self._total_timeout:
                log.error(f"⚠️  Total shutdown timeout exceeded ({elapsed:.1f}s > {self._total_timeout}s)")
                break

            try:
                log.debug(f"Shutting down {handler_name} (priority={handler.shutdown_priority})...")
                await asyncio.wait_for(handler.shutdown(), timeout=self._timeout_per_handler)
                log.debug(f"✓ {handler_name} shutdown complete")

            except asyncio.TimeoutError:
                log.error(f"⚠️  {handler_name} shutdown timeout ({self._timeout_per_handler}s)")

            except asyncio.CancelledError:
                log.warn(f"{handler_name} shutdown was cancelled")
                raise

            except Exception as e:
                log.error(f"❌ Error shutting down {handler_name}: {e}", exc_info=True)

        log.info("✓ Shutdown sequence complete")

    def get_handler(self, handler_type: type) -> Optional[IShutdownHandler]:
        """Get a registered handler by type."""
        for handler in self._handlers:
            if isinstance(handler, handler_type):
                return handler
        return None
