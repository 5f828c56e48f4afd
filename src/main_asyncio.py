"""
main_asyncio.py - Application entry point for Apacal
----------------------------------------------------

Responsible for:
- parsing the command line and loading configuration
- wiring the LED strip, the DisplayCAL color stream and the mirror loop
- starting the async main loop
- graceful shutdown on Ctrl +C or fatal errors
"""

import sys

# ---------------------------------------------------------------------------
# UTF-8 ENCODING FIX (important for Raspberry Pi)
# ---------------------------------------------------------------------------

# Set UTF-8 encoding for output BEFORE any imports (fixes Unicode symbol rendering)
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

import argparse
import asyncio
from typing import Any, Dict, List, Optional

from controllers.color_mirror_controller import ColorMirrorController
from displaycal import ColorStream
from hardware.led import LEDWriteError, create_strip
from lifecycle import ShutdownCoordinator
from lifecycle.cancellation import CancellationToken
from lifecycle.handlers import LEDShutdownHandler, StreamShutdownHandler, TaskCancellationHandler
from lifecycle.task_registry import create_tracked_task, TaskCategory, TaskRegistry
from managers.config_manager import ConfigManager
from models.color import Color
from models.config import AppConfig, ConfigError
from models.enums import LEDStripType, LogCategory, LogLevel
from services.color_stream_supervisor import ColorStreamSupervisor
from utils.logger import get_logger, configure_logger

# ---------------------------------------------------------------------------
# LOGGER SETUP
# ---------------------------------------------------------------------------

log = get_logger().for_category(LogCategory.SYSTEM)

EXIT_OK = 0
EXIT_CONFIG = 2
EXIT_FAILURE = 1


# ---------------------------------------------------------------------------
# COMMAND LINE
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apacal",
        description="Mirror the color shown by the DisplayCAL web interface onto an LED strip.",
    )
    parser.add_argument("--config", default="config/config.yaml",
                        help="main YAML config (relative paths resolve against src/)")
    parser.add_argument("--web", dest="url", metavar="URL",
                        help="DisplayCAL web interface address")
    parser.add_argument("-n", "--count", type=int,
                        help="number of LEDs on the strip")
    parser.add_argument("--from", dest="first_pixel", type=int, metavar="PIXEL",
                        help="first pixel to light")
    parser.add_argument("--to", dest="last_pixel", type=int, metavar="PIXEL",
                        help="last pixel to light, exclusive (-1 = all)")
    parser.add_argument("-i", "--intensity", type=int,
                        help="global brightness, 0-255")
    parser.add_argument("--gpio", type=int,
                        help="data pin of the LED strip")
    parser.add_argument("--virtual", action="store_true",
                        help="use an in-memory strip instead of real hardware")
    parser.add_argument("--log-level", default=LogLevel.INFO.name,
                        choices=[level.name for level in LogLevel],
                        help="minimum log level")
    return parser


def overrides_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """Map parsed arguments to dotted config keys (None = not given)."""
    return {
        "web.url": args.url,
        "led_strip.count": args.count,
        "led_strip.first_pixel": args.first_pixel,
        "led_strip.last_pixel": args.last_pixel,
        "led_strip.intensity": args.intensity,
        "led_strip.gpio": args.gpio,
        "led_strip.type": LEDStripType.VIRTUAL.value if args.virtual else None,
    }


# ---------------------------------------------------------------------------
# Application Entry
# ---------------------------------------------------------------------------

async def main(config: AppConfig) -> int:
    """Main async entry point (wiring and event loop startup)."""

    log.info("Starting Apacal...")

    # ========================================================================
    # 1. LED STRIP
    # ========================================================================

    strip = create_strip(config.led_strip)
    mirror = ColorMirrorController(strip, config.led_strip.window)

    try:
        mirror.set_color(Color.white())
    except LEDWriteError as e:
        log.error(f"set leds to white: {e}")
        return EXIT_FAILURE

    # ========================================================================
    # 2. COLOR STREAM
    # ========================================================================

    token = CancellationToken()
    colors: asyncio.Queue[Color] = asyncio.Queue(maxsize=config.web.queue_size)

    supervisor = ColorStreamSupervisor(
        ColorStream(request_timeout=config.web.request_timeout),
        config.web.url,
        colors,
        reconnect_delay=config.web.reconnect_delay,
    )

    log.info(f"Waiting for colors from the web interface at {config.web.url}, press C-c to abort")

    stream_task = create_tracked_task(
        supervisor.run(token),
        category=TaskCategory.STREAM,
        description="DisplayCAL color stream",
    )
    mirror_task = create_tracked_task(
        mirror.run(colors),
        category=TaskCategory.RENDER,
        description="LED color mirror",
    )

    # ============================================================
    # 3. SHUTDOWN COORDINATOR
    # ============================================================

    coordinator = ShutdownCoordinator()
    coordinator.register(StreamShutdownHandler(token, stream_task, stop_timeout=config.web.stop_timeout))
    coordinator.register(TaskCancellationHandler([mirror_task]))
    coordinator.register(LEDShutdownHandler(mirror))

    coordinator.setup_signal_handlers(asyncio.get_running_loop())

    log.info("🏁 Application initialized. Waiting for exit signal...")

    await coordinator.wait_for_shutdown()
    await coordinator.shutdown_all()

    log.debug(TaskRegistry.instance().summary())
    log.info("👋 Apacal shut down cleanly.", colors_shown=mirror.colors_shown)
    return EXIT_OK


def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logger(LogLevel[args.log_level])

    try:
        config = ConfigManager(config_path=args.config).load(overrides_from_args(args))
    except ConfigError as e:
        log.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG

    try:
        return asyncio.run(main(config))
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
        return EXIT_OK
    except Exception as e:
        log.error(f"Fatal error: {e}", exc_info=True)
        return EXIT_FAILURE


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------

def cli() -> None:
    sys.exit(run())


if __name__ == "__main__":
    cli()
