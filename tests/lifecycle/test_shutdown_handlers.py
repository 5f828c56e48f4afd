"""
Tests for the stream, task and LED shutdown handlers
"""

import asyncio
from unittest.mock import MagicMock

import pytest

from controllers.color_mirror_controller import ColorMirrorController
from hardware.led.strip_interface import LEDWriteError
from hardware.led.virtual_strip import VirtualStrip
from lifecycle.cancellation import CancellationToken
from lifecycle.handlers import LEDShutdownHandler, StreamShutdownHandler, TaskCancellationHandler
from models.color import Color
from models.config import PixelWindow


@pytest.mark.asyncio
async def test_stream_handler_lets_task_stop_on_token():
    token = CancellationToken()

    async def loop():
        await token.wait()
        return "stopped"

    task = asyncio.create_task(loop())
    handler = StreamShutdownHandler(token, task, stop_timeout=1.0)

    await handler.shutdown()

    assert token.cancelled
    assert task.result() == "stopped"
    assert handler.shutdown_priority == 150


@pytest.mark.asyncio
async def test_stream_handler_force_cancels_stuck_task():
    token = CancellationToken()

    async def stuck():
        await asyncio.Event().wait()

    task = asyncio.create_task(stuck())
    handler = StreamShutdownHandler(token, task, stop_timeout=0.05)

    await asyncio.wait_for(handler.shutdown(), timeout=1.0)

    assert task.cancelled()


@pytest.mark.asyncio
async def test_task_cancellation_handler_cancels_running_tasks():
    async def forever():
        await asyncio.Event().wait()

    tasks = [asyncio.create_task(forever()) for _ in range(2)]
    handler = TaskCancellationHandler(tasks)

    await handler.shutdown()

    assert all(t.cancelled() for t in tasks)
    assert handler.shutdown_priority == 120


@pytest.mark.asyncio
async def test_led_handler_writes_black():
    strip = VirtualStrip(4)
    controller = ColorMirrorController(strip, PixelWindow.resolve(4))
    controller.set_color(Color.white())

    await LEDShutdownHandler(controller).shutdown()

    assert strip.get_pixels() == [(0, 0, 0)] * 4


@pytest.mark.asyncio
async def test_led_handler_reraises_write_errors():
    controller = MagicMock(spec=ColorMirrorController)
    controller.set_color.side_effect = LEDWriteError("strip gone")
    handler = LEDShutdownHandler(controller)

    with pytest.raises(LEDWriteError):
        await handler.shutdown()

    controller.set_color.assert_called_once_with(Color.black())
    assert handler.shutdown_priority == 100
