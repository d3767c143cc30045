"""
services/tasks.py – Fire-and-forget coroutines on the shared event loop.

Widget callbacks and startup cannot await, so they schedule work here. A task
that dies with an exception is logged instead of vanishing silently.
"""

import asyncio
import logging
from typing import Awaitable

logger = logging.getLogger(__name__)


def spawn(coro: Awaitable) -> asyncio.Future:
    task = asyncio.ensure_future(coro)
    task.add_done_callback(log_task_failure)
    return task


def log_task_failure(task: asyncio.Future) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Unhandled error in background task", exc_info=exc)
