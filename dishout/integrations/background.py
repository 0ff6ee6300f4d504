from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

logger = logging.getLogger(__name__)

# Strong references so pending tasks are not garbage collected mid-flight.
_pending: set[asyncio.Task] = set()


def _on_done(task: asyncio.Task) -> None:
    _pending.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Background task %s failed", task.get_name(), exc_info=exc)


def fire_and_forget(coro: Coroutine[Any, Any, Any], name: str | None = None) -> asyncio.Task | None:
    """Schedule ``coro`` on the running loop and return immediately."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        logger.warning("No running event loop, dropping background task %s", name)
        coro.close()
        return None
    task = loop.create_task(coro, name=name)
    _pending.add(task)
    task.add_done_callback(_on_done)
    return task


def pending_tasks() -> set[asyncio.Task]:
    return set(_pending)
