"""Asyncio debounce timer."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


class Debouncer:
    """Run an async callback once calls have been quiet for ``delay`` seconds.

    Each ``trigger`` cancels the pending timer and arms a new one. A callback
    that has already started is left to finish.
    """

    def __init__(self, delay: float, callback: Callable[..., Awaitable[Any]]):
        self.delay = delay
        self.callback = callback
        self._timer: asyncio.Task | None = None
        self._running: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def trigger(self, *args: Any) -> None:
        self.cancel()
        self._timer = asyncio.get_running_loop().create_task(self._wait_then_fire(args))

    def cancel(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def _wait_then_fire(self, args: tuple) -> None:
        await asyncio.sleep(self.delay)
        # Past this point the timer may be re-armed without cancelling the callback.
        task = asyncio.get_running_loop().create_task(self._fire(args))
        self._running.add(task)
        task.add_done_callback(self._running.discard)
        self._timer = None

    async def _fire(self, args: tuple) -> None:
        try:
            await self.callback(*args)
        except Exception:
            logger.exception("Debounced callback failed")

    async def flush(self) -> None:
        """Wait for the pending timer and any running callbacks to finish."""
        if self._timer is not None:
            try:
                await self._timer
            except asyncio.CancelledError:
                pass
        if self._running:
            await asyncio.gather(*list(self._running), return_exceptions=True)
