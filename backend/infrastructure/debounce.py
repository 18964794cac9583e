"""
Trailing-edge debouncer for asyncio.

Usage:
    debouncer = Debouncer(0.3, run_search)

    debouncer.call("pod")      # scheduled
    debouncer.call("podcast")  # replaces the pending call

    debouncer.cancel()         # drop the pending call
    await debouncer.flush()    # or run it right now
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, Optional

logger = logging.getLogger("Debouncer")


class Debouncer:
    """Delay calls to ``func`` until ``delay`` seconds pass without another call.

    Only the most recent call in a window runs. ``func`` may be a plain
    function or a coroutine function. Must be used from a running event loop.
    """

    def __init__(self, delay: float, func: Callable[..., Any]):
        if delay < 0:
            raise ValueError("delay must be non-negative")
        self.delay = delay
        self.func = func
        self._task: Optional[asyncio.Task] = None
        self._started = False
        self._args: tuple = ()
        self._kwargs: dict = {}

    @property
    def pending(self) -> bool:
        """True while a call is scheduled and has not started running."""
        return self._task is not None and not self._task.done() and not self._started

    def call(self, *args, **kwargs) -> None:
        """Schedule func(*args, **kwargs), replacing any pending call."""
        self._cancel_task()
        self._started = False
        self._args = args
        self._kwargs = kwargs
        self._task = asyncio.create_task(self._run_after_delay())

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        self._cancel_task()
        self._args = ()
        self._kwargs = {}

    async def flush(self) -> Any:
        """Run the pending call immediately and return its result (None if nothing is pending)."""
        if not self.pending:
            return None
        args, kwargs = self._args, self._kwargs
        self.cancel()
        return await self._invoke(args, kwargs)

    def _cancel_task(self) -> None:
        # A call that already started is left to finish
        if self.pending:
            self._task.cancel()
        self._task = None

    async def _invoke(self, args: tuple, kwargs: dict) -> Any:
        result = self.func(*args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def _run_after_delay(self) -> Any:
        await asyncio.sleep(self.delay)
        self._started = True
        args, kwargs = self._args, self._kwargs
        self._args = ()
        self._kwargs = {}
        try:
            return await self._invoke(args, kwargs)
        except Exception as e:
            logger.error(f"Debounced call to {getattr(self.func, '__name__', self.func)!r} failed: {e}")
            return None
