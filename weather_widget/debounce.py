"""
Asyncio debouncing for input-driven calls.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Set

from weather_widget.config import WidgetConfig

logger = logging.getLogger(__name__)


class Debouncer:
    """
    Defers a coroutine call until triggers pause for a quiet period.

    Each trigger cancels a call that is still waiting out its delay. A call
    that has already fired is left to finish; callers that care about stale
    results must discard them themselves.
    """

    def __init__(
        self,
        callback: Callable[..., Awaitable[Any]],
        delay: Optional[float] = None,
    ):
        """
        Initialize the debouncer.

        Args:
            callback: Coroutine function to call after the quiet period
            delay: Quiet period in seconds (defaults to config value)
        """
        self.callback = callback
        self.delay = WidgetConfig.DEBOUNCE_SECONDS if delay is None else delay
        self._waiting: Optional[asyncio.Task] = None
        self._running: Set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        """True while a call is scheduled but has not fired yet."""
        return self._waiting is not None and not self._waiting.done()

    def trigger(self, *args: Any) -> None:
        """Schedule a call, replacing any call that has not fired yet."""
        self.cancel()
        self._waiting = asyncio.get_running_loop().create_task(self._run(*args))

    def cancel(self) -> None:
        if self.pending:
            self._waiting.cancel()
        self._waiting = None

    async def _run(self, *args: Any) -> None:
        await asyncio.sleep(self.delay)

        # Past this point the call has fired and later triggers leave it alone.
        task = asyncio.current_task()
        if self._waiting is task:
            self._waiting = None
        self._running.add(task)
        try:
            await self.callback(*args)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception("Debounced call to %s failed", self.callback)
        finally:
            self._running.discard(task)

    async def flush(self) -> None:
        """Wait for the scheduled call and any calls still in flight."""
        tasks = list(self._running)
        if self._waiting is not None:
            tasks.append(self._waiting)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
