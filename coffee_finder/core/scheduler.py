"""
Debounce timer for route refreshes.

A RefreshTimer owns at most one pending one-shot callback on the running
event loop. Scheduling replaces the pending callback; it never queues.
"""

import asyncio
import logging
from typing import Callable, Optional

from coffee_finder.core.validation import validate_delay

logger = logging.getLogger(__name__)


class RefreshTimer:
    """Cancellable one-shot timer built on ``loop.call_later``."""

    def __init__(self, name: str = "refresh"):
        self.name = name
        self._handle: Optional[asyncio.TimerHandle] = None
        self._fired = 0

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def deadline(self) -> Optional[float]:
        """Loop time at which the pending callback fires, if any."""
        if self._handle is None:
            return None
        return self._handle.when()

    @property
    def fired_count(self) -> int:
        return self._fired

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        """
        Cancel any pending callback and schedule ``callback`` after ``delay`` seconds.

        Must be called from a running event loop.
        """
        delay = validate_delay(delay)
        loop = asyncio.get_running_loop()
        replaced = self.cancel()
        self._handle = loop.call_later(delay, self._fire, callback)
        logger.debug(
            f"Timer '{self.name}' scheduled in {delay:.3f}s"
            + (" (replaced pending)" if replaced else "")
        )

    def cancel(self) -> bool:
        """Cancel the pending callback. Returns True if one was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    def _fire(self, callback: Callable[[], None]) -> None:
        self._handle = None
        self._fired += 1
        logger.debug(f"Timer '{self.name}' fired")
        callback()
