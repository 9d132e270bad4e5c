"""
Feedback Timer.

Cancellable deferred callback used to hold answer feedback on screen before
the practice flow moves on. At most one callback is pending; once cancelled
or replaced it never runs.
"""

import asyncio
import logging
from collections.abc import Callable

from deckpractice.domain.constants import FEEDBACK_DELAY_MS, SKIP_DEBOUNCE_MS

logger = logging.getLogger(__name__)


class FeedbackTimer:
    """Schedules the post-feedback action on the running event loop.

    Decision flow:
    1. start(callback) -> callback scheduled after delay_seconds
    2. After debounce_seconds the timer becomes skippable
    3. skip() runs the callback immediately and drops the scheduled one
    4. cancel() drops the callback without running it
    """

    def __init__(
        self,
        delay_seconds: float = FEEDBACK_DELAY_MS / 1000,
        debounce_seconds: float = SKIP_DEBOUNCE_MS / 1000,
    ) -> None:
        self.delay_seconds = delay_seconds
        self.debounce_seconds = debounce_seconds
        self._callback: Callable[[], None] | None = None
        self._fire_handle: asyncio.TimerHandle | None = None
        self._arm_handle: asyncio.TimerHandle | None = None
        self._armed = False
        # Bumped on every start/cancel so a handle that slipped through
        # cancellation can recognize itself as stale
        self._generation = 0

    @property
    def is_pending(self) -> bool:
        return self._callback is not None

    @property
    def can_skip(self) -> bool:
        return self._callback is not None and self._armed

    def start(self, callback: Callable[[], None]) -> None:
        """Schedule callback, replacing any pending one.

        Must be called from a running event loop.
        """
        self.cancel()
        loop = asyncio.get_running_loop()

        self._generation += 1
        generation = self._generation
        self._callback = callback
        self._armed = False
        self._arm_handle = loop.call_later(self.debounce_seconds, self._arm, generation)
        self._fire_handle = loop.call_later(self.delay_seconds, self._fire, generation)

    def skip(self) -> bool:
        """Run the pending callback now if the debounce window has passed.

        Returns:
            True if the callback ran
        """
        if not self.can_skip:
            return False

        callback = self._take()
        logger.debug("Feedback skipped")
        callback()
        return True

    def cancel(self) -> None:
        """Drop the pending callback without running it."""
        if self._take() is not None:
            logger.debug("Feedback timer cancelled")

    def _arm(self, generation: int) -> None:
        if generation == self._generation:
            self._armed = True

    def _fire(self, generation: int) -> None:
        if generation != self._generation:
            return
        callback = self._take()
        if callback is not None:
            callback()

    def _take(self) -> Callable[[], None] | None:
        """Detach the pending callback and cancel its scheduled handles."""
        callback = self._callback
        if self._fire_handle is not None:
            self._fire_handle.cancel()
        if self._arm_handle is not None:
            self._arm_handle.cancel()
        self._callback = None
        self._fire_handle = None
        self._arm_handle = None
        self._armed = False
        self._generation += 1
        return callback
