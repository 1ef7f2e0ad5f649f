"""
Round timer for timed games.

Counts down once per tick while a round is being guessed and calls back exactly once when time runs out.
The timer can be driven three ways:
- synchronously, by calling tick() (tests, turn-based front ends)
- asynchronously, with schedule(): an asyncio task sleeps between ticks. The task is the cancellation handle.
- by the wall clock, with catch_up(): the remaining time is recomputed from the start time, missed ticks included.
"""

import asyncio
import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

ExpiryCallback = Callable[[int], None]


class RoundTimer:
    """Countdown for a single round. A new timer is created for every round."""

    def __init__(
        self,
        duration_seconds: int,
        on_expire: ExpiryCallback,
        round_number: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.duration_seconds = duration_seconds
        self.remaining_seconds = duration_seconds
        self.round_number = round_number
        self.started_at = clock()
        self._clock = clock
        self._on_expire = on_expire
        self._running = True
        self._fired = False
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def has_fired(self) -> bool:
        return self._fired

    def tick(self) -> None:
        """One second passed."""
        if not self._running:
            return
        self.remaining_seconds = max(0, self.remaining_seconds - 1)
        if self.remaining_seconds == 0:
            self._expire()

    def catch_up(self) -> None:
        """Bring the countdown in line with the clock. Never adds time back."""
        if not self._running:
            return
        elapsed = int(self._clock() - self.started_at)
        remaining = max(0, self.duration_seconds - elapsed)
        if remaining < self.remaining_seconds:
            self.remaining_seconds = remaining
            if remaining == 0:
                self._expire()

    def cancel(self) -> None:
        """Stop counting. A scheduled task is cancelled as well, so no stale expiry can reach the session."""
        self._running = False
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def schedule(self, tick_seconds: float = 1.0) -> asyncio.Task:
        """Run the countdown on the running event loop."""
        if self._task is not None and not self._task.done():
            return self._task
        self._task = asyncio.get_running_loop().create_task(self._run(tick_seconds))
        return self._task

    async def _run(self, tick_seconds: float) -> None:
        while self._running:
            await asyncio.sleep(tick_seconds)
            self.tick()

    def _expire(self) -> None:
        self._running = False
        if self._fired:
            return
        self._fired = True
        # the expiring task ends by itself, the callback must not cancel it
        self._task = None
        logger.debug("Timer for round %d expired", self.round_number)
        self._on_expire(self.round_number)
