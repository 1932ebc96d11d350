"""
scheduler.py
======================

Single-threaded timeline of one-shot deferred callbacks.

Nothing runs on its own: the owner calls run_due() (Streamlit does it on
every rerun, tests do it after advancing a ManualClock) and every callback
whose deadline has passed runs on the caller's thread, in deadline order.

Callbacks can be tied to a CancelToken. Once the token is cancelled the
callback is dropped without running, which is how a closed quiz session
keeps its pending reveal/advance from touching dead state.
"""

from __future__ import annotations

import heapq
import itertools
import time
from typing import Callable, List, Optional


class CancelToken:
    """Liveness flag shared by every callback of one owner."""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualClock:
    """Clock that only moves when told to. Used by tests."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        if seconds < 0:
            raise ValueError("cannot move a clock backwards")
        self.now += seconds
        return self.now


class ScheduledCall:
    __slots__ = ("deadline", "seq", "callback", "token", "_cancelled")

    def __init__(
        self,
        deadline: float,
        seq: int,
        callback: Callable[[], None],
        token: Optional[CancelToken],
    ) -> None:
        self.deadline = deadline
        self.seq = seq
        self.callback = callback
        self.token = token
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        if self._cancelled:
            return True
        return self.token is not None and self.token.cancelled

    def __lt__(self, other: "ScheduledCall") -> bool:
        return (self.deadline, self.seq) < (other.deadline, other.seq)


class Timeline:
    """
    Deadline-ordered queue of ScheduledCall.

    Equal deadlines run in scheduling order.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.clock = clock
        self._queue: List[ScheduledCall] = []
        self._seq = itertools.count()

    # ------------------------------------------------------------
    # scheduling
    # ------------------------------------------------------------
    def call_later(
        self,
        delay: float,
        callback: Callable[[], None],
        token: Optional[CancelToken] = None,
    ) -> ScheduledCall:
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        call = ScheduledCall(self.clock() + delay, next(self._seq), callback, token)
        heapq.heappush(self._queue, call)
        return call

    # ------------------------------------------------------------
    # running
    # ------------------------------------------------------------
    def run_due(self) -> int:
        """
        Run every live callback whose deadline is <= now.

        Callbacks scheduled while running are picked up in the same pass
        if they are already due (e.g. zero delays). Returns how many ran.
        """
        ran = 0
        while self._queue and self._queue[0].deadline <= self.clock():
            call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            call.callback()
            ran += 1
        return ran

    def advance(self, seconds: float) -> int:
        """Move a ManualClock forward and run what became due."""
        if not isinstance(self.clock, ManualClock):
            raise TypeError("advance() needs a ManualClock")
        self.clock.advance(seconds)
        return self.run_due()

    # ------------------------------------------------------------
    # inspection
    # ------------------------------------------------------------
    def _drop_cancelled_head(self) -> None:
        while self._queue and self._queue[0].cancelled:
            heapq.heappop(self._queue)

    def pending(self) -> int:
        return sum(1 for c in self._queue if not c.cancelled)

    def next_deadline(self) -> Optional[float]:
        self._drop_cancelled_head()
        if not self._queue:
            return None
        return self._queue[0].deadline

    def seconds_until_next(self) -> Optional[float]:
        deadline = self.next_deadline()
        if deadline is None:
            return None
        return max(deadline - self.clock(), 0.0)
