"""
Schedulers for the delayed half of round resolution.

The round engine asks a scheduler to run a callback once after a delay and
keeps the returned handle so the call can be cancelled. Three schedulers are
provided:

- ThreadingScheduler: ``threading.Timer`` based, for plain scripts
- AsyncioScheduler: ``loop.call_later`` based, for the server
- ManualScheduler: a virtual clock advanced explicitly, for tests
"""

from __future__ import annotations
import asyncio
import heapq
import itertools
import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple


class ScheduledCall(ABC):
    """Handle for a pending callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        pass


class Scheduler(ABC):
    """Runs a callback once after a delay."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        """
        Schedule ``callback`` to run once after ``delay`` seconds.

        Args:
            delay: Delay in seconds (0 means as soon as possible)
            callback: Function taking no arguments

        Returns:
            Handle that can cancel the call
        """


class _TimerCall(ScheduledCall):
    def __init__(self, timer: threading.Timer):
        self._timer = timer
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True
        self._timer.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ThreadingScheduler(Scheduler):
    """Run callbacks on daemon ``threading.Timer`` threads."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return _TimerCall(timer)


class _AsyncioCall(ScheduledCall):
    def __init__(self, handle: asyncio.TimerHandle):
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()


class AsyncioScheduler(Scheduler):
    """
    Run callbacks on an asyncio event loop.

    The loop defaults to the running loop at scheduling time, so actions
    must be invoked from inside the loop unless a loop is given explicitly.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        loop = self._loop or asyncio.get_running_loop()
        return _AsyncioCall(loop.call_later(delay, callback))


class _ManualCall(ScheduledCall):
    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """
    A virtual clock. Nothing runs until ``advance`` or ``run_all`` is called.

    Usage:
        scheduler = ManualScheduler()
        engine = RoundEngine(scheduler=scheduler)
        engine.place_bet("rock")
        engine.complete_betting()
        scheduler.advance(2.0)  # resolution runs here
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: List[Tuple[float, int, _ManualCall, Callable[[], None]]] = []
        self._counter = itertools.count()

    @property
    def pending(self) -> int:
        """Number of scheduled calls that have not run or been cancelled."""
        return sum(1 for _, _, call, _ in self._queue if not call.cancelled)

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = _ManualCall()
        heapq.heappush(self._queue, (self.now + delay, next(self._counter), call, callback))
        return call

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward and run every call that became due.

        Returns:
            Number of callbacks run
        """
        target = self.now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, call, callback = heapq.heappop(self._queue)
            self.now = due
            if not call.cancelled:
                callback()
                ran += 1
        self.now = target
        return ran

    def run_all(self) -> int:
        """Run every pending call regardless of its due time."""
        if not self._queue:
            return 0
        latest = max(due for due, _, _, _ in self._queue)
        return self.advance(max(0.0, latest - self.now))
