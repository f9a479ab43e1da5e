"""Timer abstraction used by animation instances.

``VirtualScheduler`` runs on a virtual millisecond clock so timing can be
stepped deterministically; ``AsyncioScheduler`` schedules on a real event
loop.
"""
from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from typing import Callable, List, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def schedule(self, delay_ms: float, callback: Callback) -> TimerHandle: ...

    def now(self) -> float: ...


class VirtualTimer:
    def __init__(self, due: float, callback: Callback) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class VirtualScheduler:
    """Callbacks fire in due order; ties fire in scheduling order."""

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: List[Tuple[float, int, VirtualTimer]] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def schedule(self, delay_ms: float, callback: Callback) -> VirtualTimer:
        timer = VirtualTimer(self._now + max(0.0, float(delay_ms)), callback)
        heapq.heappush(self._queue, (timer.due, next(self._seq), timer))
        return timer

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def _pop_due(self, until: float) -> Optional[VirtualTimer]:
        while self._queue and self._queue[0][0] <= until:
            _, _, timer = heapq.heappop(self._queue)
            if not timer.cancelled:
                return timer
        return None

    def advance(self, ms: float) -> int:
        """Move the clock forward ``ms`` and fire everything that comes due. Returns fired count."""
        target = self._now + ms
        fired = 0
        while True:
            timer = self._pop_due(target)
            if timer is None:
                break
            self._now = timer.due
            timer.callback()
            fired += 1
        self._now = target
        return fired

    def run_until_idle(self, limit: int = 100_000) -> int:
        """Fire timers until none remain; ``limit`` guards against endless loops."""
        fired = 0
        while fired < limit:
            while self._queue and self._queue[0][2].cancelled:
                heapq.heappop(self._queue)
            if not self._queue:
                break
            _, _, timer = heapq.heappop(self._queue)
            self._now = timer.due
            timer.callback()
            fired += 1
        return fired


class AsyncioScheduler:
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def now(self) -> float:
        return self.loop.time() * 1000.0

    def schedule(self, delay_ms: float, callback: Callback) -> asyncio.TimerHandle:
        return self.loop.call_later(max(0.0, float(delay_ms)) / 1000.0, callback)
