"""Timed ``In queue -> Active -> Completed`` transitions.

Dispatch is simulated: a queued mission becomes active after a fixed delay
and an active one completes after another.  Timers are keyed by mission id
and re-check the stored mission when they fire, so a timer that outlived its
mission (cancelled, or already advanced) does nothing.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ..core.models import Mission, MissionStatus

if TYPE_CHECKING:  # pragma: no cover
    from ..board import MissionBoard

log = logging.getLogger(__name__)


class Clock(ABC):
    """Schedules callbacks after a delay in milliseconds."""

    @abstractmethod
    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> Any:
        """Run ``callback`` after ``delay_ms`` and return a cancel token."""

    @abstractmethod
    def cancel(self, token: Any) -> None:
        """Forget the callback behind ``token``; unknown tokens are ignored."""


class ManualClock(Clock):
    """Clock that only moves when :meth:`advance` is called."""

    def __init__(self) -> None:
        self.now_ms = 0
        self._queue: list[tuple[int, int, Callable[[], None]]] = []
        self._cancelled: set[int] = set()
        self._seq = itertools.count()

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> int:
        token = next(self._seq)
        heapq.heappush(self._queue, (self.now_ms + delay_ms, token, callback))
        return token

    def cancel(self, token: Any) -> None:
        self._cancelled.add(token)

    @property
    def pending(self) -> int:
        return sum(1 for _, token, _ in self._queue if token not in self._cancelled)

    def advance(self, delta_ms: int) -> None:
        """Move time forward, firing due callbacks in order.

        Callbacks scheduled while advancing run in the same call if they fall
        due before the new time.
        """
        target = self.now_ms + delta_ms
        while self._queue and self._queue[0][0] <= target:
            due, token, callback = heapq.heappop(self._queue)
            self.now_ms = due
            if token in self._cancelled:
                self._cancelled.discard(token)
                continue
            callback()
        self.now_ms = target


class AsyncioClock(Clock):
    """Clock backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self.loop = loop or asyncio.get_running_loop()

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay_ms / 1000.0, callback)

    def cancel(self, token: Any) -> None:
        if isinstance(token, asyncio.TimerHandle):
            token.cancel()


class AutoAdvancer:
    """Keeps one timer per queued or active mission."""

    def __init__(
        self,
        board: MissionBoard,
        clock: Clock,
        queue_delay_ms: int = 5000,
        active_delay_ms: int = 10000,
    ) -> None:
        self.board = board
        self.clock = clock
        self.delays = {
            MissionStatus.IN_QUEUE: queue_delay_ms,
            MissionStatus.ACTIVE: active_delay_ms,
        }
        self._tokens: dict[int, Any] = {}

    def watch(self, mission: Mission) -> None:
        """(Re)arm the timer for ``mission`` according to its status."""
        self.forget(mission.id)
        delay = self.delays.get(mission.status)
        if delay is None:
            return
        expected = mission.status
        self._tokens[mission.id] = self.clock.schedule(
            delay, lambda: self._fire(mission.id, expected)
        )

    def forget(self, mission_id: int) -> None:
        token = self._tokens.pop(mission_id, None)
        if token is not None:
            self.clock.cancel(token)

    def resume(self, missions: list[Mission]) -> int:
        """Arm timers for every queued or active mission; return how many."""
        armed = 0
        for mission in missions:
            if mission.status in self.delays:
                self.watch(mission)
                armed += 1
        return armed

    def is_watching(self, mission_id: int) -> bool:
        return mission_id in self._tokens

    def _fire(self, mission_id: int, expected: MissionStatus) -> None:
        self._tokens.pop(mission_id, None)
        updated = self.board.advance(mission_id, expected)
        if updated is None:
            log.debug("Stale timer for mission %s (expected %s)", mission_id, expected.value)
            return
        self.watch(updated)
