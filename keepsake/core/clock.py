# keepsake/core/clock.py
from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, List


TimerCallback = Callable[[], None]


@dataclass(order=True)
class TimerHandle:
    """
    One pending callback on a TimerQueue.

    due_ms:   absolute clock time (ms) at which the callback fires.
    seq:      insertion counter, breaks ties so equal due times keep order.
    """
    due_ms: float
    seq: int
    callback: TimerCallback = field(compare=False)
    cancelled: bool = field(default=False, compare=False)
    fired: bool = field(default=False, compare=False)

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


class TimerQueue:
    """
    Cooperative, single-threaded timer primitive.

    The whole story runs on one logical timeline:
      - schedule(delay_ms, cb) queues a callback
      - cancel(handle) drops it (idempotent)
      - update(dt_ms) advances the clock and fires whatever fell due

    While a callback runs, now_ms is pinned to that callback's due time,
    so anything it schedules is measured from the exact due time rather
    than from the end of the frame.
    """

    def __init__(self) -> None:
        self.now_ms: float = 0.0
        self._heap: List[TimerHandle] = []
        self._seq = itertools.count()

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------
    def schedule(self, delay_ms: float, callback: TimerCallback) -> TimerHandle:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0 (got {delay_ms!r})")
        handle = TimerHandle(
            due_ms=self.now_ms + float(delay_ms),
            seq=next(self._seq),
            callback=callback,
        )
        heapq.heappush(self._heap, handle)
        return handle

    def cancel(self, handle: TimerHandle | None) -> None:
        if handle is None:
            return
        handle.cancelled = True

    def clear(self) -> None:
        for handle in self._heap:
            handle.cancelled = True
        self._heap.clear()

    def pending(self) -> int:
        return sum(1 for h in self._heap if h.active)

    # ------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------
    def update(self, dt_ms: float) -> int:
        """Advance by dt_ms, firing due callbacks in order. Returns count fired."""
        if dt_ms < 0:
            raise ValueError(f"dt_ms must be >= 0 (got {dt_ms!r})")

        target = self.now_ms + float(dt_ms)
        fired = 0

        while self._heap and self._heap[0].due_ms <= target:
            handle = heapq.heappop(self._heap)
            if handle.cancelled:
                continue
            self.now_ms = handle.due_ms
            handle.fired = True
            handle.callback()
            fired += 1

        self.now_ms = target
        return fired
