# keepsake/choreo/assembly.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from keepsake.core.clock import TimerHandle, TimerQueue


Offset = Tuple[int, int]
TickFunc = Callable[[int], None]
DoneFunc = Callable[[], None]


@dataclass(frozen=True)
class AssemblyElement:
    """
    One discrete unit placed during an assembly animation.

    placement_key:  stable authoring key ("block7").
    shape:          cell offsets (dx, dy) relative to the anchor.
    anchor_offset:  where the element's anchor sits on the layout grid.
    """
    placement_key: str
    shape: Tuple[Offset, ...]
    anchor_offset: Offset

    def cells(self) -> Iterator[Offset]:
        """
        Grid cells covered by this element, y pointing up.

        Shape offsets are authored mirrored on x and flipped on y relative
        to the anchor, which is how the layout tables were tuned.
        """
        ax, ay = self.anchor_offset
        for dx, dy in self.shape:
            yield (ax - dx, ay + dy)


AssemblyTable = Tuple[AssemblyElement, ...]


def build_table(
    shapes: Sequence[Tuple[str, Sequence[Offset]]],
    anchors: dict,
) -> AssemblyTable:
    """
    Zip a (key, shape) list with a key -> anchor mapping into a table.

    Order comes from `shapes`; every key must have an anchor.
    """
    table: List[AssemblyElement] = []
    for key, shape in shapes:
        if key not in anchors:
            raise KeyError(f"No anchor offset for assembly element {key!r}")
        ax, ay = anchors[key]
        table.append(
            AssemblyElement(
                placement_key=key,
                shape=tuple((int(dx), int(dy)) for dx, dy in shape),
                anchor_offset=(int(ax), int(ay)),
            )
        )
    extra = set(anchors) - {key for key, _ in shapes}
    if extra:
        raise KeyError(f"Anchor offsets without a shape: {sorted(extra)}")
    return tuple(table)


@dataclass
class AssemblyProgress:
    """Ordered prefix of a table; grows by one, never shrinks."""

    table: AssemblyTable
    count: int = 0

    @property
    def placed(self) -> AssemblyTable:
        return self.table[: self.count]

    @property
    def is_complete(self) -> bool:
        return self.count >= len(self.table)

    def advance(self) -> AssemblyElement:
        if self.is_complete:
            raise RuntimeError("AssemblyProgress is already complete")
        element = self.table[self.count]
        self.count += 1
        return element


class AssemblyAnimator:
    """
    Places a table's elements one per tick, then signals completion.

      anim = AssemblyAnimator(clock)
      anim.run(table, tick_ms=300, start_delay_ms=0,
               on_tick=lambda n: ..., on_done=lambda: ...)

    First element lands at start_delay_ms, the rest every tick_ms after.
    on_done fires on the same clock instant as the final tick.
    """

    def __init__(self, clock: TimerQueue, *, name: str = "") -> None:
        self.clock = clock
        self.name = name

        self.progress: Optional[AssemblyProgress] = None
        self.tick_ms: int = 0

        self._on_tick: Optional[TickFunc] = None
        self._on_done: Optional[DoneFunc] = None
        self._handle: Optional[TimerHandle] = None

        self._started = False
        self._done = False
        self._cancelled = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def placed(self) -> AssemblyTable:
        return self.progress.placed if self.progress else ()

    @property
    def is_running(self) -> bool:
        return self._started and not (self._done or self._cancelled)

    @property
    def is_done(self) -> bool:
        return self._done

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------
    def run(
        self,
        table: AssemblyTable,
        tick_ms: int,
        start_delay_ms: int,
        on_tick: Optional[TickFunc] = None,
        on_done: Optional[DoneFunc] = None,
    ) -> None:
        if self._started:
            raise RuntimeError(f"AssemblyAnimator {self.name!r} already running")
        if tick_ms <= 0:
            raise ValueError(f"tick_ms must be > 0 (got {tick_ms!r})")

        self._started = True
        self.progress = AssemblyProgress(tuple(table))
        self.tick_ms = int(tick_ms)
        self._on_tick = on_tick
        self._on_done = on_done
        self._handle = self.clock.schedule(start_delay_ms, self._tick)

    def cancel(self) -> None:
        if self._cancelled or self._done:
            return
        self._cancelled = True
        self.clock.cancel(self._handle)
        self._handle = None

    # ------------------------------------------------------------------
    # Timer callback
    # ------------------------------------------------------------------
    def _tick(self) -> None:
        self._handle = None
        if self._cancelled or self._done:
            return

        assert self.progress is not None
        progress = self.progress

        if not progress.is_complete:
            progress.advance()
            if self._on_tick is not None:
                self._on_tick(progress.count)
            if self._cancelled:
                return

        if progress.is_complete:
            self._done = True
            if self._on_done is not None:
                self._on_done()
            return

        self._handle = self.clock.schedule(self.tick_ms, self._tick)
