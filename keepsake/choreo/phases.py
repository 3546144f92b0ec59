# keepsake/choreo/phases.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence, Tuple

from keepsake.core.clock import TimerHandle, TimerQueue


AdvanceFunc = Callable[[int], None]
CompleteFunc = Callable[[], None]


@dataclass(frozen=True)
class Phase:
    """
    One timed beat of a scripted sequence.

    index:        position in the owning PhaseSequence (0-based).
    key:          short name the scene switches on ("journey", "arrival").
    duration_ms:  how long this beat lasts before the next one starts.
    on_enter:     optional effect cue for the scene (e.g. "confetti").
    """
    index: int
    key: str
    duration_ms: int
    on_enter: Optional[str] = None


@dataclass(frozen=True)
class PhaseSequence:
    """An ordered, finite list of Phases plus an optional lead-in delay."""

    phases: Tuple[Phase, ...]
    initial_delay_ms: int = 0

    def __post_init__(self) -> None:
        if self.initial_delay_ms < 0:
            raise ValueError(f"initial_delay_ms must be >= 0 (got {self.initial_delay_ms!r})")
        for i, phase in enumerate(self.phases):
            if phase.index != i:
                raise ValueError(
                    f"Phase {phase.key!r} has index {phase.index}, expected {i}"
                )
            if phase.duration_ms < 0:
                raise ValueError(
                    f"Phase {phase.key!r} duration_ms must be >= 0 (got {phase.duration_ms!r})"
                )

    @classmethod
    def build(
        cls,
        steps: Iterable[Sequence],
        *,
        initial_delay_ms: int = 0,
    ) -> "PhaseSequence":
        """
        Build from (key, duration_ms) or (key, duration_ms, on_enter) tuples.

            PhaseSequence.build([("journey", 3000), ("arrival", 3000), ("memory", 0)])
        """
        phases = []
        for i, step in enumerate(steps):
            key, duration_ms, *rest = step
            on_enter = rest[0] if rest else None
            phases.append(Phase(i, str(key), int(duration_ms), on_enter))
        return cls(tuple(phases), initial_delay_ms=int(initial_delay_ms))

    def __len__(self) -> int:
        return len(self.phases)

    @property
    def keys(self) -> Tuple[str, ...]:
        return tuple(p.key for p in self.phases)

    @property
    def total_ms(self) -> int:
        return self.initial_delay_ms + sum(p.duration_ms for p in self.phases)

    def offsets(self) -> Tuple[int, ...]:
        """Start time of each phase, relative to start()."""
        out = []
        t = self.initial_delay_ms
        for phase in self.phases:
            out.append(t)
            t += phase.duration_ms
        return tuple(out)

    def index_of(self, key: str) -> int:
        for phase in self.phases:
            if phase.key == key:
                return phase.index
        known = ", ".join(self.keys)
        raise KeyError(f"Unknown phase key {key!r}. Known: {known}")


class PhaseSequencer:
    """
    Auto-advances through a PhaseSequence on a TimerQueue.

      seq = PhaseSequencer(clock)
      seq.start(sequence, on_advance=..., on_complete=...)
      ...
      seq.cancel()   # nothing fires after this returns

    Only one timer is ever pending: each advance schedules the next one
    from its own due time, so the offsets stay cumulative.
    """

    def __init__(self, clock: TimerQueue, *, name: str = "") -> None:
        self.clock = clock
        self.name = name

        self.sequence: Optional[PhaseSequence] = None
        self.current_index: int = -1

        self._on_advance: Optional[AdvanceFunc] = None
        self._on_complete: Optional[CompleteFunc] = None
        self._handle: Optional[TimerHandle] = None
        self._next_index = 0

        self._started = False
        self._finished = False
        self._cancelled = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self._started and not (self._finished or self._cancelled)

    @property
    def is_finished(self) -> bool:
        return self._finished

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    @property
    def current_phase(self) -> Optional[Phase]:
        if self.sequence is None or self.current_index < 0:
            return None
        return self.sequence.phases[self.current_index]

    @property
    def current_key(self) -> Optional[str]:
        phase = self.current_phase
        return phase.key if phase else None

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------
    def start(
        self,
        sequence: PhaseSequence,
        on_advance: AdvanceFunc,
        on_complete: Optional[CompleteFunc] = None,
    ) -> None:
        if self._started:
            raise RuntimeError(f"PhaseSequencer {self.name!r} already started")

        self._started = True
        self.sequence = sequence
        self._on_advance = on_advance
        self._on_complete = on_complete
        self._handle = self.clock.schedule(sequence.initial_delay_ms, self._step)

    def cancel(self) -> None:
        if self._cancelled or self._finished:
            return
        self._cancelled = True
        self.clock.cancel(self._handle)
        self._handle = None

    # ------------------------------------------------------------------
    # Timer callback
    # ------------------------------------------------------------------
    def _step(self) -> None:
        self._handle = None
        if self._cancelled or self._finished:
            return

        assert self.sequence is not None
        phases = self.sequence.phases
        idx = self._next_index

        if idx >= len(phases):
            self._finished = True
            if self._on_complete is not None:
                self._on_complete()
            return

        self.current_index = idx
        self._next_index = idx + 1
        if self._on_advance is not None:
            self._on_advance(idx)

        # on_advance may have cancelled us (e.g. the scene navigated away).
        if self._cancelled:
            return
        self._handle = self.clock.schedule(phases[idx].duration_ms, self._step)
