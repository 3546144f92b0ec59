# keepsake/choreo/composite.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol

from keepsake.core.clock import TimerHandle, TimerQueue
from keepsake.choreo.phases import PhaseSequence, PhaseSequencer
from keepsake.choreo.assembly import AssemblyAnimator, AssemblyTable
from giftroom.debug.debug_logger import log as story_log


class Cancellable(Protocol):
    def cancel(self) -> None: ...


@dataclass(frozen=True)
class AssemblyPlan:
    """Assembly stage of a choreography. lead_in_ms waits after the previous stage."""
    table: AssemblyTable
    tick_ms: int
    lead_in_ms: int = 0


@dataclass(frozen=True)
class ChoreographyPlan:
    """
    Declarative scene choreography.

    phases          staged beats, run first (optional)
    assembly        constructive animation, run after phases (optional)
    entry_delay_ms  wait before the assembly when there are no phases
    outro           beats run after the assembly, before the reveal
    """
    phases: Optional[PhaseSequence] = None
    assembly: Optional[AssemblyPlan] = None
    entry_delay_ms: int = 0
    outro: Optional[PhaseSequence] = None

    def __post_init__(self) -> None:
        if self.outro is not None and self.assembly is None:
            raise ValueError("ChoreographyPlan.outro requires an assembly stage")
        if self.entry_delay_ms < 0:
            raise ValueError(f"entry_delay_ms must be >= 0 (got {self.entry_delay_ms!r})")


class Choreography:
    """
    Runs a ChoreographyPlan strictly in sequence:

        phases -> (lead-in) -> assembly -> outro -> reveal

    The reveal callback is the only thing that makes a scene's
    "continue" control available. It fires exactly once, and never
    after cancel().
    """

    STAGE_IDLE = "idle"
    STAGE_ENTRY = "entry"
    STAGE_PHASES = "phases"
    STAGE_ASSEMBLY = "assembly"
    STAGE_OUTRO = "outro"
    STAGE_REVEALED = "revealed"
    STAGE_CANCELLED = "cancelled"

    def __init__(
        self,
        clock: TimerQueue,
        plan: ChoreographyPlan,
        *,
        on_reveal: Callable[[], None],
        on_phase: Optional[Callable[[str, int], None]] = None,
        on_tick: Optional[Callable[[int], None]] = None,
        name: str = "",
    ) -> None:
        self.clock = clock
        self.plan = plan
        self.name = name

        self._on_reveal = on_reveal
        self._on_phase = on_phase
        self._on_tick = on_tick

        self.stage = self.STAGE_IDLE
        self.phases = PhaseSequencer(clock, name=f"{name}.phases")
        self.assembly = AssemblyAnimator(clock, name=f"{name}.assembly")
        self.outro = PhaseSequencer(clock, name=f"{name}.outro")
        self._reveal_handle: Optional[TimerHandle] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def revealed(self) -> bool:
        return self.stage == self.STAGE_REVEALED

    @property
    def cancelled(self) -> bool:
        return self.stage == self.STAGE_CANCELLED

    @property
    def placed_count(self) -> int:
        return len(self.assembly.placed)

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------
    def start(self) -> None:
        if self.stage != self.STAGE_IDLE:
            raise RuntimeError(f"Choreography {self.name!r} already started")

        plan = self.plan
        if plan.phases is not None:
            self.stage = self.STAGE_PHASES
            self.phases.start(
                plan.phases,
                on_advance=self._phase_advanced,
                on_complete=self._phases_complete,
            )
        elif plan.assembly is not None:
            self._start_assembly(plan.entry_delay_ms)
        else:
            self.stage = self.STAGE_ENTRY
            self._reveal_handle = self.clock.schedule(plan.entry_delay_ms, self._reveal)

    def cancel(self) -> None:
        """Stop every stage. After a reveal this only drops trailing timers."""
        if self.stage not in (self.STAGE_REVEALED, self.STAGE_CANCELLED):
            self.stage = self.STAGE_CANCELLED
            story_log("choreo", f"{self.name}: cancelled")
        children: List[Cancellable] = [self.phases, self.assembly, self.outro]
        for child in children:
            child.cancel()
        self.clock.cancel(self._reveal_handle)
        self._reveal_handle = None

    # ------------------------------------------------------------------
    # Stage transitions
    # ------------------------------------------------------------------
    def _phase_advanced(self, index: int) -> None:
        sequence = self.plan.phases
        assert sequence is not None
        phase = sequence.phases[index]
        story_log("choreo", f"{self.name}: phase {index} {phase.key!r} @ {self.clock.now_ms:.0f}ms")
        if self._on_phase is not None:
            self._on_phase(phase.key, index)
        if self.stage != self.STAGE_PHASES:
            return
        # Phase-only plans reveal on the final beat, not after its duration.
        if self.plan.assembly is None and index == len(sequence) - 1:
            self._reveal()

    def _phases_complete(self) -> None:
        if self.stage != self.STAGE_PHASES:
            return
        if self.plan.assembly is not None:
            self._start_assembly(0)
        else:
            # Only reachable for an empty phase list.
            self._reveal()

    def _start_assembly(self, delay_ms: int) -> None:
        plan = self.plan.assembly
        assert plan is not None
        self.stage = self.STAGE_ASSEMBLY
        self.assembly.run(
            plan.table,
            tick_ms=plan.tick_ms,
            start_delay_ms=delay_ms + plan.lead_in_ms,
            on_tick=self._assembly_tick,
            on_done=self._assembly_done,
        )

    def _assembly_tick(self, count: int) -> None:
        if self._on_tick is not None:
            self._on_tick(count)

    def _assembly_done(self) -> None:
        if self.stage != self.STAGE_ASSEMBLY:
            return
        story_log("choreo", f"{self.name}: assembly done @ {self.clock.now_ms:.0f}ms")
        if self.plan.outro is None:
            self._reveal()
            return
        self.stage = self.STAGE_OUTRO
        self.outro.start(
            self.plan.outro,
            on_advance=self._outro_advanced,
            on_complete=self._reveal,
        )

    def _outro_advanced(self, index: int) -> None:
        outro = self.plan.outro
        assert outro is not None
        if self._on_phase is not None:
            self._on_phase(outro.phases[index].key, index)

    def _reveal(self) -> None:
        self._reveal_handle = None
        if self.stage in (self.STAGE_REVEALED, self.STAGE_CANCELLED):
            return
        self.stage = self.STAGE_REVEALED
        story_log("choreo", f"{self.name}: reveal @ {self.clock.now_ms:.0f}ms")
        self._on_reveal()
