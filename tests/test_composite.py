"""Tests for composite choreography: phases -> assembly -> outro -> reveal."""

import pytest

from keepsake.choreo.composite import AssemblyPlan, Choreography, ChoreographyPlan
from keepsake.choreo.phases import PhaseSequence
from giftroom.layouts.heart import HEART_TABLE
from giftroom.scenes.finale import heart_plan


def _run(clock, plan, **kw):
    revealed = []
    choreo = Choreography(clock, plan, on_reveal=lambda: revealed.append(clock.now_ms), **kw)
    choreo.start()
    return choreo, revealed


class TestChoreography:
    """Stage ordering and the single reveal."""

    def test_heart_plan_reveals_at_19700(self, clock):
        """Borders (10 s), 23 blocks, settle and rise: reveal at 19.7 s."""
        choreo, revealed = _run(clock, heart_plan())

        clock.update(19_699)
        assert revealed == []
        assert choreo.placed_count == 23
        clock.update(1)
        assert revealed == [19_700]
        assert choreo.revealed

    def test_assembly_waits_for_phases(self, clock):
        """No block is placed before the phases complete plus the lead-in."""
        ticks = []
        choreo, _ = _run(clock, heart_plan(), on_tick=lambda n: ticks.append(clock.now_ms))

        clock.update(10_299)
        assert ticks == []
        clock.update(1)
        assert ticks == [10_300]

    def test_phase_callbacks_cover_phases_and_outro(self, clock):
        """on_phase reports phase keys and then outro keys."""
        keys = []
        _run(clock, heart_plan(), on_phase=lambda key, i: keys.append(key))
        clock.update(30_000)
        assert keys == ["border", "border_accent", "settle", "rise"]

    def test_phase_only_reveals_at_final_advance(self, clock):
        """Without an assembly the reveal coincides with the last beat."""
        plan = ChoreographyPlan(phases=PhaseSequence.build([("journey", 3000), ("arrival", 3000), ("memory", 5000)]))
        _, revealed = _run(clock, plan)

        clock.update(20_000)
        assert revealed == [6000]

    def test_assembly_only_uses_entry_delay(self, clock):
        """Without phases the assembly starts after the scene-entry delay."""
        table = HEART_TABLE[:2]
        plan = ChoreographyPlan(assembly=AssemblyPlan(table, tick_ms=100), entry_delay_ms=500)
        _, revealed = _run(clock, plan)

        clock.update(5000)
        assert revealed == [600]

    def test_empty_plan_reveals_after_entry_delay(self, clock):
        """Nothing to run: the reveal is just the entry delay."""
        _, revealed = _run(clock, ChoreographyPlan(entry_delay_ms=250))
        clock.update(1000)
        assert revealed == [250]

    def test_cancel_mid_assembly_prevents_reveal(self, clock):
        """Cancelling leaves no pending timers and no later reveal."""
        choreo, revealed = _run(clock, heart_plan())

        clock.update(12_000)
        assert 0 < choreo.placed_count < 23
        choreo.cancel()

        assert clock.pending() == 0
        clock.update(60_000)
        assert revealed == []
        assert choreo.cancelled

    def test_cancel_after_reveal_keeps_revealed(self, clock):
        """A late cancel does not undo the reveal."""
        choreo, revealed = _run(clock, ChoreographyPlan(entry_delay_ms=0))
        clock.update(0)
        choreo.cancel()
        assert choreo.revealed
        assert revealed == [0]

    def test_double_start_rejected(self, clock):
        """A choreography runs once."""
        choreo, _ = _run(clock, ChoreographyPlan())
        with pytest.raises(RuntimeError):
            choreo.start()

    def test_empty_plan_start_twice_leaves_one_timer(self, clock):
        """A rejected restart schedules nothing; cancel clears the pending reveal."""
        choreo, revealed = _run(clock, ChoreographyPlan(entry_delay_ms=250))
        assert choreo.stage == Choreography.STAGE_ENTRY
        with pytest.raises(RuntimeError):
            choreo.start()
        assert clock.pending() == 1

        choreo.cancel()
        assert clock.pending() == 0
        clock.update(1000)
        assert revealed == []

    def test_outro_requires_assembly(self):
        """An outro only makes sense after an assembly."""
        with pytest.raises(ValueError):
            ChoreographyPlan(outro=PhaseSequence.build([("x", 1)]))
