"""Tests for assembly tables and the assembly animator."""

import pytest

from keepsake.choreo.assembly import (
    AssemblyAnimator,
    AssemblyElement,
    AssemblyProgress,
    build_table,
)
from giftroom.layouts.heart import HEART_ANCHORS, HEART_TABLE


def _table(n):
    return build_table(
        [(f"b{i}", [(0, 0)]) for i in range(n)],
        {f"b{i}": (i, 0) for i in range(n)},
    )


class TestAssemblyTable:
    """Layout tables and element geometry."""

    def test_heart_table_has_23_blocks_in_order(self):
        """The heart layout is 23 blocks, block1 first."""
        assert len(HEART_TABLE) == 23
        assert [e.placement_key for e in HEART_TABLE] == [f"block{i}" for i in range(1, 24)]

    def test_heart_blocks_are_four_cells(self):
        """Every heart block covers four cells."""
        assert all(len(e.shape) == 4 for e in HEART_TABLE)

    def test_cells_mirror_x_and_keep_y(self):
        """Cells resolve as (ax - dx, ay + dy)."""
        element = AssemblyElement("k", ((1, 2), (-1, 0)), (5, 3))
        assert list(element.cells()) == [(4, 5), (6, 3)]

    def test_anchors_come_from_mapping(self):
        """build_table pairs each shape with its anchor."""
        first = HEART_TABLE[0]
        assert first.anchor_offset == HEART_ANCHORS["block1"]

    def test_missing_anchor_rejected(self):
        """A shape without an anchor is an authoring error."""
        with pytest.raises(KeyError):
            build_table([("a", [(0, 0)])], {})

    def test_extra_anchor_rejected(self):
        """An anchor without a shape is an authoring error."""
        with pytest.raises(KeyError):
            build_table([("a", [(0, 0)])], {"a": (0, 0), "b": (1, 1)})


class TestAssemblyProgress:
    """Monotonic prefix of a table."""

    def test_grows_by_one(self):
        """advance() appends the next element in table order."""
        table = _table(3)
        progress = AssemblyProgress(table)
        assert progress.advance() is table[0]
        assert progress.placed == table[:1]

    def test_complete_is_terminal(self):
        """Advancing past the end is refused."""
        progress = AssemblyProgress(_table(1))
        progress.advance()
        assert progress.is_complete
        with pytest.raises(RuntimeError):
            progress.advance()


class TestAssemblyAnimator:
    """Timed placement, completion and cancellation."""

    def test_ticks_at_start_delay_then_interval(self, clock):
        """First element at start_delay, then one every tick_ms."""
        ticks = []
        anim = AssemblyAnimator(clock)
        anim.run(_table(3), tick_ms=300, start_delay_ms=1000, on_tick=lambda n: ticks.append((n, clock.now_ms)))

        clock.update(5000)
        assert ticks == [(1, 1000), (2, 1300), (3, 1600)]

    def test_done_once_with_final_tick(self, clock):
        """on_done fires exactly once, on the instant of the last tick."""
        done = []
        anim = AssemblyAnimator(clock)
        anim.run(_table(4), tick_ms=100, start_delay_ms=0, on_done=lambda: done.append(clock.now_ms))

        clock.update(10_000)
        assert done == [300]
        assert anim.is_done
        assert clock.pending() == 0

    def test_empty_table_done_after_delay(self, clock):
        """No elements: no ticks, done after the start delay."""
        ticks, done = [], []
        anim = AssemblyAnimator(clock)
        anim.run((), tick_ms=100, start_delay_ms=250, on_tick=ticks.append, on_done=lambda: done.append(clock.now_ms))

        clock.update(1000)
        assert ticks == []
        assert done == [250]

    def test_cancel_keeps_delivered_progress(self, clock):
        """Cancelling stops future ticks; placed elements stay placed."""
        ticks, done = [], []
        anim = AssemblyAnimator(clock)
        anim.run(HEART_TABLE, tick_ms=300, start_delay_ms=0, on_tick=ticks.append, on_done=lambda: done.append(1))

        clock.update(650)
        anim.cancel()
        clock.update(60_000)

        assert ticks == [1, 2, 3]
        assert len(anim.placed) == 3
        assert done == []
        assert anim.is_cancelled

    def test_progress_is_monotonic(self, clock):
        """Reported prefix lengths strictly increase by one."""
        ticks = []
        anim = AssemblyAnimator(clock)
        anim.run(HEART_TABLE, tick_ms=300, start_delay_ms=0, on_tick=ticks.append)

        for _ in range(100):
            clock.update(97)
        assert ticks == list(range(1, 24))

    def test_rejects_non_positive_tick(self, clock):
        """tick_ms must be positive."""
        with pytest.raises(ValueError):
            AssemblyAnimator(clock).run(_table(1), tick_ms=0, start_delay_ms=0)

    def test_double_run_rejected(self, clock):
        """An animator runs one table in its lifetime."""
        anim = AssemblyAnimator(clock)
        anim.run(_table(1), tick_ms=10, start_delay_ms=0)
        with pytest.raises(RuntimeError):
            anim.run(_table(1), tick_ms=10, start_delay_ms=0)
