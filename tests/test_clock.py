"""Tests for the logical timer queue."""

import pytest

from keepsake.core.clock import TimerQueue


class TestSchedule:
    """Scheduling and firing order."""

    def test_fires_when_due(self, clock):
        """A callback fires once the clock reaches its due time, not before."""
        fired = []
        clock.schedule(100, lambda: fired.append(clock.now_ms))

        clock.update(99)
        assert fired == []
        clock.update(1)
        assert fired == [100]

    def test_fires_in_due_order(self, clock):
        """Callbacks fire by due time regardless of scheduling order."""
        fired = []
        clock.schedule(300, lambda: fired.append("c"))
        clock.schedule(100, lambda: fired.append("a"))
        clock.schedule(200, lambda: fired.append("b"))

        assert clock.update(1000) == 3
        assert fired == ["a", "b", "c"]

    def test_equal_due_times_keep_insertion_order(self, clock):
        """Ties fire in the order they were scheduled."""
        fired = []
        for name in "xyz":
            clock.schedule(50, lambda n=name: fired.append(n))

        clock.update(50)
        assert fired == ["x", "y", "z"]

    def test_now_is_pinned_inside_callback(self, clock):
        """Timers scheduled from a callback are measured from its due time."""
        fired = []

        def first():
            clock.schedule(100, lambda: fired.append(clock.now_ms))

        clock.schedule(100, first)
        clock.update(250)
        assert fired == [200]
        assert clock.now_ms == 250

    def test_zero_delay_from_callback_fires_same_update(self, clock):
        """A zero-delay follow-up is due immediately and fires in the same update."""
        fired = []
        clock.schedule(10, lambda: clock.schedule(0, lambda: fired.append("follow-up")))

        clock.update(10)
        assert fired == ["follow-up"]

    def test_negative_delay_rejected(self, clock):
        """Negative delays are a programming error."""
        with pytest.raises(ValueError):
            clock.schedule(-1, lambda: None)

    def test_negative_dt_rejected(self, clock):
        """Time never runs backwards."""
        with pytest.raises(ValueError):
            clock.update(-5)

    def test_callback_errors_propagate(self, clock):
        """Exceptions from callbacks surface out of update()."""
        def boom():
            raise RuntimeError("boom")

        clock.schedule(0, boom)
        with pytest.raises(RuntimeError):
            clock.update(0)


class TestCancel:
    """Cancellation and bookkeeping."""

    def test_cancelled_timer_never_fires(self, clock):
        """cancel() drops a pending callback."""
        fired = []
        handle = clock.schedule(100, lambda: fired.append(1))
        clock.cancel(handle)

        clock.update(500)
        assert fired == []
        assert not handle.active

    def test_cancel_is_idempotent(self, clock):
        """Cancelling twice, or cancelling None, is harmless."""
        handle = clock.schedule(100, lambda: None)
        clock.cancel(handle)
        clock.cancel(handle)
        clock.cancel(None)
        assert clock.pending() == 0

    def test_pending_counts_active_timers(self, clock):
        """pending() ignores fired and cancelled timers."""
        a = clock.schedule(10, lambda: None)
        clock.schedule(20, lambda: None)
        clock.schedule(30, lambda: None)
        clock.cancel(a)
        clock.update(20)
        assert clock.pending() == 1

    def test_clear_drops_everything(self):
        """clear() cancels every pending timer."""
        clock = TimerQueue()
        handles = [clock.schedule(i, lambda: None) for i in range(5)]
        clock.clear()
        assert clock.pending() == 0
        assert all(h.cancelled for h in handles)
