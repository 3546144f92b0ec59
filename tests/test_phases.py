"""Tests for phase sequences and the phase sequencer."""

import pytest

from keepsake.choreo.phases import Phase, PhaseSequence, PhaseSequencer


def _journey():
    return PhaseSequence.build([("journey", 3000), ("arrival", 3000), ("memory", 1000)])


class TestPhaseSequence:
    """Phase table construction and queries."""

    def test_build_assigns_indices(self):
        """build() numbers phases in order."""
        seq = _journey()
        assert [p.index for p in seq.phases] == [0, 1, 2]
        assert seq.keys == ("journey", "arrival", "memory")

    def test_build_carries_on_enter(self):
        """A third tuple item becomes the phase's effect cue."""
        seq = PhaseSequence.build([("hearts", 100, "confetti")])
        assert seq.phases[0].on_enter == "confetti"

    def test_offsets_are_cumulative(self):
        """Each phase starts after every earlier phase's duration."""
        seq = PhaseSequence.build([("a", 100), ("b", 200), ("c", 300)], initial_delay_ms=50)
        assert seq.offsets() == (50, 150, 350)
        assert seq.total_ms == 650

    def test_index_of_unknown_key(self):
        """Unknown keys raise KeyError listing the known keys."""
        with pytest.raises(KeyError, match="journey"):
            _journey().index_of("nope")

    def test_rejects_out_of_order_index(self):
        """Phase indices must match their position."""
        with pytest.raises(ValueError):
            PhaseSequence((Phase(1, "a", 100),))

    def test_rejects_negative_duration(self):
        """Durations are non-negative."""
        with pytest.raises(ValueError):
            PhaseSequence.build([("a", -1)])

    def test_rejects_negative_initial_delay(self):
        """The lead-in delay is non-negative."""
        with pytest.raises(ValueError):
            PhaseSequence.build([("a", 1)], initial_delay_ms=-10)


class TestPhaseSequencer:
    """Auto-advance, completion and cancellation."""

    def test_advances_at_cumulative_offsets(self, clock):
        """onAdvance(i) fires at the sum of earlier durations."""
        seen = []
        seq = PhaseSequencer(clock)
        seq.start(_journey(), on_advance=lambda i: seen.append((i, clock.now_ms)))

        clock.update(10_000)
        assert seen == [(0, 0), (1, 3000), (2, 6000)]

    def test_initial_delay_postpones_first_advance(self, clock):
        """Phase 0 waits for the configured initial delay."""
        seen = []
        seq = PhaseSequencer(clock)
        seq.start(
            PhaseSequence.build([("a", 100)], initial_delay_ms=500),
            on_advance=lambda i: seen.append(clock.now_ms),
        )
        clock.update(499)
        assert seen == []
        clock.update(1)
        assert seen == [500]

    def test_completes_once_after_last_duration(self, clock):
        """onComplete fires exactly once, after the final phase's duration."""
        done = []
        seq = PhaseSequencer(clock)
        seq.start(_journey(), on_advance=lambda i: None, on_complete=lambda: done.append(clock.now_ms))

        clock.update(6999)
        assert done == []
        clock.update(10_000)
        assert done == [7000]
        assert seq.is_finished
        assert not seq.is_running

    def test_current_phase_tracks_advances(self, clock):
        """current_key follows the most recent advance."""
        seq = PhaseSequencer(clock)
        seq.start(_journey(), on_advance=lambda i: None)
        assert seq.current_key is None

        clock.update(0)
        assert seq.current_key == "journey"
        clock.update(3000)
        assert seq.current_key == "arrival"

    def test_cancel_stops_future_advances(self, clock):
        """Nothing fires after cancel() returns."""
        seen, done = [], []
        seq = PhaseSequencer(clock)
        seq.start(_journey(), on_advance=seen.append, on_complete=lambda: done.append(1))

        clock.update(3500)
        seq.cancel()
        clock.update(10_000)

        assert seen == [0, 1]
        assert done == []
        assert seq.is_cancelled
        assert clock.pending() == 0

    def test_cancel_from_inside_advance(self, clock):
        """A callback that cancels its own sequencer stops it on the spot."""
        seen = []
        seq = PhaseSequencer(clock)

        def on_advance(i):
            seen.append(i)
            if i == 1:
                seq.cancel()

        seq.start(_journey(), on_advance=on_advance)
        clock.update(10_000)
        assert seen == [0, 1]

    def test_cancel_after_complete_is_noop(self, clock):
        """Cancelling a finished sequencer is safe and changes nothing."""
        seq = PhaseSequencer(clock)
        seq.start(_journey(), on_advance=lambda i: None)
        clock.update(10_000)

        seq.cancel()
        assert seq.is_finished
        assert not seq.is_cancelled

    def test_double_start_rejected(self, clock):
        """A sequencer runs one sequence in its lifetime."""
        seq = PhaseSequencer(clock, name="twice")
        seq.start(_journey(), on_advance=lambda i: None)
        with pytest.raises(RuntimeError, match="twice"):
            seq.start(_journey(), on_advance=lambda i: None)

    def test_empty_sequence_completes_after_delay(self, clock):
        """No phases: no advances, completion after the initial delay."""
        seen, done = [], []
        seq = PhaseSequencer(clock)
        seq.start(PhaseSequence((), initial_delay_ms=200), on_advance=seen.append, on_complete=lambda: done.append(clock.now_ms))

        clock.update(1000)
        assert seen == []
        assert done == [200]

    def test_no_phase_skipped_with_large_step(self, clock):
        """One big update still delivers every advance in order."""
        seen = []
        seq = PhaseSequencer(clock)
        seq.start(PhaseSequence.build([(str(i), 10) for i in range(20)]), on_advance=seen.append)

        clock.update(1_000_000)
        assert seen == list(range(20))
