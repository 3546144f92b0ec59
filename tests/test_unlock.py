"""Tests for the unlock tracker."""

import pytest

from keepsake.story.state import GiftId, UnlockTracker


FIVE = (GiftId.BOUQUET, GiftId.MEMORIES, GiftId.PROMISE, GiftId.TIMELINE, GiftId.PATH)


class TestUnlockTracker:
    """Monotonic flags and the gate predicate."""

    def test_starts_closed(self):
        """All flags start false."""
        tracker = UnlockTracker(FIVE)
        assert not tracker.all_opened()
        assert tracker.opened() == frozenset()
        assert tracker.remaining() == FIVE

    def test_mark_opened_is_idempotent(self):
        """Only the first mark reports a change."""
        tracker = UnlockTracker(FIVE)
        assert tracker.mark_opened(GiftId.BOUQUET) is True
        assert tracker.mark_opened(GiftId.BOUQUET) is False
        assert tracker.is_opened(GiftId.BOUQUET)

    def test_all_opened_needs_every_flag(self):
        """The gate opens only when every required flag is set."""
        tracker = UnlockTracker(FIVE)
        for gift in FIVE[:-1]:
            tracker.mark_opened(gift)
            assert not tracker.all_opened()
        tracker.mark_opened(FIVE[-1])
        assert tracker.all_opened()

    def test_order_does_not_matter(self):
        """Any opening order reaches the same state."""
        a, b = UnlockTracker(FIVE), UnlockTracker(FIVE)
        for gift in FIVE:
            a.mark_opened(gift)
        for gift in reversed(FIVE):
            b.mark_opened(gift)
        assert a.opened() == b.opened()
        assert a.all_opened() and b.all_opened()

    def test_required_subset(self):
        """A configured subset gates independently of the other flags."""
        tracker = UnlockTracker(FIVE, required=(GiftId.BOUQUET, GiftId.PATH))
        tracker.mark_opened(GiftId.BOUQUET)
        tracker.mark_opened(GiftId.PATH)
        assert tracker.all_opened()
        assert not tracker.is_opened(GiftId.MEMORIES)

    def test_empty_required_means_all(self):
        """An empty requirement falls back to every gift."""
        tracker = UnlockTracker(FIVE, required=())
        assert tracker.required == FIVE

    def test_unknown_gift_fails_fast(self):
        """Ids outside the configured set raise KeyError."""
        tracker = UnlockTracker(FIVE)
        with pytest.raises(KeyError, match="bouquet"):
            tracker.mark_opened(GiftId.FAMILY)
        with pytest.raises(KeyError):
            tracker.is_opened(GiftId.STORY)

    def test_required_outside_set_rejected(self):
        """The gated subset must come from the gift set."""
        with pytest.raises(KeyError):
            UnlockTracker(FIVE, required=(GiftId.FAMILY,))

    def test_empty_gift_set_rejected(self):
        """A tracker with nothing to track is a configuration error."""
        with pytest.raises(ValueError):
            UnlockTracker(())

    def test_debug_snapshot_prints_flags(self, monkeypatch, capsys):
        """debug() dumps the flags on the gift channel."""
        from giftroom.debug import debug_logger

        monkeypatch.setattr(debug_logger, "DEBUG_ENABLED", True)
        debug_logger.enable_categories("gift")
        tracker = UnlockTracker(FIVE)
        tracker.mark_opened(GiftId.PROMISE)
        tracker.debug()

        out = capsys.readouterr().out
        assert "[STORY GIFT]" in out
        assert "[x]* promise" in out
        assert "gate=closed" in out
