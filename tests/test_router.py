"""Tests for the story event router."""

from keepsake.router import EventRouter


class TestEventRouter:
    """Subscribe, emit, unsubscribe."""

    def test_emit_reaches_subscribers_in_order(self, router):
        """Handlers run in registration order with the payload."""
        seen = []
        router.subscribe("scene.changed", lambda t, p: seen.append(("a", p["current"])))
        router.subscribe("scene.changed", lambda t, p: seen.append(("b", p["current"])))

        router.emit("scene.changed", previous="intro", current="door")
        assert seen == [("a", "door"), ("b", "door")]

    def test_unsubscribe_callable(self, router):
        """subscribe() returns a remover."""
        seen = []
        remove = router.subscribe("gift.opened", lambda t, p: seen.append(p))
        remove()

        router.emit("gift.opened", gift="bouquet")
        assert seen == []
        assert not router.has_listeners("gift.opened")

    def test_handler_may_unsubscribe_during_emit(self, router):
        """Dispatch works on a snapshot of the handler list."""
        seen = []
        removers = []

        def once(topic, payload):
            seen.append("once")
            removers[0]()

        removers.append(router.subscribe("x", once))
        router.subscribe("x", lambda t, p: seen.append("always"))

        router.emit("x")
        router.emit("x")
        assert seen == ["once", "always", "always"]

    def test_recent_history_is_bounded(self):
        """Only the last N events are kept."""
        router = EventRouter(history=2)
        for i in range(5):
            router.emit("tick", n=i)
        assert [p["n"] for _, p in router.recent] == [3, 4]
