# keepsake/router.py
from __future__ import annotations

from collections import defaultdict, deque
from typing import Any, Callable, Deque, Dict, List, Tuple


EventHandler = Callable[[str, Dict[str, Any]], None]

# Topics published by the story core
SCENE_CHANGED = "scene.changed"     # previous, current
GIFT_OPENED = "gift.opened"         # gift, scene
GATE_UNLOCKED = "gate.unlocked"     # finale
SCENE_REVEALED = "scene.revealed"   # scene, control


class EventRouter:
    """
    Synchronous story event bus.

    - Listeners subscribe to string topics ("scene.changed", "gift.opened").
    - emit() runs every handler on the caller's stack, in registration
      order, so a handler that navigates has finished before emit returns.
    - The last few events are kept for the F3 debug snapshot.
    """

    def __init__(self, history: int = 32) -> None:
        self._listeners: Dict[str, List[EventHandler]] = defaultdict(list)
        self.recent: Deque[Tuple[str, Dict[str, Any]]] = deque(maxlen=history)

    def subscribe(self, topic: str, handler: EventHandler) -> Callable[[], None]:
        """
        Register handler(topic, payload) for a topic.

        Returns a zero-arg callable that removes the subscription again.
        """
        self._listeners[topic].append(handler)
        return lambda: self.unsubscribe(topic, handler)

    def unsubscribe(self, topic: str, handler: EventHandler) -> None:
        if topic in self._listeners:
            self._listeners[topic] = [
                h for h in self._listeners[topic] if h is not handler
            ]
            if not self._listeners[topic]:
                del self._listeners[topic]

    def has_listeners(self, topic: str) -> bool:
        return bool(self._listeners.get(topic))

    def emit(self, topic: str, **payload: Any) -> None:
        # Snapshot: handlers may (un)subscribe while we dispatch.
        handlers = list(self._listeners.get(topic, ()))
        event_data = dict(payload)
        self.recent.append((topic, event_data))

        for handler in handlers:
            handler(topic, event_data)
