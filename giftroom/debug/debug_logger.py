# giftroom/debug/debug_logger.py

from __future__ import annotations
from typing import Iterable, Any

# ----------------------------------------------------------------------
# Core debug toggles
# ----------------------------------------------------------------------

DEBUG_ENABLED: bool = True

ENABLED_CATEGORIES: set[str] = {
    "graph",    # scene transitions
    "gate",     # finale gate checks
    "gift",     # unlock flags
    "harness",
}

ALL_CATEGORIES: frozenset[str] = frozenset({
    "graph",
    "gate",
    "gift",
    "choreo",   # phase / assembly / reveal tracing (noisy)
    "scene",    # mount / unmount
    "input",
    "harness",
})

def enable_categories(*cats: str) -> None:
    ENABLED_CATEGORIES.update(cats)

def disable_categories(*cats: str) -> None:
    for c in cats:
        ENABLED_CATEGORIES.discard(c)

def set_categories(cats: Iterable[str]) -> None:
    global ENABLED_CATEGORIES
    ENABLED_CATEGORIES = set(cats)

def log(category: str, message: str) -> None:
    if not DEBUG_ENABLED:
        return
    if category not in ENABLED_CATEGORIES:
        return
    print(f"[STORY {category.upper()}] {message}")


# ----------------------------------------------------------------------
# High-level Story Debug Helper
# ----------------------------------------------------------------------

class StoryDebug:
    """
    Formats structured snapshots of the narrative state.

    UnlockTracker and StoryApp.snapshot call these instead of
    hand-rolling debug strings.
    """

    def unlock_snapshot(self, tracker: Any) -> None:
        rows = []
        for gift in getattr(tracker, "gift_ids", ()):
            mark = "x" if tracker.is_opened(gift) else " "
            req = "*" if gift in getattr(tracker, "required", ()) else " "
            rows.append(f"  [{mark}]{req} {gift.value}")
        state = "OPEN" if tracker.all_opened() else "closed"
        log("gift", f"[UNLOCKS] gate={state}\n" + "\n".join(rows))

    def story_snapshot(self, graph: Any, clock: Any = None) -> None:
        """Full narrative snapshot (F3 in the dev harness)."""
        lines: list[str] = []
        lines.append("=== DEBUG: Story State ===")
        lines.append(f"storyline: {graph.storyline.id!r}")
        lines.append(f"current: {graph.current.value!r}")
        lines.append(f"exits: {[s.value for s in graph.exits()]}")
        lines.append(f"finale open: {graph.can_go_to(graph.storyline.finale)}")
        lines.append(f"history: {[s.value for s in graph.history]}")
        if clock is not None:
            lines.append(f"clock: now={clock.now_ms:.0f}ms pending={clock.pending()}")
        lines.append("=== END STORY DEBUG ===")
        log("harness", "\n".join(lines))
