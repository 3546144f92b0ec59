# keepsake/story/graph.py
from __future__ import annotations

from typing import List, Optional, Tuple

from keepsake.router import EventRouter, GATE_UNLOCKED, GIFT_OPENED, SCENE_CHANGED
from keepsake.story.spec import SceneId, Storyline
from keepsake.story.state import UnlockTracker
from keepsake.story.validate import validate_storyline
from giftroom.debug.debug_logger import log as story_log


class SceneGraph:
    """
    Owns "which scene is live" for one run.

    SceneGraph is responsible for:
        - holding the current SceneId (starts at storyline.entry)
        - go_to(): unconditional, except entry into the finale, which
          waits for tracker.all_opened()
        - marking a gift opened when its scene is entered
        - publishing scene.changed / gift.opened / gate.unlocked

    It does NOT:
        - build, draw or tear down scenes (SceneDirector does)
        - own timers
    """

    def __init__(
        self,
        storyline: Storyline,
        tracker: UnlockTracker,
        router: Optional[EventRouter] = None,
        *,
        start: Optional[SceneId] = None,
    ) -> None:
        issues = validate_storyline(storyline)
        if issues:
            raise ValueError(
                f"Storyline {storyline.id!r} is invalid:\n  " + "\n  ".join(issues)
            )
        missing = [g for g in storyline.gift_ids if g not in tracker.gift_ids]
        if missing:
            raise KeyError(f"Tracker is missing storyline gifts: {[g.value for g in missing]}")

        self.storyline = storyline
        self.tracker = tracker
        self.router = router or EventRouter()

        self._scenes = frozenset(storyline.scenes)
        self._current = storyline.entry
        self.history: List[SceneId] = [self._current]

        if start is not None and start != self._current:
            # Dev jump: behaves like a normal navigation (gate included).
            self.go_to(start)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def current(self) -> SceneId:
        return self._current

    def _check(self, scene: SceneId) -> None:
        if scene not in self._scenes:
            known = ", ".join(s.value for s in self.storyline.scenes)
            raise KeyError(f"Unknown scene {scene!r} for storyline {self.storyline.id!r}. Known: {known}")

    def is_gated(self, target: SceneId) -> bool:
        return target == self.storyline.finale

    def can_go_to(self, target: SceneId) -> bool:
        """What the UI asks before exposing a control as actionable."""
        self._check(target)
        if self.is_gated(target):
            return self.tracker.all_opened()
        return True

    def exits(self, scene: Optional[SceneId] = None) -> Tuple[SceneId, ...]:
        scene = self._current if scene is None else scene
        self._check(scene)
        return tuple(self.storyline.edges.get(scene, ()))

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def go_to(self, target: SceneId) -> bool:
        """
        Request a transition. Returns True if the current scene changed.

        A closed gate is not an error: the request is dropped.
        """
        self._check(target)

        if target == self._current:
            return False

        if self.is_gated(target) and not self.tracker.all_opened():
            remaining = [g.value for g in self.tracker.remaining()]
            story_log("gate", f"{self._current.value} -> {target.value} ignored; waiting on {remaining}")
            return False

        previous = self._current
        self._current = target
        self.history.append(target)
        story_log("graph", f"{previous.value} -> {target.value}")

        gift = self.storyline.gift_for_scene(target)
        if gift is not None:
            was_open = self.tracker.all_opened()
            if self.tracker.mark_opened(gift):
                story_log("gift", f"opened {gift.value!r}")
                self.router.emit(GIFT_OPENED, gift=gift, scene=target)
                if not was_open and self.tracker.all_opened():
                    story_log("gate", f"{self.storyline.finale.value} unlocked")
                    self.router.emit(GATE_UNLOCKED, finale=self.storyline.finale)

        self.router.emit(SCENE_CHANGED, previous=previous, current=target)
        return True
