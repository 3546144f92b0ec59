# keepsake/scene/director.py
from __future__ import annotations

from typing import Any, Dict, Optional

import pygame

from keepsake.input.intents import Intent
from keepsake.router import SCENE_CHANGED
from keepsake.scene.base import Scene, SceneContext
from keepsake.scene.registry import SceneRegistry
from keepsake.story.spec import SceneId
from giftroom.debug.debug_logger import log as story_log


class SceneDirector:
    """
    Keeps exactly one live Scene in step with SceneGraph.current.

    You call:
      - director.mount() once after construction
      - director.update(dt_ms) / draw(surface, fonts) each frame
      - director.handle_intent(intent) for each input intent

    On scene.changed the old scene is exited (its timers cancelled)
    before the new one is built and entered.
    """

    def __init__(self, ctx: SceneContext, registry: SceneRegistry) -> None:
        self.ctx = ctx
        self.registry = registry
        self._active: Optional[Scene] = None

        missing = registry.missing(ctx.graph.storyline.scenes)
        if missing:
            raise KeyError(f"No scene registered for: {[s.value for s in missing]}")

        self._unsubscribe = ctx.router.subscribe(SCENE_CHANGED, self._on_scene_changed)

    @property
    def active(self) -> Optional[Scene]:
        return self._active

    def mount(self) -> Scene:
        if self._active is not None:
            raise RuntimeError("SceneDirector already mounted")
        return self._swap(self.ctx.graph.current)

    def shutdown(self) -> None:
        if self._active is not None:
            self._active.exit()
            self._active = None
        self._unsubscribe()

    # ------------------------------------------------------------------
    # Router
    # ------------------------------------------------------------------
    def _on_scene_changed(self, topic: str, payload: Dict[str, Any]) -> None:
        if self._active is None:
            return
        self._swap(payload["current"])

    def _swap(self, scene_id: SceneId) -> Scene:
        old = self._active
        if old is not None:
            old.exit()
        self._active = None

        scene = self.registry.build(scene_id, self.ctx)
        self._active = scene
        story_log("scene", f"mount {scene_id.value} (pending timers={self.ctx.clock.pending()})")
        scene.enter()
        return scene

    # ------------------------------------------------------------------
    # Frame
    # ------------------------------------------------------------------
    def update(self, dt_ms: float) -> None:
        if self._active is not None:
            self._active.update(dt_ms)

    def draw(self, surface: pygame.Surface, fonts: Dict[str, pygame.font.Font]) -> None:
        if self._active is not None:
            self._active.draw(surface, fonts)

    def handle_intent(self, intent: Intent) -> None:
        if self._active is not None:
            self._active.handle_intent(intent)
