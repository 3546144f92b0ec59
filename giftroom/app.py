# giftroom/app.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import pygame

from keepsake.core.clock import TimerQueue
from keepsake.input.intents import QUIT, Intent
from keepsake.router import EventRouter
from keepsake.scene.base import SceneContext
from keepsake.scene.director import SceneDirector
from keepsake.scene.registry import SceneRegistry
from keepsake.story.graph import SceneGraph
from keepsake.story.state import UnlockTracker
from giftroom.config import StoryConfig
from giftroom.debug import debug_logger
from giftroom.debug.debug_logger import StoryDebug, log as story_log
from giftroom.scenes import build_scene_registry
from giftroom.storylines import get_storyline


@dataclass
class StoryApp:
    """
    One running story: the timeline, the narrative state and the live scene.

    Frame order: clock.update(dt) fires due timers, then the live scene
    updates. Input is routed to the live scene between frames.
    """
    config: StoryConfig
    clock: TimerQueue
    router: EventRouter
    tracker: UnlockTracker
    graph: SceneGraph
    director: SceneDirector
    running: bool = True

    def update(self, dt_ms: float) -> None:
        self.clock.update(dt_ms)
        self.director.update(dt_ms)

    def handle_intent(self, intent: Intent) -> None:
        if intent.kind == QUIT:
            self.running = False
            return
        self.director.handle_intent(intent)

    def draw(self, surface: pygame.Surface, fonts: Dict[str, pygame.font.Font]) -> None:
        self.director.draw(surface, fonts)

    def snapshot(self) -> None:
        debug = StoryDebug()
        debug.story_snapshot(self.graph, self.clock)
        debug.unlock_snapshot(self.tracker)

    def shutdown(self) -> None:
        self.director.shutdown()
        self.clock.clear()
        self.running = False


def build_app(config: Optional[StoryConfig] = None, registry: Optional[SceneRegistry] = None) -> StoryApp:
    """Wire clock -> tracker -> graph -> director and mount the first scene."""
    config = config or StoryConfig()
    if config.debug_categories is not None:
        debug_logger.set_categories(config.debug_categories)

    storyline = get_storyline(config.storyline_id)
    required = config.required_gift_ids()
    if required is None:
        required = storyline.required_gifts or None

    clock = TimerQueue()
    router = EventRouter()
    tracker = UnlockTracker(storyline.gift_ids, required=required)
    graph = SceneGraph(storyline, tracker, router, start=config.start_scene_id())

    ctx = SceneContext(graph=graph, tracker=tracker, clock=clock, router=router, config=config)
    director = SceneDirector(ctx, registry or build_scene_registry())
    director.mount()

    story_log(
        "harness",
        f"storyline={storyline.id!r} scene={graph.current.value!r} "
        f"gate={[g.value for g in tracker.required]}",
    )
    return StoryApp(
        config=config,
        clock=clock,
        router=router,
        tracker=tracker,
        graph=graph,
        director=director,
    )
