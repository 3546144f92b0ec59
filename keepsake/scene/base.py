# keepsake/scene/base.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, TYPE_CHECKING

import pygame

from keepsake.core.clock import TimerHandle, TimerQueue
from keepsake.choreo.composite import Cancellable
from keepsake.input.intents import ACTIVATE, FOCUS_NEXT, FOCUS_PREV, Intent
from keepsake.router import SCENE_REVEALED
from keepsake.story.spec import SceneId
from keepsake.ui.theme import THEME
from keepsake.ui import widgets
from giftroom.debug.debug_logger import log as story_log

if TYPE_CHECKING:
    from keepsake.router import EventRouter
    from keepsake.story.graph import SceneGraph
    from keepsake.story.state import UnlockTracker


@dataclass
class SceneContext:
    """
    Everything a scene may touch, passed explicitly.

    config is the app-level config object (StoryConfig); the engine
    only reads window_size from it.
    """
    graph: "SceneGraph"
    tracker: "UnlockTracker"
    clock: TimerQueue
    router: "EventRouter"
    config: Any = None


@dataclass
class Button:
    """
    One interactive control.

    Hidden buttons are not drawn and not focusable. Disabled buttons are
    drawn dimmed and ignore activation.
    """
    key: str
    label: str
    on_activate: Callable[[], None]
    enabled: bool = True
    visible: bool = True
    dimmed: bool = False
    rect: Optional[pygame.Rect] = None

    @property
    def actionable(self) -> bool:
        return self.visible and self.enabled


class Scene:
    """
    Base class for one full-screen scene.

    Lifecycle (driven by SceneDirector):
      - enter(): scene is live; start choreography here
      - update(dt_ms) / draw(surface, fonts) / handle_intent(intent)
      - exit(): cancels everything registered with own() / after()

    Subclasses override on_enter() / on_exit() and describe themselves
    through title, lines() and their buttons.
    """

    scene_id: SceneId = SceneId.INTRO
    title: str = ""
    night: bool = False

    def __init__(self, ctx: SceneContext) -> None:
        self.ctx = ctx
        self.buttons: List[Button] = []
        self.focus_index: int = 0
        self.mounted = False

        self._owned: List[Cancellable] = []
        self._handles: List[TimerHandle] = []

    # ------------------------------------------------------------------
    # Shortcuts
    # ------------------------------------------------------------------
    @property
    def clock(self) -> TimerQueue:
        return self.ctx.clock

    @property
    def graph(self) -> "SceneGraph":
        return self.ctx.graph

    @property
    def tracker(self) -> "UnlockTracker":
        return self.ctx.tracker

    # ------------------------------------------------------------------
    # Ownership
    # ------------------------------------------------------------------
    def own(self, thing: Any) -> Any:
        """Register a sequencer / animator / choreography for cancellation on exit."""
        self._owned.append(thing)
        return thing

    def after(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """Schedule a one-shot timer that dies with the scene."""
        handle = self.clock.schedule(delay_ms, callback)
        self._handles = [h for h in self._handles if h.active]
        self._handles.append(handle)
        return handle

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def enter(self) -> None:
        self.mounted = True
        story_log("scene", f"enter {self.scene_id.value}")
        self.on_enter()
        self.layout(*self._window_size())
        self._clamp_focus()

    def exit(self) -> None:
        if not self.mounted:
            return
        self.mounted = False
        for thing in self._owned:
            thing.cancel()
        for handle in self._handles:
            self.clock.cancel(handle)
        self._owned.clear()
        self._handles.clear()
        self.on_exit()
        story_log("scene", f"exit {self.scene_id.value}")

    def on_enter(self) -> None:
        pass

    def on_exit(self) -> None:
        pass

    def update(self, dt_ms: float) -> None:
        pass

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def go(self, target: SceneId) -> bool:
        """Ask the graph for a transition. Ignored once the scene has exited."""
        if not self.mounted:
            return False
        return self.graph.go_to(target)

    def next_scene(self) -> Optional[SceneId]:
        """First declared exit of this scene (the usual 'continue' target)."""
        exits = self.graph.exits(self.scene_id)
        return exits[0] if exits else None

    def go_next(self) -> bool:
        target = self.next_scene()
        if target is None:
            return False
        return self.go(target)

    # ------------------------------------------------------------------
    # Buttons + focus
    # ------------------------------------------------------------------
    def add_button(
        self,
        key: str,
        label: str,
        on_activate: Callable[[], None],
        *,
        visible: bool = True,
        enabled: bool = True,
    ) -> Button:
        if self.find_button(key) is not None:
            raise ValueError(f"Scene {self.scene_id.value!r} already has a button {key!r}")
        button = Button(key, label, on_activate, enabled=enabled, visible=visible)
        self.buttons.append(button)
        if self.mounted:
            self.layout(*self._window_size())
        return button

    def find_button(self, key: str) -> Optional[Button]:
        for button in self.buttons:
            if button.key == key:
                return button
        return None

    def button(self, key: str) -> Button:
        found = self.find_button(key)
        if found is None:
            known = ", ".join(b.key for b in self.buttons)
            raise KeyError(f"Unknown button {key!r} on {self.scene_id.value!r}. Known: {known}")
        return found

    def reveal(self, key: str) -> None:
        """Show a hidden control (the end of a choreography) and publish it."""
        self.button(key).visible = True
        self._clamp_focus()
        self.ctx.router.emit(SCENE_REVEALED, scene=self.scene_id, control=key)

    def focusable(self) -> List[Button]:
        return [b for b in self.buttons if b.actionable]

    @property
    def focused(self) -> Optional[Button]:
        items = self.focusable()
        if not items:
            return None
        return items[self.focus_index % len(items)]

    def _clamp_focus(self) -> None:
        count = len(self.focusable())
        self.focus_index = 0 if count == 0 else self.focus_index % count

    def move_focus(self, step: int) -> None:
        count = len(self.focusable())
        if count:
            self.focus_index = (self.focus_index + step) % count

    def press(self, key: str) -> bool:
        """Activate a button by key, as a click on it would. False if not actionable."""
        button = self.find_button(key)
        if button is None or not button.actionable or not self.mounted:
            return False
        story_log("input", f"{self.scene_id.value}: {key}")
        button.on_activate()
        return True

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def handle_intent(self, intent: Intent) -> None:
        if intent.kind == FOCUS_NEXT:
            self.move_focus(1)
        elif intent.kind == FOCUS_PREV:
            self.move_focus(-1)
        elif intent.kind == ACTIVATE:
            if intent.pos is not None:
                for button in self.focusable():
                    if button.rect is not None and button.rect.collidepoint(intent.pos):
                        self.press(button.key)
                        return
                self.on_background_activate()
                return
            focused = self.focused
            if focused is not None:
                self.press(focused.key)
            else:
                self.on_background_activate()

    def on_background_activate(self) -> None:
        """Activation that hit no control. Scenes like the intro override this."""
        pass

    # ------------------------------------------------------------------
    # Layout + draw
    # ------------------------------------------------------------------
    def _window_size(self) -> Tuple[int, int]:
        size = getattr(self.ctx.config, "window_size", None)
        return tuple(size) if size else (960, 720)

    def layout(self, width: int, height: int) -> None:
        """Stack visible buttons bottom-centre."""
        visible = [b for b in self.buttons if b.visible]
        total_w = len(visible) * THEME.button_w + max(0, len(visible) - 1) * THEME.button_gap
        x = (width - total_w) // 2
        y = height - THEME.button_h - THEME.pad * 3
        for button in visible:
            button.rect = pygame.Rect(x, y, THEME.button_w, THEME.button_h)
            x += THEME.button_w + THEME.button_gap

    def lines(self) -> List[str]:
        return []

    def draw(self, surface: pygame.Surface, fonts: Dict[str, pygame.font.Font]) -> None:
        self.layout(*surface.get_size())
        w, h = surface.get_size()
        if self.night:
            widgets.draw_background(surface, THEME.bg_night, THEME.bg_night)
            colour = THEME.text_night
        else:
            widgets.draw_background(surface)
            colour = THEME.text_primary

        y = h // 6
        if self.title:
            y = widgets.draw_text_block(surface, fonts["title"], [self.title], center_x=w // 2, top=y, colour=colour)
            y += THEME.pad
        widgets.draw_text_block(
            surface, fonts["body"], self.lines(),
            center_x=w // 2, top=y, colour=colour, max_width=w - THEME.pad * 8,
        )
        self.draw_extra(surface, fonts)
        self.draw_buttons(surface, fonts)

    def draw_extra(self, surface: pygame.Surface, fonts: Dict[str, pygame.font.Font]) -> None:
        pass

    def draw_buttons(self, surface: pygame.Surface, fonts: Dict[str, pygame.font.Font]) -> None:
        focused = self.focused
        for button in self.buttons:
            if not button.visible or button.rect is None:
                continue
            widgets.draw_button(
                surface, fonts["button"], button.rect, button.label,
                focused=button is focused,
                dimmed=button.dimmed or not button.enabled,
            )
