# giftroom/scenes/finale.py
from __future__ import annotations

from typing import Dict, List, Optional

import pygame

from keepsake.choreo.composite import AssemblyPlan, Choreography, ChoreographyPlan
from keepsake.choreo.phases import PhaseSequence
from keepsake.core.clock import TimerHandle
from keepsake.scene.base import Scene
from keepsake.story.spec import SceneId
from keepsake.ui.theme import THEME
from keepsake.ui import widgets
from giftroom.layouts.heart import HEART_TABLE


BORDER_MS = 6000
BORDER_ACCENT_MS = 4000
BLOCK_TICK_MS = 300
BLOCK_LEAD_IN_MS = 300
SETTLE_MS = 800
RISE_MS = 2000
RISE_PX = 90


def heart_plan() -> ChoreographyPlan:
    """Borders, then 23 blocks, then settle + rise, then reveal (~19.7 s)."""
    return ChoreographyPlan(
        phases=PhaseSequence.build([("border", BORDER_MS), ("border_accent", BORDER_ACCENT_MS)]),
        assembly=AssemblyPlan(HEART_TABLE, tick_ms=BLOCK_TICK_MS, lead_in_ms=BLOCK_LEAD_IN_MS),
        outro=PhaseSequence.build([("settle", SETTLE_MS), ("rise", RISE_MS)]),
    )


class HeartBuildingScene(Scene):
    scene_id = SceneId.HEART_BUILDING

    def on_enter(self) -> None:
        self.stage = "border"
        self.stage_started_ms = self.clock.now_ms
        self.add_button("continue", "Continue", self.go_next, visible=False)
        self.choreo = self.own(
            Choreography(
                self.clock,
                heart_plan(),
                on_phase=self._on_phase,
                on_reveal=lambda: self.reveal("continue"),
                name="heart_building",
            )
        )
        self.choreo.start()

    def _on_phase(self, key: str, index: int) -> None:
        self.stage = key
        self.stage_started_ms = self.clock.now_ms

    @property
    def title(self) -> str:
        if self.choreo.assembly.is_done:
            return "Love you, always"
        return ""

    def _stage_fraction(self, duration_ms: int) -> float:
        return max(0.0, min(1.0, (self.clock.now_ms - self.stage_started_ms) / duration_ms))

    def draw_extra(self, surface: pygame.Surface, fonts: Dict[str, pygame.font.Font]) -> None:
        w, h = surface.get_size()

        # Border lines: black grows over BORDER_MS, red accent over BORDER_ACCENT_MS after it
        y = h - THEME.pad * 2
        black = 1.0 if self.stage != "border" else self._stage_fraction(BORDER_MS)
        pygame.draw.line(surface, (0, 0, 0), (0, y), (int(w * black), y), 4)
        if self.stage != "border":
            accent = 1.0 if self.stage != "border_accent" else self._stage_fraction(BORDER_ACCENT_MS)
            pygame.draw.line(surface, THEME.heart_border, (w - int(w * accent), y + 6), (w, y + 6), 4)

        rise = 0
        if self.stage == "rise":
            rise = int(RISE_PX * self._stage_fraction(RISE_MS))
        elif self.choreo.revealed:
            rise = RISE_PX

        cells = []
        for element in self.choreo.assembly.placed:
            cells.extend((x, -y_up) for x, y_up in element.cells())
        widgets.draw_cells(
            surface, cells,
            origin=(w // 2, h // 2 - rise),
            colour=THEME.heart_block,
        )


class EndScene(Scene):
    """Classic finale card."""

    scene_id = SceneId.END
    title = "Happy Anniversary!"

    def on_enter(self) -> None:
        self.add_button("next", "One more thing", self.go_next)

    def lines(self) -> List[str]:
        return ["You opened every gift.", "Thank you for being you."]


HUG_MS = 800


class ConstantScene(Scene):
    scene_id = SceneId.CONSTANT
    title = "You are my constant..."
    night = True

    def on_enter(self) -> None:
        self.hugging = False
        self._hug: Optional[TimerHandle] = None
        self.add_button("hug", "Hug the penguin", self.hug)

    def hug(self) -> None:
        self.clock.cancel(self._hug)
        self.hugging = True
        self._hug = self.after(HUG_MS, self._release)

    def _release(self) -> None:
        self._hug = None
        self.hugging = False

    def lines(self) -> List[str]:
        first = "*squeeze*" if self.hugging else "Click the penguin for a hug!"
        return [first, "Forever and always, my love."]
