# giftroom/scenes/keepsakes.py
"""
Static gift scenes: no choreography, the back control is there from
the start. Promise and Train Journey keep a single toggle.
"""
from __future__ import annotations

import math
from typing import Dict, List

import pygame

from keepsake.story.spec import SceneId
from keepsake.ui.theme import THEME
from giftroom.scenes.base import GiftScene


class BouquetScene(GiftScene):
    scene_id = SceneId.BOUQUET
    title = "A Bouquet for You"
    body = [
        "Each flower here has a little reason why you're one of my favourite humans:",
        "For surviving my daily voice notes.",
        "For always hyping me up.",
        "For listening to my overthinking.",
        "For being the calm in my chaos.",
        "For existing exactly as you are.",
    ]


class MemoriesScene(GiftScene):
    scene_id = SceneId.MEMORIES
    title = "Our Memories"
    body = [
        "The first call that lasted until sunrise.",
        "The first photo we took together.",
        "Every silly inside joke since.",
    ]


class PromiseScene(GiftScene):
    scene_id = SceneId.PROMISE
    title = "A Promise"

    def on_enter(self) -> None:
        self.candles_blown = False
        self.add_button("blow", "Blow the candles", self.blow)
        super().on_enter()

    def blow(self) -> None:
        self.candles_blown = True
        self.button("blow").enabled = False
        self._clamp_focus()

    def lines(self) -> List[str]:
        if not self.candles_blown:
            return ["Make a wish first."]
        return [
            "I promise to keep choosing you,",
            "on the easy days and on the hard ones.",
        ]


class TimelineScene(GiftScene):
    scene_id = SceneId.TIMELINE
    title = "Our Timeline"
    body = [
        "The day we met.",
        "The day you said yes.",
        "The first time we saw each other again.",
        "Today, and every day after.",
    ]


CONSTELLATION_STARS = ("Laughter", "Trust", "Patience", "Kindness", "Home", "Forever")


class ConstellationScene(GiftScene):
    scene_id = SceneId.CONSTELLATION
    title = "Our Constellation"
    night = True
    body = ["Every star is something you gave me."]

    def draw_extra(self, surface: pygame.Surface, fonts: Dict[str, pygame.font.Font]) -> None:
        w, h = surface.get_size()
        cx, cy = w // 2, h // 2 + 20
        radius = min(w, h) // 4
        points = []
        for i, name in enumerate(CONSTELLATION_STARS):
            angle = -math.pi / 2 + i * 2 * math.pi / len(CONSTELLATION_STARS)
            p = (int(cx + radius * math.cos(angle)), int(cy + radius * math.sin(angle)))
            points.append(p)
            pygame.draw.circle(surface, THEME.button_focus, p, 5)
            label = fonts["small"].render(name, True, THEME.text_night)
            surface.blit(label, label.get_rect(midtop=(p[0], p[1] + 8)))
        pygame.draw.lines(surface, THEME.heart_accent, True, points, 1)


TRAIN_SPEED_PX_PER_MS = 0.12


class TrainJourneyScene(GiftScene):
    scene_id = SceneId.TRAIN_JOURNEY
    title = "The Path to You"

    def on_enter(self) -> None:
        self.moving = False
        self.train_x = 0.0
        self.add_button("start", "Start the journey", self.start_journey)
        super().on_enter()

    def start_journey(self) -> None:
        self.moving = True
        self.button("start").enabled = False
        self._clamp_focus()

    def update(self, dt_ms: float) -> None:
        if self.moving:
            self.train_x += TRAIN_SPEED_PX_PER_MS * dt_ms

    def lines(self) -> List[str]:
        if self.moving:
            return ["Every mile brings me closer to you."]
        return ["All aboard?"]

    def draw_extra(self, surface: pygame.Surface, fonts: Dict[str, pygame.font.Font]) -> None:
        w, h = surface.get_size()
        track_y = h // 2 + 40
        pygame.draw.line(surface, THEME.text_secondary, (0, track_y), (w, track_y), 3)
        x = int(self.train_x) % (w + 120) - 120
        pygame.draw.rect(surface, THEME.button_fill, pygame.Rect(x, track_y - 36, 110, 32), border_radius=6)
