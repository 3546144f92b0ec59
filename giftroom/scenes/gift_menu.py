# giftroom/scenes/gift_menu.py
from __future__ import annotations

from typing import Callable, List

import pygame

from keepsake.scene.base import Scene
from keepsake.story.spec import GiftSpec, SceneId
from keepsake.ui.theme import THEME


class GiftMenuScene(Scene):
    """
    Hub: one control per gift, plus "continue" once the gate is open.

    The continue control is never created while the gate is closed, so
    there is nothing to focus or click before every required gift is
    opened.
    """

    scene_id = SceneId.GIFT_MENU
    title = "Pick a gift!"

    def on_enter(self) -> None:
        storyline = self.graph.storyline
        for spec in storyline.gifts:
            button = self.add_button(spec.gift_id.value, spec.label or spec.gift_id.value, self._open(spec))
            button.dimmed = self.tracker.is_opened(spec.gift_id)

        if self.graph.can_go_to(storyline.finale):
            self.add_button("continue", "Continue", lambda: self.go(storyline.finale))

    def _open(self, spec: GiftSpec) -> Callable[[], None]:
        return lambda: self.go(spec.scene_id)

    def lines(self) -> List[str]:
        total = len(self.graph.storyline.gifts)
        opened = sum(1 for g in self.graph.storyline.gift_ids if self.tracker.is_opened(g))
        rows = [f"{total} special gifts, each with love", f"Opened {opened} of {total}"]
        remaining = self.tracker.remaining()
        if remaining:
            rows.append(f"{len(remaining)} more to unlock the last surprise")
        return rows

    def layout(self, width: int, height: int) -> None:
        """Gift grid in the middle, continue centred under it."""
        cols = THEME.menu_cols
        gifts = [b for b in self.buttons if b.key != "continue"]
        rows = (len(gifts) + cols - 1) // cols
        grid_w = cols * THEME.button_w + (cols - 1) * THEME.button_gap
        x0 = (width - grid_w) // 2
        y0 = height // 3
        for i, button in enumerate(gifts):
            r, c = divmod(i, cols)
            button.rect = pygame.Rect(
                x0 + c * (THEME.button_w + THEME.button_gap),
                y0 + r * (THEME.button_h + THEME.button_gap),
                THEME.button_w,
                THEME.button_h,
            )

        cont = self.find_button("continue")
        if cont is not None:
            y = y0 + rows * (THEME.button_h + THEME.button_gap) + THEME.pad
            cont.rect = pygame.Rect((width - THEME.button_w) // 2, y, THEME.button_w, THEME.button_h)
