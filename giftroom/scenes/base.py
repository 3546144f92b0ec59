# giftroom/scenes/base.py
from __future__ import annotations

from typing import List

from keepsake.scene.base import Scene


class GiftScene(Scene):
    """
    A scene opened from the hub.

    Adds a "back" control that returns to the hub. back_visible=False
    keeps it hidden until the scene calls reveal("back").
    """

    back_label: str = "Back to the gift room"
    back_visible: bool = True
    body: List[str] = []

    def on_enter(self) -> None:
        self.add_button("back", self.back_label, self.go_hub, visible=self.back_visible)

    def go_hub(self) -> None:
        self.go(self.graph.storyline.hub)

    def lines(self) -> List[str]:
        return list(self.body)
