# giftroom/scenes/pages.py
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from keepsake.core.clock import TimerHandle
from keepsake.story.spec import SceneId
from giftroom.scenes.base import GiftScene


Page = Tuple[str, str]  # (heading, text)

FLIP_MS = 600
LETTER_CLOSE_MS = 300


class PagedGiftScene(GiftScene):
    """
    Book-style scene. prev/next flip after FLIP_MS; requests during a
    flip are dropped.
    """

    pages: Sequence[Page] = ()
    flip_ms: int = FLIP_MS

    def on_enter(self) -> None:
        self.page = 0
        self.flipping = False
        self._flip: Optional[TimerHandle] = None
        self.add_button("prev", "Previous", lambda: self.flip(-1))
        self.add_button("next", "Next", lambda: self.flip(1))
        super().on_enter()
        self._sync_buttons()

    def flip(self, step: int) -> bool:
        target = self.page + step
        if self.flipping or not (0 <= target < len(self.pages)):
            return False
        self.flipping = True
        self._flip = self.after(self.flip_ms, lambda: self._land(target))
        return True

    def _land(self, target: int) -> None:
        self._flip = None
        self.page = target
        self.flipping = False
        self._sync_buttons()

    def _sync_buttons(self) -> None:
        self.button("prev").enabled = self.page > 0
        self.button("next").enabled = self.page < len(self.pages) - 1
        self._clamp_focus()

    def lines(self) -> List[str]:
        heading, text = self.pages[self.page]
        return [heading, "", text, "", f"{self.page + 1} / {len(self.pages)}"]


class CourageScene(PagedGiftScene):
    scene_id = SceneId.COURAGE
    title = "Thank You for Your Courage"
    night = True
    pages = (
        ("When the world shook", "You didn't run. You stood your ground. You chose us."),
        ("When they said no", "It would have been easier to give up. You trusted your heart."),
        ("Every secret meeting", "Choosing love over fear, every single time."),
        ("Standing strong alone", "When I couldn't be there, you never wavered."),
        ("Believing in us", "When the future seemed uncertain, you kept faith."),
        ("Thank you", "For every brave thing you did for us."),
    )


class OurStoryScene(PagedGiftScene):
    scene_id = SceneId.OUR_STORY
    title = "Our Story"
    pages = (
        ("Chapter one", "Two strangers, one conversation that never really ended."),
        ("Chapter two", "Late nights, long calls, and a lot of laughing."),
        ("Chapter three", "The yes that started everything."),
        ("Chapter four", "Distance, and learning it could not win."),
        ("To be continued", "The best chapters are still unwritten."),
    )


LETTERS: Tuple[Page, ...] = (
    ("When they question us", "Your courage is not weakness. It's the strength of our love."),
    ("When you miss me", "Close your eyes. I'm right there, holding your hand."),
    ("When you feel alone", "You never are. I'm one call away, always."),
    ("When you doubt yourself", "You are braver than you believe and loved more than you know."),
)


class LettersOfStrengthScene(GiftScene):
    """
    Pick a letter to read it. Closing fades for LETTER_CLOSE_MS before the
    letter list comes back.
    """

    scene_id = SceneId.LETTERS_OF_STRENGTH
    title = "Letters of Strength"
    night = True

    def on_enter(self) -> None:
        self.selected: Optional[int] = None
        self.reading = False
        for i, (heading, _) in enumerate(LETTERS):
            self.add_button(f"letter{i + 1}", heading, self._opener(i))
        self.add_button("close", "Close letter", self.close_letter, visible=False)
        super().on_enter()

    def _opener(self, index: int):
        return lambda: self.open_letter(index)

    def _letter_buttons(self):
        return [b for b in self.buttons if b.key.startswith("letter")]

    def open_letter(self, index: int) -> None:
        if self.selected is not None:
            return
        self.selected = index
        self.reading = True
        for button in self._letter_buttons():
            button.visible = False
        self.button("back").visible = False
        self.reveal("close")

    def close_letter(self) -> None:
        if not self.reading:
            return
        self.reading = False
        self.button("close").visible = False
        self._clamp_focus()
        self.after(LETTER_CLOSE_MS, self._closed)

    def _closed(self) -> None:
        self.selected = None
        for button in self._letter_buttons():
            button.visible = True
        self.reveal("back")

    def lines(self) -> List[str]:
        if self.selected is None:
            return ["A letter for every hard day."]
        heading, text = LETTERS[self.selected]
        if not self.reading:
            return []
        return [heading, "", text]
