# giftroom/scenes/prelude.py
"""
Opening scenes: mail -> envelope -> letter -> (question) -> door.

Each one leads to its first declared exit, so the same classes serve
both storylines.
"""
from __future__ import annotations

from typing import List, Tuple

from keepsake.choreo.composite import Choreography, ChoreographyPlan
from keepsake.choreo.phases import PhaseSequence
from keepsake.scene.base import Scene
from keepsake.story.spec import SceneId
from keepsake.ui.theme import THEME


class IntroScene(Scene):
    scene_id = SceneId.INTRO
    title = "You've Got Mail!"

    def lines(self) -> List[str]:
        return ["Click anywhere to grab it"]

    def on_background_activate(self) -> None:
        self.go_next()


class EnvelopeScene(Scene):
    scene_id = SceneId.ENVELOPE
    title = "A letter, sealed with a heart"
    night = True

    def on_enter(self) -> None:
        self.add_button("open", "Open me", self.go_next)


LETTER_TEXT = [
    "Dear you,",
    "Hope you are doing well; I am good here and hope the same for you.",
    "This letter is a reminder of me whenever you miss me.",
    "You deserve all the good things, and I will support you always.",
    "Thank you for coming into my life. I will never let you down.",
    "I love you.",
]


class LetterScene(Scene):
    scene_id = SceneId.LETTER

    def on_enter(self) -> None:
        self.add_button("next", "Surprise", self.go_next)

    def lines(self) -> List[str]:
        return list(LETTER_TEXT)


# Where the "no" button hides after each dodge (fractions of the window)
NO_DODGE_SPOTS: Tuple[Tuple[float, float], ...] = (
    (0.78, 0.22), (0.12, 0.70), (0.70, 0.80), (0.20, 0.18), (0.55, 0.40),
)

LOADING_MS = 3000


class DoYouLoveMeScene(Scene):
    """
    yes -> loading beat (3 s) -> answer + continue.
    no  -> the button jumps somewhere else. It never navigates.
    """

    scene_id = SceneId.DO_YOU_LOVE_ME

    def on_enter(self) -> None:
        self.stage = "question"
        self.dodges = 0
        self.add_button("yes", "Yes", self.answer_yes)
        self.add_button("no", "No", self.dodge)
        self.add_button("continue", "Continue", self.go_next, visible=False)
        self.choreo = self.own(
            Choreography(
                self.clock,
                ChoreographyPlan(phases=PhaseSequence.build([("loading", LOADING_MS), ("result", 0)])),
                on_phase=self._on_phase,
                on_reveal=lambda: self.reveal("continue"),
                name="do_you_love_me",
            )
        )

    @property
    def title(self) -> str:
        return {
            "question": "Do you love me?",
            "loading": "Checking...",
            "result": "I knew it! I love you too.",
        }[self.stage]

    def answer_yes(self) -> None:
        self.button("yes").visible = False
        self.button("no").visible = False
        self._clamp_focus()
        self.choreo.start()

    def dodge(self) -> None:
        self.dodges += 1
        self.focus_index = 0

    def _on_phase(self, key: str, index: int) -> None:
        self.stage = key

    def layout(self, width: int, height: int) -> None:
        super().layout(width, height)
        no = self.find_button("no")
        if no is not None and no.rect is not None and self.dodges:
            fx, fy = NO_DODGE_SPOTS[(self.dodges - 1) % len(NO_DODGE_SPOTS)]
            no.rect.topleft = (int(fx * (width - THEME.button_w)), int(fy * (height - THEME.button_h)))


class DoorScene(Scene):
    scene_id = SceneId.DOOR
    title = "The Gift Room"
    night = True

    def on_enter(self) -> None:
        self.add_button("enter", "Enter Room", self.go_next)
