# giftroom/scenes/timed.py
"""
Phase-only gift scenes.

Start control -> timed beats -> back control, revealed on the final beat.
Leaving early cancels the choreography with the scene.
"""
from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from keepsake.choreo.composite import Choreography, ChoreographyPlan
from keepsake.choreo.phases import PhaseSequence
from keepsake.story.spec import SceneId
from giftroom.scenes.base import GiftScene


class TimedGiftScene(GiftScene):
    back_visible = False
    start_label = "Begin"

    #: (key, duration_ms) per beat. The last beat's duration is unused.
    steps: Sequence[Tuple[str, int]] = ()
    intro: List[str] = []
    beats: Dict[str, List[str]] = {}

    #: >0: intro text and start control appear after this delay
    intro_delay_ms: int = 0

    def on_enter(self) -> None:
        self.stage = "intro"
        self.intro_shown = self.intro_delay_ms == 0
        self.add_button("start", self.start_label, self.start, visible=self.intro_shown)
        super().on_enter()

        self.sequence = PhaseSequence.build(self.steps)
        self.choreo = self.own(
            Choreography(
                self.clock,
                ChoreographyPlan(phases=self.sequence),
                on_phase=self._on_phase,
                on_reveal=lambda: self.reveal("back"),
                name=self.scene_id.value,
            )
        )
        if not self.intro_shown:
            self.after(self.intro_delay_ms, self._show_intro)

    def _show_intro(self) -> None:
        self.intro_shown = True
        self.reveal("start")

    def start(self) -> None:
        self.button("start").visible = False
        self._clamp_focus()
        self.choreo.start()

    def _on_phase(self, key: str, index: int) -> None:
        self.stage = key

    def lines(self) -> List[str]:
        if self.stage == "intro":
            return list(self.intro) if self.intro_shown else []
        return list(self.beats.get(self.stage, ()))


class Aug29SurpriseScene(TimedGiftScene):
    scene_id = SceneId.AUG29_SURPRISE
    title = "August 29"
    start_label = "Start the journey"
    intro_delay_ms = 500
    steps = (("journey", 3000), ("arrival", 3000), ("memory", 0))
    intro = ["Remember the day I came to surprise you?"]
    beats = {
        "journey": ["Miles of road, one thought: you."],
        "arrival": ["And then, there you were."],
        "memory": ["Your face when you saw me is my favourite memory."],
    }


class Aug18YesScene(TimedGiftScene):
    scene_id = SceneId.AUG18_YES
    title = "August 18"
    steps = (("waiting", 8000), ("theYes", 3000), ("celebration", 0))
    intro = ["The day everything changed."]
    beats = {
        "waiting": ["I asked. The world held its breath..."],
        "theYes": ["You said yes."],
        "celebration": ["And I have been smiling ever since."],
    }


class DistanceScene(TimedGiftScene):
    scene_id = SceneId.DISTANCE
    title = "Distance Means So Little"
    night = True
    steps = (("distance", 6000), ("connection", 6000), ("promise", 0))
    intro = ["So many miles between us."]
    beats = {
        "distance": ["Different cities, different skies."],
        "connection": ["Same moon, same heartbeat."],
        "promise": ["When someone means so much, distance means so little."],
    }


class FourHeartsScene(TimedGiftScene):
    scene_id = SceneId.FOUR_HEARTS
    title = "Four Hearts, One Family"
    night = True
    steps = (("hearts", 8000), ("unite", 3000), ("family", 0))
    intro = ["Four hearts, each with its own light."]
    beats = {
        "hearts": ["The protector, the heart, the joy, the light."],
        "unite": ["Coming together..."],
        "family": ["One family."],
    }
