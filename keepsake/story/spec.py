from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Tuple

from keepsake.story.state import GiftId


class SceneId(Enum):
    # Prelude
    INTRO = "intro"
    ENVELOPE = "envelope"
    LETTER = "letter"
    DO_YOU_LOVE_ME = "do_you_love_me"
    DOOR = "door"

    # Hub
    GIFT_MENU = "gift_menu"

    # Gift scenes
    BOUQUET = "bouquet"
    MEMORIES = "memories"
    PROMISE = "promise"
    TIMELINE = "timeline"
    TRAIN_JOURNEY = "train_journey"
    CONSTELLATION = "constellation"
    LETTERS_OF_STRENGTH = "letters_of_strength"
    AUG29_SURPRISE = "aug29_surprise"
    COURAGE = "courage"
    AUG18_YES = "aug18_yes"
    DISTANCE = "distance"
    FOUR_HEARTS = "four_hearts"
    OUR_STORY = "our_story"

    # Finale
    HEART_BUILDING = "heart_building"
    END = "end"
    CONSTANT = "constant"


# -----------------------------
# Storyline spec (immutable)
# -----------------------------

@dataclass(frozen=True)
class GiftSpec:
    """One gift on the hub: which flag it sets and which scene it opens."""
    gift_id: GiftId
    scene_id: SceneId
    label: str = ""


@dataclass(frozen=True)
class Storyline:
    """
    Declarative scene graph for one run of the story.

    This is PURE DATA.
    - No pygame
    - No timers
    - No mutable state

    edges lists, per scene, the scenes its controls lead to. The graph
    itself does not enforce edges (navigation is unconditional apart from
    the finale gate); scenes use them to decide what to offer, and
    validate_storyline() checks them for authoring mistakes.
    """
    id: str
    name: str
    entry: SceneId
    hub: SceneId
    finale: SceneId
    gifts: Tuple[GiftSpec, ...]
    edges: Mapping[SceneId, Tuple[SceneId, ...]]

    #: Gifts the finale gate waits for. Empty means "every gift".
    required_gifts: Tuple[GiftId, ...] = ()

    #: Free-form authoring notes (shown in the dev harness).
    notes: str = field(default="", compare=False)

    @property
    def gift_ids(self) -> Tuple[GiftId, ...]:
        return tuple(g.gift_id for g in self.gifts)

    @property
    def scenes(self) -> Tuple[SceneId, ...]:
        seen = dict.fromkeys([self.entry, self.hub, self.finale])
        for src, dsts in self.edges.items():
            seen.setdefault(src)
            for dst in dsts:
                seen.setdefault(dst)
        for gift in self.gifts:
            seen.setdefault(gift.scene_id)
        return tuple(seen)

    def gift_for_scene(self, scene_id: SceneId) -> Optional[GiftId]:
        for gift in self.gifts:
            if gift.scene_id == scene_id:
                return gift.gift_id
        return None

    def gift_spec(self, gift_id: GiftId) -> GiftSpec:
        for gift in self.gifts:
            if gift.gift_id == gift_id:
                return gift
        known = ", ".join(g.gift_id.value for g in self.gifts)
        raise KeyError(f"Gift {gift_id!r} not in storyline {self.id!r}. Known: {known}")
