# giftroom/storylines.py
from __future__ import annotations

from typing import Dict, Tuple

from keepsake.story.spec import GiftSpec, SceneId as S, Storyline
from keepsake.story.state import GiftId as G


def _hub_edges(hub: S, finale: S, gifts: Tuple[GiftSpec, ...]) -> Dict[S, Tuple[S, ...]]:
    """Hub fans out to every gift scene and the finale; each gift returns."""
    edges: Dict[S, Tuple[S, ...]] = {hub: tuple(g.scene_id for g in gifts) + (finale,)}
    for gift in gifts:
        edges[gift.scene_id] = (hub,)
    return edges


# -----------------------------
# Classic: five gifts, End finale
# -----------------------------
_CLASSIC_GIFTS = (
    GiftSpec(G.BOUQUET, S.BOUQUET, "A Bouquet"),
    GiftSpec(G.MEMORIES, S.MEMORIES, "Our Memories"),
    GiftSpec(G.PROMISE, S.PROMISE, "A Promise"),
    GiftSpec(G.TIMELINE, S.TIMELINE, "Our Timeline"),
    GiftSpec(G.PATH, S.TRAIN_JOURNEY, "The Path"),
)

CLASSIC = Storyline(
    id="classic",
    name="The Gift Room",
    entry=S.INTRO,
    hub=S.GIFT_MENU,
    finale=S.END,
    gifts=_CLASSIC_GIFTS,
    edges={
        S.INTRO: (S.ENVELOPE,),
        S.ENVELOPE: (S.LETTER,),
        S.LETTER: (S.DOOR,),
        S.DOOR: (S.GIFT_MENU,),
        **_hub_edges(S.GIFT_MENU, S.END, _CLASSIC_GIFTS),
        S.END: (S.CONSTANT,),
    },
    notes="Five gifts; the end card leads to the constant page.",
)


# -----------------------------
# Anniversary: twelve gifts, heart finale
# -----------------------------
_ANNIVERSARY_GIFTS = (
    GiftSpec(G.AUG18, S.AUG18_YES, "August 18"),
    GiftSpec(G.AUG29, S.AUG29_SURPRISE, "August 29"),
    GiftSpec(G.LETTERS, S.LETTERS_OF_STRENGTH, "Letters of Strength"),
    GiftSpec(G.DISTANCE, S.DISTANCE, "Distance"),
    GiftSpec(G.BOUQUET, S.BOUQUET, "A Bouquet"),
    GiftSpec(G.MEMORIES, S.MEMORIES, "Our Memories"),
    GiftSpec(G.PROMISE, S.PROMISE, "A Promise"),
    GiftSpec(G.TIMELINE, S.TIMELINE, "Our Timeline"),
    GiftSpec(G.PATH, S.CONSTELLATION, "Our Constellation"),
    GiftSpec(G.COURAGE, S.COURAGE, "Thank You, Courage"),
    GiftSpec(G.FAMILY, S.FOUR_HEARTS, "Four Hearts"),
    GiftSpec(G.STORY, S.OUR_STORY, "Our Story"),
)

ANNIVERSARY = Storyline(
    id="anniversary",
    name="The Anniversary Gift Room",
    entry=S.INTRO,
    hub=S.GIFT_MENU,
    finale=S.HEART_BUILDING,
    gifts=_ANNIVERSARY_GIFTS,
    edges={
        S.INTRO: (S.ENVELOPE,),
        S.ENVELOPE: (S.LETTER,),
        S.LETTER: (S.DO_YOU_LOVE_ME,),
        S.DO_YOU_LOVE_ME: (S.DOOR,),
        S.DOOR: (S.GIFT_MENU,),
        **_hub_edges(S.GIFT_MENU, S.HEART_BUILDING, _ANNIVERSARY_GIFTS),
        S.HEART_BUILDING: (S.CONSTANT,),
    },
    notes="Twelve gifts; pass --require to gate on a subset.",
)


_STORYLINE_TABLE: Dict[str, Storyline] = {
    CLASSIC.id: CLASSIC,
    ANNIVERSARY.id: ANNIVERSARY,
}


def get_storyline(storyline_id: str) -> Storyline:
    try:
        return _STORYLINE_TABLE[storyline_id]
    except KeyError as e:
        known = ", ".join(sorted(_STORYLINE_TABLE.keys()))
        raise KeyError(f"Unknown storyline_id='{storyline_id}'. Known: {known}") from e


def storyline_ids() -> Tuple[str, ...]:
    return tuple(sorted(_STORYLINE_TABLE))
