# keepsake/story/state.py

from __future__ import annotations
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Tuple

from giftroom.debug.debug_logger import StoryDebug


class GiftId(Enum):
    BOUQUET = "bouquet"
    MEMORIES = "memories"
    PROMISE = "promise"
    TIMELINE = "timeline"
    PATH = "path"
    LETTERS = "letters"
    AUG29 = "aug29"
    COURAGE = "courage"
    AUG18 = "aug18"
    DISTANCE = "distance"
    FAMILY = "family"
    STORY = "story"


class UnlockTracker:
    """
    One monotonic flag per gift, plus the derived gate predicate.

    - gift_ids: the closed set this run knows about (storyline gifts).
    - required: the subset that all_opened() checks (default: all of them).

    Flags are only ever set, never cleared. An id outside the set is a
    programming error and raises KeyError.
    """

    def __init__(
        self,
        gift_ids: Iterable[GiftId],
        required: Optional[Iterable[GiftId]] = None,
    ) -> None:
        self.gift_ids: Tuple[GiftId, ...] = tuple(dict.fromkeys(gift_ids))
        if not self.gift_ids:
            raise ValueError("UnlockTracker needs at least one gift id")

        req = tuple(dict.fromkeys(required)) if required is not None else ()
        req = req or self.gift_ids
        unknown = [g for g in req if g not in self.gift_ids]
        if unknown:
            raise KeyError(f"Required gifts not in gift set: {[g.value for g in unknown]}")
        self.required: Tuple[GiftId, ...] = req

        self._opened: dict[GiftId, bool] = {g: False for g in self.gift_ids}

    def _check(self, gift: GiftId) -> None:
        if gift not in self._opened:
            known = ", ".join(g.value for g in self.gift_ids)
            raise KeyError(f"Unknown gift {gift!r}. Known: {known}")

    def mark_opened(self, gift: GiftId) -> bool:
        """Set the flag. Returns True only the first time."""
        self._check(gift)
        if self._opened[gift]:
            return False
        self._opened[gift] = True
        return True

    def is_opened(self, gift: GiftId) -> bool:
        self._check(gift)
        return self._opened[gift]

    def all_opened(self) -> bool:
        return all(self._opened[g] for g in self.required)

    def opened(self) -> FrozenSet[GiftId]:
        return frozenset(g for g, v in self._opened.items() if v)

    def remaining(self) -> Tuple[GiftId, ...]:
        """Required gifts still closed, in declaration order."""
        return tuple(g for g in self.required if not self._opened[g])

    def debug(self) -> None:
        StoryDebug().unlock_snapshot(self)
