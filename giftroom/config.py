# giftroom/config.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from keepsake.story.spec import SceneId
from keepsake.story.state import GiftId


def _lookup(enum_cls, value: str, what: str):
    try:
        return enum_cls(value)
    except ValueError as e:
        known = ", ".join(m.value for m in enum_cls)
        raise KeyError(f"Unknown {what}={value!r}. Known: {known}") from e


@dataclass
class StoryConfig:
    storyline_id: str = "anniversary"

    # Gate size override: gift id strings ("bouquet", ...). None = storyline default.
    required_gifts: Optional[Tuple[str, ...]] = None

    # Dev jump: start the run at this scene id instead of the entry.
    start_scene: Optional[str] = None

    window_size: Tuple[int, int] = (960, 720)
    fps: int = 60

    # None keeps the logger defaults
    debug_categories: Optional[Tuple[str, ...]] = None

    def __post_init__(self) -> None:
        if self.fps <= 0:
            raise ValueError(f"fps must be > 0 (got {self.fps!r})")
        w, h = self.window_size
        if w <= 0 or h <= 0:
            raise ValueError(f"window_size must be positive (got {self.window_size!r})")

    def required_gift_ids(self) -> Optional[Tuple[GiftId, ...]]:
        if self.required_gifts is None:
            return None
        return tuple(_lookup(GiftId, g, "gift_id") for g in self.required_gifts)

    def start_scene_id(self) -> Optional[SceneId]:
        if self.start_scene is None:
            return None
        return _lookup(SceneId, self.start_scene, "scene_id")
