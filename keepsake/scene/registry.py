# keepsake/scene/registry.py
from __future__ import annotations

from typing import Dict, Iterable, List, Type

from keepsake.scene.base import Scene, SceneContext
from keepsake.story.spec import SceneId


class SceneRegistry:
    """SceneId -> Scene subclass. One class per id."""

    def __init__(self) -> None:
        self._table: Dict[SceneId, Type[Scene]] = {}

    def register(self, cls: Type[Scene], scene_id: SceneId | None = None) -> Type[Scene]:
        scene_id = scene_id or cls.scene_id
        if scene_id in self._table:
            raise ValueError(f"Scene {scene_id.value!r} already registered to {self._table[scene_id].__name__}")
        self._table[scene_id] = cls
        return cls

    def register_all(self, classes: Iterable[Type[Scene]]) -> None:
        for cls in classes:
            self.register(cls)

    def __contains__(self, scene_id: SceneId) -> bool:
        return scene_id in self._table

    def missing(self, scene_ids: Iterable[SceneId]) -> List[SceneId]:
        return [s for s in scene_ids if s not in self._table]

    def build(self, scene_id: SceneId, ctx: SceneContext) -> Scene:
        try:
            cls = self._table[scene_id]
        except KeyError as e:
            known = ", ".join(sorted(s.value for s in self._table))
            raise KeyError(f"Unknown scene_id={scene_id!r}. Known: {known}") from e
        return cls(ctx)
