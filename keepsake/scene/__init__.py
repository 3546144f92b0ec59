from .base import Button, Scene, SceneContext
from .registry import SceneRegistry
from .director import SceneDirector
