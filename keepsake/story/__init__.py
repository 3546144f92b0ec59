from .state import GiftId, UnlockTracker
from .spec import GiftSpec, SceneId, Storyline
from .graph import SceneGraph
from .validate import validate_storyline
