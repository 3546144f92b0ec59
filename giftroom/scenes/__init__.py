# giftroom/scenes/__init__.py
from keepsake.scene.registry import SceneRegistry

from .prelude import DoYouLoveMeScene, DoorScene, EnvelopeScene, IntroScene, LetterScene
from .gift_menu import GiftMenuScene
from .keepsakes import (
    BouquetScene,
    ConstellationScene,
    MemoriesScene,
    PromiseScene,
    TimelineScene,
    TrainJourneyScene,
)
from .timed import Aug18YesScene, Aug29SurpriseScene, DistanceScene, FourHeartsScene
from .pages import CourageScene, LettersOfStrengthScene, OurStoryScene
from .finale import ConstantScene, EndScene, HeartBuildingScene


ALL_SCENES = (
    IntroScene, EnvelopeScene, LetterScene, DoYouLoveMeScene, DoorScene,
    GiftMenuScene,
    BouquetScene, MemoriesScene, PromiseScene, TimelineScene, ConstellationScene, TrainJourneyScene,
    Aug29SurpriseScene, Aug18YesScene, DistanceScene, FourHeartsScene,
    CourageScene, OurStoryScene, LettersOfStrengthScene,
    HeartBuildingScene, EndScene, ConstantScene,
)


def build_scene_registry() -> SceneRegistry:
    registry = SceneRegistry()
    registry.register_all(ALL_SCENES)
    return registry
