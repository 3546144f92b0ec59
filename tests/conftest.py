"""
Pytest fixtures for the story engine and gift room tests.

Time is driven by hand through a TimerQueue; nothing here opens a window.
"""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from keepsake.core.clock import TimerQueue
from keepsake.router import EventRouter
from keepsake.story.graph import SceneGraph
from keepsake.story.spec import SceneId
from keepsake.story.state import UnlockTracker
from giftroom.app import build_app
from giftroom.config import StoryConfig
from giftroom.debug import debug_logger
from giftroom.storylines import ANNIVERSARY, CLASSIC


@pytest.fixture(autouse=True)
def quiet_logger(monkeypatch):
    """Keep the story debug channel silent unless a test turns it on."""
    monkeypatch.setattr(debug_logger, "DEBUG_ENABLED", False)
    monkeypatch.setattr(debug_logger, "ENABLED_CATEGORIES", set(debug_logger.ENABLED_CATEGORIES))


@pytest.fixture
def clock():
    """Fresh logical clock at t=0."""
    return TimerQueue()


@pytest.fixture
def router():
    """Fresh event router."""
    return EventRouter()


@pytest.fixture
def events(router):
    """Every event the router publishes, as (topic, payload) tuples."""
    seen = []
    for topic in ("scene.changed", "gift.opened", "gate.unlocked", "scene.revealed"):
        router.subscribe(topic, lambda t, payload: seen.append((t, payload)))
    return seen


@pytest.fixture
def classic_graph(router):
    """Classic storyline graph at its entry scene."""
    tracker = UnlockTracker(CLASSIC.gift_ids)
    return SceneGraph(CLASSIC, tracker, router)


@pytest.fixture
def anniversary_graph(router):
    """Anniversary storyline graph at its entry scene."""
    tracker = UnlockTracker(ANNIVERSARY.gift_ids)
    return SceneGraph(ANNIVERSARY, tracker, router)


@pytest.fixture
def app():
    """Anniversary app, mounted at the gift menu."""
    return build_app(StoryConfig(storyline_id="anniversary", start_scene="gift_menu"))


@pytest.fixture
def classic_app():
    """Classic app, mounted at the entry scene."""
    return build_app(StoryConfig(storyline_id="classic"))


@pytest.fixture
def open_every_gift():
    """Visit each gift scene from the hub and come back."""
    def _open(story_app):
        storyline = story_app.graph.storyline
        for gift in storyline.gifts:
            story_app.graph.go_to(gift.scene_id)
            story_app.graph.go_to(storyline.hub)
        assert story_app.graph.current == SceneId.GIFT_MENU
    return _open
