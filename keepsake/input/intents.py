# keepsake/input/intents.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import pygame

from giftroom.debug.debug_logger import log as story_log


ACTIVATE = "activate"
FOCUS_NEXT = "focus_next"
FOCUS_PREV = "focus_prev"
QUIT = "quit"

ACTIVATE_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE)
NEXT_KEYS = (pygame.K_RIGHT, pygame.K_DOWN)
PREV_KEYS = (pygame.K_LEFT, pygame.K_UP)


@dataclass(frozen=True)
class Intent:
    """
    Device-independent user intent.

    A click and Enter/Space both become ACTIVATE; only the click carries
    a position (keyboard activation targets the focused control).
    """
    kind: str
    pos: Optional[Tuple[int, int]] = None


def intent_from_event(event: pygame.event.Event) -> Optional[Intent]:
    """Translate one pygame event. Returns None for events we ignore."""
    if event.type == pygame.QUIT:
        return Intent(QUIT)

    if event.type == pygame.MOUSEBUTTONDOWN:
        if getattr(event, "button", 1) != 1:
            return None
        pos = tuple(event.pos) if hasattr(event, "pos") else None
        return Intent(ACTIVATE, pos)

    if event.type != pygame.KEYDOWN:
        return None

    key = event.key
    mods = getattr(event, "mod", 0)

    if key == pygame.K_ESCAPE:
        return Intent(QUIT)
    if key in ACTIVATE_KEYS:
        return Intent(ACTIVATE)
    if key == pygame.K_TAB:
        return Intent(FOCUS_PREV if mods & pygame.KMOD_SHIFT else FOCUS_NEXT)
    if key in NEXT_KEYS:
        return Intent(FOCUS_NEXT)
    if key in PREV_KEYS:
        return Intent(FOCUS_PREV)

    story_log("input", f"unmapped key {key}")
    return None
