# keepsake/ui/theme.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class StoryTheme:
    """
    Centralized constants for scene rendering.

    - No pygame imports.
    - Safe to import from tests and from data modules.
    """

    # ---------- Backgrounds ----------
    bg_top: RGB = (255, 228, 236)
    bg_bottom: RGB = (255, 244, 232)
    bg_night: RGB = (24, 20, 46)

    # ---------- Buttons ----------
    button_fill: RGB = (236, 96, 140)
    button_fill_dim: RGB = (214, 186, 198)
    button_border: RGB = (180, 50, 100)
    button_focus: RGB = (255, 210, 90)
    button_text: RGB = (255, 255, 255)

    # ---------- Text ----------
    text_primary: RGB = (92, 32, 60)
    text_secondary: RGB = (140, 80, 110)
    text_hint: RGB = (170, 130, 150)
    text_night: RGB = (245, 235, 255)

    # ---------- Heart ----------
    heart_border: RGB = (200, 30, 80)
    heart_accent: RGB = (255, 150, 180)
    heart_block: RGB = (236, 60, 110)

    # ---------- Geometry ----------
    pad: int = 16
    border_radius: int = 10
    button_w: int = 220
    button_h: int = 44
    button_gap: int = 12
    cell_px: int = 18

    # Gift menu grid
    menu_cols: int = 3


# Single shared theme instance
THEME = StoryTheme()
