# keepsake/ui/widgets.py
from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

import pygame

from keepsake.ui.theme import THEME, RGB

Fonts = Dict[str, pygame.font.Font]


def wrap_text(font: pygame.font.Font, text: str, max_width: int) -> List[str]:
    """Greedy word wrap against the font's rendered width."""
    lines: List[str] = []
    current = ""
    for word in (text or "").split(" "):
        test = (current + " " + word).strip()
        if font.size(test)[0] > max_width and current:
            lines.append(current)
            current = word
        else:
            current = test
    if current:
        lines.append(current)
    return lines


def draw_background(surface: pygame.Surface, top: RGB = THEME.bg_top, bottom: RGB = THEME.bg_bottom) -> None:
    """Vertical two-colour gradient, one line per row."""
    w, h = surface.get_size()
    for y in range(h):
        t = y / max(1, h - 1)
        colour = tuple(int(a + (b - a) * t) for a, b in zip(top, bottom))
        pygame.draw.line(surface, colour, (0, y), (w, y))


def draw_text_block(
    surface: pygame.Surface,
    font: pygame.font.Font,
    lines: Iterable[str],
    *,
    center_x: int,
    top: int,
    colour: RGB = THEME.text_primary,
    max_width: int = 0,
) -> int:
    """
    Render centred, wrapped lines. Returns the y just below the block.
    """
    y = top
    line_h = font.get_height() + 4
    for raw in lines:
        wrapped = wrap_text(font, raw, max_width) if max_width else [raw]
        for line in wrapped or [""]:
            text = font.render(line, True, colour)
            surface.blit(text, text.get_rect(midtop=(center_x, y)))
            y += line_h
    return y


def draw_button(
    surface: pygame.Surface,
    font: pygame.font.Font,
    rect: pygame.Rect,
    label: str,
    *,
    focused: bool = False,
    dimmed: bool = False,
) -> None:
    fill = THEME.button_fill_dim if dimmed else THEME.button_fill
    pygame.draw.rect(surface, fill, rect, border_radius=THEME.border_radius)
    border = THEME.button_focus if focused else THEME.button_border
    pygame.draw.rect(surface, border, rect, width=3 if focused else 2, border_radius=THEME.border_radius)
    text = font.render(label, True, THEME.button_text)
    surface.blit(text, text.get_rect(center=rect.center))


def draw_cells(
    surface: pygame.Surface,
    cells: Iterable[Tuple[int, int]],
    *,
    origin: Tuple[int, int],
    colour: RGB,
    cell_px: int = THEME.cell_px,
) -> None:
    """Draw grid cells (x right, y down) around an origin in pixels."""
    ox, oy = origin
    for cx, cy in cells:
        rect = pygame.Rect(ox + cx * cell_px, oy + cy * cell_px, cell_px - 1, cell_px - 1)
        pygame.draw.rect(surface, colour, rect, border_radius=3)
