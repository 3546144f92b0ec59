# giftroom/layouts/heart.py
"""
Heart assembly layout: 23 four-cell blocks, placed in table order.

Shapes are (dx, dy) offsets from each block's anchor; anchors sit on a
grid with y pointing up. AssemblyElement.cells() resolves both.
"""
from __future__ import annotations

from keepsake.choreo.assembly import AssemblyTable, build_table


HEART_SHAPES = [
    ("block1",  [(0, 1), (0, 0), (-1, 0), (-1, -1)]),
    ("block2",  [(0, 1), (0, 0), (-1, 0), (0, -1)]),
    ("block3",  [(-1, 1), (0, 0), (-1, 0), (-1, -1)]),
    ("block4",  [(0, 1), (0, 0), (-1, 0), (-1, -1)]),
    ("block5",  [(-1, 1), (0, 0), (-1, 0), (0, -1)]),
    ("block6",  [(0, -1), (0, 0), (-1, 0), (1, -1)]),
    ("block7",  [(-1, -1), (0, 0), (-1, 0), (1, 0)]),
    ("block8",  [(-1, 1), (0, 0), (-1, 0), (-1, -1)]),
    ("block9",  [(0, -1), (0, 0), (-1, 0), (1, 0)]),
    ("block10", [(-1, 1), (0, 0), (-1, 0), (1, 0)]),
    ("block11", [(2, 0), (0, 0), (-1, 0), (1, 0)]),
    ("block12", [(0, 1), (0, 0), (-1, 0), (0, -1)]),
    ("block13", [(0, 1), (0, 0), (-1, 0), (-1, -1)]),
    ("block14", [(1, 1), (0, 0), (-1, 0), (1, 0)]),
    ("block15", [(1, -1), (0, 0), (-1, 0), (1, 0)]),
    ("block16", [(-1, -1), (0, 0), (-1, 0), (1, 0)]),
    ("block17", [(0, 1), (0, 0), (-1, 0), (0, -1)]),
    ("block18", [(0, 1), (0, 0), (-1, 0), (-1, -1)]),
    ("block19", [(0, -1), (0, 0), (-1, 0), (1, 0)]),
    ("block20", [(1, -1), (0, 0), (-1, 0), (1, 0)]),
    ("block21", [(0, 1), (0, 0), (-1, 0), (-1, -1)]),
    ("block22", [(1, 1), (0, 0), (-1, 0), (1, 0)]),
    ("block23", [(0, 2), (0, 0), (0, -1), (0, 1)]),
]

HEART_ANCHORS = {
    "block1": (5, 3),   "block2": (5, 1),   "block3": (3, 4),   "block4": (3, 2),
    "block5": (3, -1),  "block6": (2, 5),   "block7": (2, 1),   "block8": (1, -1),
    "block9": (1, -3),  "block10": (1, 2),  "block11": (0, 3),  "block12": (0, 0),
    "block13": (-1, -4), "block14": (0, -2), "block15": (-2, 4), "block16": (-2, 2),
    "block17": (-2, 0), "block18": (-3, -2), "block19": (-4, 0), "block20": (-3, 5),
    "block21": (-5, 3), "block22": (-4, 1), "block23": (-6, 1),
}

HEART_TABLE: AssemblyTable = build_table(HEART_SHAPES, HEART_ANCHORS)
