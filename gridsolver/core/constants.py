"""Shared constants and enumerations for the grid solver."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class CellType(str, Enum):
    """All supported cell types in the grid."""

    BLOCKED = "BLOCKED"
    FILLABLE = "FILLABLE"


class Direction(str, Enum):
    """Entry directions supported by the grid."""

    ACROSS = "ACROSS"
    DOWN = "DOWN"


ORTHOGONAL_STEPS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))

# Shortest run of fillable cells that counts as an entry.
MIN_ENTRY_LENGTH = 3

# Layout file symbols.
BLOCKED_SYMBOL = "#"
EMPTY_SYMBOL = "."

# Rendering glyphs.
BLOCKED_GLYPH = "█"
EMPTY_GLYPH = " "

# Search defaults.
DEFAULT_BRANCHING = 5
DEFAULT_MIN_RANK = 50
DEFAULT_SCORE = 0
RANK_SEPARATOR = ";"


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
