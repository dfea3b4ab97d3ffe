"""Grid layout parsing.

A layout is a ``width,height`` header line followed by the cells in
row-major order: ``#`` for a blocked cell, ``.`` for an empty one and a
letter for a pre-filled one. Whitespace between cells is ignored.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from ..core.constants import BLOCKED_SYMBOL, EMPTY_SYMBOL
from ..core.exceptions import GridLoadError, InvalidLetterError
from ..core.models import BLOCKED_CELL, EMPTY_CELL, Cell
from ..engine.grid import Grid
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


def _parse_header(line: str) -> Tuple[int, int]:
    parts = [part.strip() for part in line.split(",")]
    if len(parts) != 2:
        raise GridLoadError(f"Expected 'width,height' header, got {line!r}")
    try:
        width, height = int(parts[0]), int(parts[1])
    except ValueError as exc:
        raise GridLoadError(f"Non-numeric grid dimensions in {line!r}") from exc
    if width <= 0 or height <= 0:
        raise GridLoadError(f"Grid dimensions must be positive, got {width}x{height}")
    return width, height


def _parse_cell(char: str, position: int) -> Cell:
    if char == BLOCKED_SYMBOL:
        return BLOCKED_CELL
    if char == EMPTY_SYMBOL:
        return EMPTY_CELL
    if char.isalpha():
        try:
            return Cell.fillable(char)
        except InvalidLetterError as exc:
            raise GridLoadError(f"Unusable letter {char!r} at cell {position}") from exc
    raise GridLoadError(f"Unrecognised layout symbol {char!r} at cell {position}")


def parse_layout(text: str) -> Grid:
    """Build a :class:`Grid` from layout text."""

    header, _, body = text.strip().partition("\n")
    if not header:
        raise GridLoadError("Empty grid layout")
    width, height = _parse_header(header)

    cells: List[Cell] = []
    for char in body:
        if char.isspace():
            continue
        cells.append(_parse_cell(char, len(cells)))

    if len(cells) != width * height:
        raise GridLoadError(
            f"Layout declares {width}x{height} = {width * height} cells but has {len(cells)}"
        )
    grid = Grid.from_cells(cells, width, height)
    LOGGER.debug("Parsed %sx%s layout with %s entries", width, height, len(grid.entry_indices()))
    return grid


def load_grid(path: Path | str) -> Grid:
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise GridLoadError(f"Cannot read grid layout {source}: {exc}") from exc
    return parse_layout(text)
