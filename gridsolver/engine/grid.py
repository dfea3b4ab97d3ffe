"""Grid representation and entry topology."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from ..core.constants import (
    BLOCKED_GLYPH,
    BLOCKED_SYMBOL,
    EMPTY_GLYPH,
    EMPTY_SYMBOL,
    MIN_ENTRY_LENGTH,
    Bounds,
    CellType,
    Direction,
)
from ..core.exceptions import GridLoadError
from ..core.models import EMPTY_CELL, Cell, Entry, EntryIndex, GridCoord, Word
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

CoordLike = Union[GridCoord, Tuple[int, int]]


class Grid:
    """A rectangular grid of cells with its derived entries.

    Entries and their crossings are computed from the blocked/fillable
    layout by :meth:`rebuild`. Writing letters never changes the topology;
    changing a cell between blocked and fillable does.
    """

    def __init__(self, width: int, height: int, cells: Optional[Iterable[Cell]] = None) -> None:
        if width <= 0 or height <= 0:
            raise GridLoadError(f"Grid dimensions must be positive, got {width}x{height}")
        self.bounds = Bounds(rows=height, cols=width)
        size = width * height
        self.cells: List[Cell] = list(cells) if cells is not None else []
        del self.cells[size:]
        self.cells.extend([EMPTY_CELL] * (size - len(self.cells)))
        self._entries: Dict[EntryIndex, List[GridCoord]] = {}
        self._perpendicular: Dict[EntryIndex, List[EntryIndex]] = {}
        self.rebuild()

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------
    @classmethod
    def blank(cls, width: int, height: int) -> "Grid":
        return cls(width, height)

    @classmethod
    def from_cells(cls, cells: Iterable[Cell], width: int, height: int) -> "Grid":
        """Build from row-major cells, padding with empty cells or truncating."""

        return cls(width, height, cells)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Cell]]) -> "Grid":
        height = len(rows)
        width = max((len(row) for row in rows), default=0)
        cells: List[Cell] = []
        for row in rows:
            cells.extend(row)
            cells.extend([EMPTY_CELL] * (width - len(row)))
        return cls(width, height, cells)

    def copy(self) -> "Grid":
        """Return an independent copy sharing the (immutable) topology."""

        clone = Grid.__new__(Grid)
        clone.bounds = self.bounds
        clone.cells = list(self.cells)
        clone._entries = self._entries
        clone._perpendicular = self._perpendicular
        return clone

    # ------------------------------------------------------------------
    # Cells
    # ------------------------------------------------------------------
    @property
    def width(self) -> int:
        return self.bounds.cols

    @property
    def height(self) -> int:
        return self.bounds.rows

    def _offset(self, coord: CoordLike) -> Optional[int]:
        row, col = coord
        if not self.bounds.contains(row, col):
            return None
        return row * self.bounds.cols + col

    def get_cell(self, coord: CoordLike) -> Optional[Cell]:
        offset = self._offset(coord)
        if offset is None:
            return None
        return self.cells[offset]

    def cell(self, row: int, col: int) -> Optional[Cell]:
        return self.get_cell((row, col))

    def set_cell(self, coord: CoordLike, value: Cell) -> None:
        offset = self._offset(coord)
        if offset is None:
            return
        layout_changed = self.cells[offset].type != value.type
        self.cells[offset] = value
        if layout_changed:
            self.rebuild()

    def rows(self) -> List[List[Cell]]:
        width = self.bounds.cols
        return [self.cells[r * width:(r + 1) * width] for r in range(self.bounds.rows)]

    def cols(self) -> List[List[Cell]]:
        width = self.bounds.cols
        return [self.cells[c::width] for c in range(width)]

    @property
    def filled_ratio(self) -> float:
        fillable = [cell for cell in self.cells if cell.is_fillable()]
        if not fillable:
            return 0.0
        return sum(1 for cell in fillable if cell.letter is not None) / len(fillable)

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------
    def entry_indices(self) -> List[EntryIndex]:
        return sorted(self._entries)

    def entries(self) -> List[Entry]:
        return [self._read(coords) for _, coords in sorted(self._entries.items())]

    def get_entry_coords(self, index: EntryIndex) -> Optional[List[GridCoord]]:
        coords = self._entries.get(index)
        return list(coords) if coords is not None else None

    def get_entry(self, index: EntryIndex) -> Optional[Entry]:
        coords = self._entries.get(index)
        if coords is None:
            return None
        return self._read(coords)

    def _read(self, coords: Sequence[GridCoord]) -> Entry:
        width = self.bounds.cols
        return Entry(tuple(self.cells[row * width + col].letter for row, col in coords))

    def _write(self, coords: Sequence[GridCoord], letters: Iterable[Optional[str]]) -> None:
        width = self.bounds.cols
        for (row, col), letter in zip(coords, letters):
            self.cells[row * width + col] = Cell(CellType.FILLABLE, letter)

    def set_entry(self, index: EntryIndex, entry: Entry) -> None:
        coords = self._entries.get(index)
        if coords is not None:
            self._write(coords, entry.letters)

    def fill_entry(self, index: EntryIndex, word: Word) -> None:
        coords = self._entries.get(index)
        if coords is not None:
            self._write(coords, word.letters)

    def clear_entry(self, index: EntryIndex) -> None:
        coords = self._entries.get(index)
        if coords is not None:
            self._write(coords, [None] * len(coords))

    def entries_perp_to(self, index: EntryIndex) -> List[EntryIndex]:
        return list(self._perpendicular.get(index, []))

    def is_entry_filled(self, index: EntryIndex) -> bool:
        coords = self._entries.get(index)
        if coords is None:
            return False
        return self._read(coords).is_filled()

    def is_filled(self) -> bool:
        return all(cell.is_blocked() or cell.letter is not None for cell in self.cells)

    # ------------------------------------------------------------------
    # Topology
    # ------------------------------------------------------------------
    def _runs(self, direction: Direction) -> List[List[GridCoord]]:
        """Collect maximal runs of fillable cells long enough to be entries."""

        if direction == Direction.ACROSS:
            lines = [
                [GridCoord(r, c) for c in range(self.bounds.cols)] for r in range(self.bounds.rows)
            ]
        else:
            lines = [
                [GridCoord(r, c) for r in range(self.bounds.rows)] for c in range(self.bounds.cols)
            ]

        runs: List[List[GridCoord]] = []
        for line in lines:
            current: List[GridCoord] = []
            for coord in line:
                if self.cells[coord.row * self.bounds.cols + coord.col].is_fillable():
                    current.append(coord)
                    continue
                if len(current) >= MIN_ENTRY_LENGTH:
                    runs.append(current)
                current = []
            if len(current) >= MIN_ENTRY_LENGTH:
                runs.append(current)
        runs.sort()
        return runs

    def rebuild(self) -> None:
        """Recompute entry numbering and crossings from the layout."""

        across_starts = {run[0]: run for run in self._runs(Direction.ACROSS)}
        down_starts = {run[0]: run for run in self._runs(Direction.DOWN)}

        entries: Dict[EntryIndex, List[GridCoord]] = {}
        counter = 1
        for row in range(self.bounds.rows):
            for col in range(self.bounds.cols):
                coord = GridCoord(row, col)
                started = False
                if coord in across_starts:
                    entries[EntryIndex(counter, Direction.ACROSS)] = across_starts[coord]
                    started = True
                if coord in down_starts:
                    entries[EntryIndex(counter, Direction.DOWN)] = down_starts[coord]
                    started = True
                if started:
                    counter += 1

        owners: Dict[GridCoord, List[EntryIndex]] = defaultdict(list)
        for index, coords in entries.items():
            for coord in coords:
                owners[coord].append(index)

        perpendicular: Dict[EntryIndex, List[EntryIndex]] = {}
        for index, coords in entries.items():
            crossing = {other for coord in coords for other in owners[coord] if other != index}
            perpendicular[index] = sorted(crossing)

        self._entries = entries
        self._perpendicular = perpendicular
        LOGGER.debug(
            "Rebuilt %sx%s grid topology: %s entries",
            self.bounds.cols,
            self.bounds.rows,
            len(entries),
        )

    # ------------------------------------------------------------------
    # Rendering & serialization
    # ------------------------------------------------------------------
    def render(self) -> str:
        """Blocked cells as a solid block, empty cells blank, one row per line."""

        lines = []
        for row in self.rows():
            lines.append("".join(_glyph(cell) for cell in row))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def to_jsonable(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "rows": [
                "".join(cell.letter or (BLOCKED_SYMBOL if cell.is_blocked() else EMPTY_SYMBOL) for cell in row)
                for row in self.rows()
            ],
            "entries": [
                {
                    "number": index.number,
                    "direction": index.direction.value,
                    "start": list(self._entries[index][0]),
                    "length": len(self._entries[index]),
                    "text": str(self._read(self._entries[index])),
                }
                for index in self.entry_indices()
            ],
        }


def _glyph(cell: Cell) -> str:
    if cell.is_blocked():
        return BLOCKED_GLYPH
    return cell.letter or EMPTY_GLYPH
