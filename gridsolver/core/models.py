"""Value types shared by the dictionary, the grid and the solver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Optional, Tuple

from ..data.normalization import clean_word, to_letter
from .constants import EMPTY_SYMBOL, ORTHOGONAL_STEPS, CellType, Direction


@dataclass(frozen=True, order=True)
class Word:
    """An immutable run of uppercase ASCII letters.

    The constructor normalizes its input, so ``Word("café") == Word("CAFE")``.
    """

    letters: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "letters", clean_word(self.letters))

    def size(self) -> int:
        return len(self.letters)

    def __len__(self) -> int:
        return len(self.letters)

    def __iter__(self) -> Iterator[str]:
        return iter(self.letters)

    def __getitem__(self, position: int) -> str:
        return self.letters[position]

    def __str__(self) -> str:
        return self.letters


@dataclass(frozen=True)
class Pattern:
    """A word-length template of letters and ``None`` wildcards."""

    masks: Tuple[Optional[str], ...]

    @classmethod
    def from_string(cls, text: str) -> "Pattern":
        """Parse ``"C.T"`` style text; ``.`` is a wildcard, other non-letters are dropped."""

        masks: List[Optional[str]] = []
        for char in text:
            if char == EMPTY_SYMBOL:
                masks.append(None)
                continue
            cleaned = clean_word(char)
            masks.extend(cleaned)
        return cls(tuple(masks))

    @classmethod
    def wildcard(cls, size: int) -> "Pattern":
        return cls((None,) * size)

    def size(self) -> int:
        return len(self.masks)

    def is_unconstrained(self) -> bool:
        return all(mask is None for mask in self.masks)

    def matches(self, word: Word) -> bool:
        if word.size() != self.size():
            return False
        return all(mask is None or mask == letter for mask, letter in zip(self.masks, word.letters))

    def __len__(self) -> int:
        return len(self.masks)

    def __str__(self) -> str:
        return "".join(mask or EMPTY_SYMBOL for mask in self.masks)


class GridCoord(NamedTuple):
    """Zero-based ``(row, col)`` position."""

    row: int
    col: int

    def offset(self, row_offset: int, col_offset: int) -> Optional["GridCoord"]:
        row, col = self.row + row_offset, self.col + col_offset
        if row < 0 or col < 0:
            return None
        return GridCoord(row, col)

    def neighbors(self) -> List["GridCoord"]:
        """Orthogonal neighbours with non-negative coordinates."""

        found = []
        for dr, dc in ORTHOGONAL_STEPS:
            coord = self.offset(dr, dc)
            if coord is not None:
                found.append(coord)
        return found

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


@dataclass(frozen=True, order=True)
class EntryIndex:
    """Crossword numbering of an entry, e.g. ``1 across``."""

    number: int
    direction: Direction

    def __post_init__(self) -> None:
        if self.number < 1:
            raise ValueError(f"Entry numbers start at 1, got {self.number}")

    def __str__(self) -> str:
        return f"{self.number} {self.direction.value.lower()}"


@dataclass(frozen=True)
class Entry:
    """Current contents of an entry: one letter or ``None`` per coordinate."""

    letters: Tuple[Optional[str], ...]

    @classmethod
    def from_word(cls, word: Word) -> "Entry":
        return cls(tuple(word.letters))

    def size(self) -> int:
        return len(self.letters)

    def is_filled(self) -> bool:
        return all(letter is not None for letter in self.letters)

    def to_pattern(self) -> Pattern:
        return Pattern(self.letters)

    def to_word(self) -> Optional[Word]:
        """Return the entry as a word when every position holds a letter."""

        if not self.is_filled():
            return None
        return Word("".join(letter for letter in self.letters if letter))

    def __str__(self) -> str:
        return "".join(letter or EMPTY_SYMBOL for letter in self.letters)


@dataclass(frozen=True)
class Cell:
    """A grid cell: blocked, or fillable with an optional letter."""

    type: CellType = CellType.FILLABLE
    letter: Optional[str] = None

    @classmethod
    def blocked(cls) -> "Cell":
        return cls(CellType.BLOCKED)

    @classmethod
    def fillable(cls, letter: Optional[str] = None) -> "Cell":
        return cls(CellType.FILLABLE, to_letter(letter) if letter is not None else None)

    def is_blocked(self) -> bool:
        return self.type == CellType.BLOCKED

    def is_fillable(self) -> bool:
        return self.type == CellType.FILLABLE

    def is_filled(self) -> bool:
        return self.is_fillable() and self.letter is not None


BLOCKED_CELL = Cell.blocked()
EMPTY_CELL = Cell.fillable()
