"""Deterministic rule validation for filled grids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Set

from ..core.exceptions import ValidationError
from ..core.models import EntryIndex, Word
from ..data.dictionary import WordSource
from ..utils.logger import get_logger
from .grid import Grid

LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class GridValidator:
    """Runs deterministic validation over a filled grid."""

    def __init__(self, dictionary: WordSource) -> None:
        self.dictionary = dictionary

    def validate(
        self,
        grid: Grid,
        *,
        unique_words: bool = False,
        fixed_entries: Iterable[EntryIndex] = (),
    ) -> ValidationResult:
        """Check ``grid``; entries in ``fixed_entries`` were given, not chosen, and need not be words."""

        messages: List[str] = []
        try:
            self._check_entries_filled(grid)
            self._check_words_known(grid, set(fixed_entries))
            if unique_words:
                self._check_no_duplicate_words(grid)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_entries_filled(self, grid: Grid) -> None:
        for index in grid.entry_indices():
            if not grid.is_entry_filled(index):
                raise ValidationError(f"Entry {index} is not filled: {grid.get_entry(index)}")

    def _check_words_known(self, grid: Grid, fixed: Set[EntryIndex]) -> None:
        for index in grid.entry_indices():
            if index in fixed:
                continue
            entry = grid.get_entry(index)
            word = entry.to_word() if entry is not None else None
            if word is None or not self.dictionary.contains(word):
                raise ValidationError(f"Invalid word '{entry}' at {index}")

    def _check_no_duplicate_words(self, grid: Grid) -> None:
        seen: Set[Word] = set()
        for index in grid.entry_indices():
            entry = grid.get_entry(index)
            word = entry.to_word() if entry is not None else None
            if word is None:
                continue
            if word in seen:
                raise ValidationError(f"Duplicate word '{word}' at {index}")
            seen.add(word)
