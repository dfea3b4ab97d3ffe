"""Randomized backtracking solver for filling grid entries."""

from __future__ import annotations

import logging
import random
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Set

from ..core.constants import DEFAULT_BRANCHING, DEFAULT_MIN_RANK
from ..core.models import Entry, EntryIndex, Pattern, Word
from ..data.dictionary import RankedWordSource, WordSource
from ..utils.logger import get_logger
from .grid import Grid

LOGGER = get_logger(__name__)


@dataclass
class SolverConfig:
    """Knobs for a single solving attempt.

    ``max_branching`` caps how many candidates are tried at each node, so a
    failed :meth:`GridSolver.solve` does not prove the grid unfillable.
    ``unique_words`` forbids placing a word that is already in the grid.
    """

    max_branching: int = DEFAULT_BRANCHING
    min_rank: int = DEFAULT_MIN_RANK
    unique_words: bool = False
    rng_seed: Optional[int] = None

    def make_rng(self) -> random.Random:
        return random.Random(self.rng_seed)


@dataclass(frozen=True)
class FillRecord:
    """Undo log record: the entry filled, the word used, and what it held before.

    ``was_unfilled`` tells undo whether the entry goes back to the unfilled set.
    """

    index: EntryIndex
    word: Word
    previous: Entry
    was_unfilled: bool = True


class GridSolver:
    """Fills a private copy of a grid from a shared dictionary.

    The solver always branches on the unfilled entry with the fewest
    candidates, shuffles those candidates and tries a bounded prefix of them.
    The search is incomplete: when :meth:`solve` returns ``False`` callers
    should build a fresh solver (or call :meth:`reset`) and try again.

    :meth:`solve` recurses once per fill, so grids with more entries than the
    interpreter recursion limit raise ``RecursionError``;
    :func:`~gridsolver.engine.runner.solve_with_retries` reports that as a
    :class:`SolveError`.
    """

    def __init__(
        self,
        grid: Grid,
        dictionary: WordSource,
        config: Optional[SolverConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or SolverConfig()
        self.dictionary = dictionary
        self.rng = rng or self.config.make_rng()
        self._source = grid.copy()
        self._initialize(self._source)

    def _initialize(self, grid: Grid) -> None:
        self.grid = grid.copy()
        self.placed_words: Counter[Word] = Counter()
        self.unfilled_entries: Set[EntryIndex] = set()
        self.possible_fills: Dict[EntryIndex, List[Word]] = {}
        self.changes: List[FillRecord] = []
        self.fill_count = 0

        for index in self.grid.entry_indices():
            entry = self.grid.get_entry(index)
            word = entry.to_word() if entry is not None else None
            if word is not None:
                self.placed_words[word] += 1
                continue
            self.unfilled_entries.add(index)
            self._update_possible_fills(index)
        LOGGER.debug(
            "Solver initialised: %s unfilled entries, %s pre-filled",
            len(self.unfilled_entries),
            sum(self.placed_words.values()),
        )

    def new_grid(self, grid: Grid) -> None:
        """Discard all state and start over on ``grid``, keeping the dictionary and RNG."""

        self._source = grid.copy()
        self._initialize(self._source)

    def reset(self) -> None:
        """Start over on the grid this solver was built from."""

        self._initialize(self._source)

    # ------------------------------------------------------------------
    # Candidate bookkeeping
    # ------------------------------------------------------------------
    def _candidates(self, pattern: Pattern) -> List[Word]:
        return self.dictionary.lookup(pattern)

    def _update_possible_fills(self, index: EntryIndex) -> None:
        entry = self.grid.get_entry(index)
        if entry is None:
            return
        self.possible_fills[index] = self._candidates(entry.to_pattern())

    def _update_crossings(self, index: EntryIndex) -> None:
        for perp in self.grid.entries_perp_to(index):
            if perp in self.unfilled_entries:
                self._update_possible_fills(perp)

    def candidates_for(self, index: EntryIndex) -> List[Word]:
        return list(self.possible_fills.get(index, []))

    @property
    def added_words(self) -> Set[Word]:
        return set(self.placed_words)

    @property
    def solved(self) -> bool:
        return not self.unfilled_entries

    # ------------------------------------------------------------------
    # Fill / undo
    # ------------------------------------------------------------------
    def fill(self, index: EntryIndex, word: Word) -> None:
        previous = self.grid.get_entry(index)
        if previous is None:
            return
        if previous.size() != word.size():
            raise ValueError(f"Word {word} does not fit entry {index} of length {previous.size()}")

        was_unfilled = index in self.unfilled_entries
        self.changes.append(FillRecord(index, word, previous, was_unfilled))
        replaced = None if was_unfilled else previous.to_word()
        if replaced is not None:
            self._discard_placed(replaced)
        self.grid.fill_entry(index, word)
        self.possible_fills.pop(index, None)
        self.unfilled_entries.discard(index)
        self.placed_words[word] += 1
        self.fill_count += 1
        self._update_crossings(index)

    def undo_last_fill(self) -> None:
        if not self.changes:
            return
        record = self.changes.pop()
        self.grid.set_entry(record.index, record.previous)
        self._discard_placed(record.word)
        if record.was_unfilled:
            self.unfilled_entries.add(record.index)
            self._update_possible_fills(record.index)
        else:
            replaced = record.previous.to_word()
            if replaced is not None:
                self.placed_words[replaced] += 1
        self._update_crossings(record.index)

    def _discard_placed(self, word: Word) -> None:
        self.placed_words[word] -= 1
        if self.placed_words[word] <= 0:
            del self.placed_words[word]

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def _most_constrained(self) -> EntryIndex:
        return min(sorted(self.unfilled_entries), key=lambda index: len(self.possible_fills[index]))

    def _order_candidates(self, candidates: List[Word]) -> None:
        self.rng.shuffle(candidates)

    def _branch_candidates(self, index: EntryIndex) -> List[Word]:
        candidates = list(self.possible_fills[index])
        if self.config.unique_words:
            candidates = [word for word in candidates if word not in self.placed_words]
        self._order_candidates(candidates)
        return candidates[: self.config.max_branching]

    def solve(self) -> bool:
        """Depth-first search; on success the grid is left filled."""

        if not self.unfilled_entries:
            return True

        index = self._most_constrained()
        candidates = self._branch_candidates(index)
        if LOGGER.isEnabledFor(logging.DEBUG):
            LOGGER.debug(
                "Branching on %s: trying %s of %s candidates",
                index,
                len(candidates),
                len(self.possible_fills[index]),
            )
        if not candidates:
            LOGGER.debug("No candidates left for %s", index)
            return False

        for word in candidates:
            self.fill(index, word)
            if self.solve():
                return True
            self.undo_last_fill()
        return False

    def __str__(self) -> str:
        return self.grid.render()


class RankedGridSolver(GridSolver):
    """Solver variant drawing only well-ranked words, best first.

    Candidates come from ``lookup_range`` with ``config.min_rank`` as the
    inclusive lower bound and are tried in descending rank order without
    shuffling.
    """

    dictionary: RankedWordSource

    def __init__(
        self,
        grid: Grid,
        dictionary: RankedWordSource,
        config: Optional[SolverConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(grid, dictionary, config, rng)

    def _candidates(self, pattern: Pattern) -> List[Word]:
        return self.dictionary.lookup_range(pattern, lower_bound=self.config.min_rank)

    def _order_candidates(self, candidates: List[Word]) -> None:
        return None

    def solve_ranked(self) -> bool:
        return self.solve()

    def average_score(self) -> float:
        """Mean rank of the distinct words in the grid; unranked words count as 0."""

        words = list(self.placed_words)
        if not words:
            return 0.0
        return sum(self.dictionary.get_score(word) or 0 for word in words) / len(words)
