"""Pattern-indexed word storage and candidate retrieval."""

from __future__ import annotations

from collections import defaultdict
from itertools import count
from typing import Dict, Iterable, Iterator, List, Optional, Protocol, Set, Tuple, Union

from ..core.constants import DEFAULT_SCORE
from ..core.models import Pattern, Word
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

WordLike = Union[Word, str]


class WordSource(Protocol):
    """Capabilities the solver needs from a dictionary."""

    def add(self, word: WordLike) -> None:
        ...

    def remove(self, word: WordLike) -> None:
        ...

    def contains(self, word: WordLike) -> bool:
        ...

    def lookup(self, pattern: Pattern) -> List[Word]:
        ...


class RankedWordSource(WordSource, Protocol):
    """A word source that also tracks an integer rank per word."""

    def get_score(self, word: WordLike) -> Optional[int]:
        ...

    def set_score(self, word: WordLike, score: int) -> None:
        ...

    def lookup_range(
        self,
        pattern: Pattern,
        lower_bound: Optional[int] = None,
        upper_bound: Optional[int] = None,
    ) -> List[Word]:
        ...


def _as_word(word: WordLike) -> Word:
    return word if isinstance(word, Word) else Word(word)


class Dictionary:
    """Words partitioned by length with a positional letter index.

    Pattern lookups are memoized; the memo is dropped on every ``add`` or
    ``remove`` so results always reflect the current contents. Results keep
    insertion order.
    """

    def __init__(self, words: Iterable[WordLike] = ()) -> None:
        self._words_by_size: Dict[int, List[Word]] = defaultdict(list)
        self._order: Dict[Word, int] = {}
        self._counter = count()
        # Positional index: length -> (position, letter) -> set of words
        self._position_index: Dict[int, Dict[Tuple[int, str], Set[Word]]] = defaultdict(
            lambda: defaultdict(set)
        )
        self._lookups: Dict[Pattern, List[Word]] = {}
        for word in words:
            self.add(word)

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------
    def add(self, word: WordLike) -> None:
        word = _as_word(word)
        if not word.size() or word in self._order:
            return
        self._order[word] = next(self._counter)
        self._words_by_size[word.size()].append(word)
        length_index = self._position_index[word.size()]
        for pos, char in enumerate(word.letters):
            length_index[(pos, char)].add(word)
        self._lookups.clear()

    def remove(self, word: WordLike) -> None:
        word = _as_word(word)
        if word not in self._order:
            return
        del self._order[word]
        self._words_by_size[word.size()].remove(word)
        length_index = self._position_index[word.size()]
        for pos, char in enumerate(word.letters):
            length_index[(pos, char)].discard(word)
        self._lookups.clear()

    def contains(self, word: WordLike) -> bool:
        return _as_word(word) in self._order

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, (Word, str)):
            return False
        return self.contains(word)

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[Word]:
        return iter(self._order)

    def sizes(self) -> List[int]:
        return sorted(size for size, words in self._words_by_size.items() if words)

    def words_of_size(self, size: int) -> List[Word]:
        return list(self._words_by_size.get(size, []))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def lookup(self, pattern: Pattern) -> List[Word]:
        """Return every word of ``pattern.size()`` that ``pattern`` matches."""

        if pattern.is_unconstrained():
            return self.words_of_size(pattern.size())

        cached = self._lookups.get(pattern)
        if cached is None:
            cached = self._index_lookup(pattern)
            self._lookups[pattern] = cached
        return list(cached)

    def _index_lookup(self, pattern: Pattern) -> List[Word]:
        """Use positional index to find matching words via set intersection."""

        length_index = self._position_index.get(pattern.size())
        if not length_index:
            return []

        constraints: List[Set[Word]] = []
        for pos, letter in enumerate(pattern.masks):
            if letter is None:
                continue
            match_set = length_index.get((pos, letter))
            if not match_set:
                return []
            constraints.append(match_set)

        # Intersect smallest sets first for speed
        constraints.sort(key=len)
        result = set(constraints[0])
        for match_set in constraints[1:]:
            result &= match_set
            if not result:
                return []
        return sorted(result, key=self._order.__getitem__)


class RankedDictionary:
    """A :class:`Dictionary` paired with an integer rank per word.

    Both :meth:`lookup` and :meth:`lookup_range` return words by descending
    rank; equal ranks keep insertion order.
    """

    def __init__(self, pairs: Iterable[Tuple[WordLike, Optional[int]]] = ()) -> None:
        self._words = Dictionary()
        self._scores: Dict[Word, int] = {}
        self._ranked_lookups: Dict[Pattern, List[Word]] = {}
        for word, score in pairs:
            self.add(word, score)

    def add(self, word: WordLike, score: Optional[int] = None) -> None:
        """Add ``word``; ``score`` defaults to ``DEFAULT_SCORE`` for new words."""

        word = _as_word(word)
        if not word.size():
            return
        if self._words.contains(word):
            if score is not None:
                self.set_score(word, score)
            return
        self._words.add(word)
        self._scores[word] = DEFAULT_SCORE if score is None else int(score)
        self._ranked_lookups.clear()

    def remove(self, word: WordLike) -> None:
        word = _as_word(word)
        if not self._words.contains(word):
            return
        self._words.remove(word)
        self._scores.pop(word, None)
        self._ranked_lookups.clear()

    def contains(self, word: WordLike) -> bool:
        return self._words.contains(word)

    def get_score(self, word: WordLike) -> Optional[int]:
        return self._scores.get(_as_word(word))

    def set_score(self, word: WordLike, score: int) -> None:
        word = _as_word(word)
        if word not in self._scores:
            LOGGER.debug("Ignoring score for unknown word %s", word)
            return
        self._scores[word] = int(score)
        self._ranked_lookups.clear()

    def __contains__(self, word: object) -> bool:
        return self._words.__contains__(word)

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[Word]:
        return iter(self._words)

    def items(self) -> Iterator[Tuple[Word, int]]:
        for word in self._words:
            yield word, self._scores[word]

    def lookup(self, pattern: Pattern) -> List[Word]:
        cached = self._ranked_lookups.get(pattern)
        if cached is None:
            cached = sorted(self._words.lookup(pattern), key=lambda w: -self._scores[w])
            self._ranked_lookups[pattern] = cached
        return list(cached)

    def lookup_range(
        self,
        pattern: Pattern,
        lower_bound: Optional[int] = None,
        upper_bound: Optional[int] = None,
    ) -> List[Word]:
        """Like :meth:`lookup`, keeping ranks within the inclusive bounds."""

        words = self.lookup(pattern)
        if lower_bound is None and upper_bound is None:
            return words
        return [
            word
            for word in words
            if (lower_bound is None or self._scores[word] >= lower_bound)
            and (upper_bound is None or self._scores[word] <= upper_bound)
        ]
