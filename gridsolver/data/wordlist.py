"""Word list parsing for plain and ranked dictionaries."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple

from ..core.constants import RANK_SEPARATOR
from ..core.exceptions import DictionaryLoadError
from ..core.models import Word
from ..utils.logger import get_logger
from .dictionary import Dictionary, RankedDictionary

LOGGER = get_logger(__name__)


def _parse_int(value: Optional[str]) -> Optional[int]:
    try:
        return int((value or "").strip())
    except (TypeError, ValueError):
        return None


def iter_words(lines: Iterable[str]) -> Iterator[Word]:
    """Yield one word per line; blank lines and letterless lines are skipped."""

    for line in lines:
        word = Word(line.strip())
        if word.size():
            yield word


def iter_ranked_words(
    lines: Iterable[str],
    separator: str = RANK_SEPARATOR,
) -> Iterator[Tuple[Word, int]]:
    """Yield ``(word, rank)`` pairs from ``word<separator>rank`` records.

    Records without the separator or with a non-integer rank are skipped.
    """

    reader = csv.reader(lines, delimiter=separator, quoting=csv.QUOTE_NONE)
    for line_no, row in enumerate(reader, start=1):
        if not row or not "".join(row).strip():
            continue
        if len(row) < 2:
            LOGGER.debug("Skipping record %s without rank: %r", line_no, row)
            continue
        rank = _parse_int(row[1])
        if rank is None:
            LOGGER.debug("Skipping record %s with bad rank: %r", line_no, row)
            continue
        word = Word(row[0].strip())
        if not word.size():
            continue
        yield word, rank


def _read_lines(path: Path | str) -> list[str]:
    source = Path(path)
    try:
        return source.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise DictionaryLoadError(f"Cannot read word list {source}: {exc}") from exc


def load_dictionary(path: Path | str) -> Dictionary:
    dictionary = Dictionary(iter_words(_read_lines(path)))
    LOGGER.info("Loaded %s words from %s", len(dictionary), path)
    return dictionary


def load_ranked_dictionary(path: Path | str, separator: str = RANK_SEPARATOR) -> RankedDictionary:
    dictionary = RankedDictionary(iter_ranked_words(_read_lines(path), separator))
    LOGGER.info("Loaded %s ranked words from %s", len(dictionary), path)
    return dictionary
