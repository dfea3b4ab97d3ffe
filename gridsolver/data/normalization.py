"""Shared helpers for ASCII letter normalization."""

from __future__ import annotations

import re
import unicodedata

from ..core.exceptions import InvalidLetterError

# Letters that do not decompose under NFKD.
SPECIAL_TRANSLITERATIONS = {
    "ß": "ss",
    "ẞ": "SS",
    "æ": "ae",
    "Æ": "AE",
    "œ": "oe",
    "Œ": "OE",
    "ø": "o",
    "Ø": "O",
    "đ": "d",
    "Đ": "D",
    "ð": "d",
    "Ð": "D",
    "ł": "l",
    "Ł": "L",
    "þ": "th",
    "Þ": "TH",
    "ı": "i",
}

WORD_RE = re.compile(r"[^A-Za-z]")


def transliterate(text: str) -> str:
    """Return ``text`` reduced to its closest ASCII spelling.

    Characters without an ASCII counterpart are dropped.
    """

    if not text:
        return ""
    transformed = []
    for char in text:
        if char in SPECIAL_TRANSLITERATIONS:
            transformed.append(SPECIAL_TRANSLITERATIONS[char])
            continue
        decomposed = unicodedata.normalize("NFKD", char)
        transformed.append("".join(ch for ch in decomposed if not unicodedata.combining(ch)))
    return "".join(transformed).encode("ascii", "ignore").decode("ascii")


def clean_word(text: str) -> str:
    """Return a normalized uppercase ASCII representation of ``text``."""

    return WORD_RE.sub("", transliterate(text)).upper()


def to_letter(char: str) -> str:
    """Normalize a single character into a grid letter.

    Raises :class:`InvalidLetterError` unless ``char`` transliterates to
    exactly one ASCII alphabetic character.
    """

    ascii_char = transliterate(char)
    if len(ascii_char) != 1 or not ascii_char.isalpha():
        raise InvalidLetterError(f"Not a letter: {char!r}")
    return ascii_char.upper()


def is_letter(char: str) -> bool:
    try:
        to_letter(char)
    except InvalidLetterError:
        return False
    return True


__all__ = ["clean_word", "is_letter", "to_letter", "transliterate", "SPECIAL_TRANSLITERATIONS"]
