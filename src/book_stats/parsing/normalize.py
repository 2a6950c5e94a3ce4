# src/book_stats/parsing/normalize.py
from __future__ import annotations

import re

from ..constants import GENRE_DELIMITER

_WS_RE = re.compile(r"\s+", flags=re.UNICODE)


# ----------------------------
# Grouping keys
# ----------------------------


def clean_value(value: str | None) -> str | None:
    """Trim a text value; blank or missing becomes None."""
    if value is None:
        return None
    s = value.strip()
    return s or None


def normalize_key(value: str) -> str:
    """Grouping key: trimmed and lower-cased. Used only for grouping."""
    return value.strip().lower()


def split_genres(raw: str, delimiter: str = GENRE_DELIMITER) -> list[str]:
    """
    Split a delimiter-separated genre field into atomic phrases.

      'Romance, Tragedy'    -> ['Romance', 'Tragedy']
      'Political Fiction'   -> ['Political Fiction']
      'Drama,, '            -> ['Drama']
    """
    if not raw:
        return []
    return [part.strip() for part in raw.split(delimiter) if part.strip()]


# ----------------------------
# Display
# ----------------------------


def _title_word(word: str) -> str:
    return word[:1].upper() + word[1:]


def title_case(text: str) -> str:
    """
    Title-case for display:
      - lower-case everything, then upper-case the first letter of each word,
      - hyphenated words are handled per segment ('mary-jane' -> 'Mary-Jane'),
      - runs of whitespace collapse to a single space.
    """
    if not text or not text.strip():
        return text
    words = _WS_RE.split(text.strip().lower())
    out: list[str] = []
    for word in words:
        if "-" in word:
            out.append("-".join(_title_word(part) for part in word.split("-")))
        else:
            out.append(_title_word(word))
    return " ".join(out)
