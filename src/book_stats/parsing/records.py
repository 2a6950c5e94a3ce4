# src/book_stats/parsing/records.py
"""
Coerce one decoded JSON object into a Book.

Missing or type-mismatched fields become None (or an empty genre list);
they never make the record, or the file, fail.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from ..types import Author, Book
from .normalize import clean_value, split_genres

# Integers are bounded to 10 digits; anything longer is treated as absent
_MAX_INT_DIGITS = 10
_INT_RX = re.compile(r"-?[0-9]{1,%d}" % _MAX_INT_DIGITS)


def _as_text(value: Any) -> str | None:
    return clean_value(value) if isinstance(value, str) else None


def _as_int(value: Any) -> int | None:
    """Accept ints, integral decimals and digit strings ('1949') of at most 10 digits."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if abs(value) < 10**_MAX_INT_DIGITS else None
    if isinstance(value, (Decimal, float)):
        d = Decimal(value)
        # bound the exponent before int(): 1e20000000 would not finish
        if not d.is_finite() or d.adjusted() >= _MAX_INT_DIGITS:
            return None
        return int(d) if d == d.to_integral_value() else None
    if isinstance(value, str):
        s = value.strip()
        if _INT_RX.fullmatch(s):
            return int(s)
    return None


def author_from_value(value: Any) -> Author | None:
    """Bare text and ``{"name", "country", "birth_year"}`` both resolve to Author."""
    if isinstance(value, str):
        name = clean_value(value)
        return Author(name=name) if name else None
    if isinstance(value, Mapping):
        return Author(
            name=_as_text(value.get("name")),
            country=_as_text(value.get("country")),
            birth_year=_as_int(value.get("birth_year")),
        )
    return None


def genres_from_value(value: Any) -> list[str]:
    """
    A string is split on the genre delimiter; a list keeps each string
    element as one atomic phrase.
    """
    if isinstance(value, str):
        return split_genres(value)
    if isinstance(value, list):
        out: list[str] = []
        for g in value:
            if isinstance(g, str) and g.strip():
                out.append(g.strip())
        return out
    return []


def book_from_mapping(obj: Mapping[str, Any]) -> Book:
    return Book(
        title=_as_text(obj.get("title")),
        author=author_from_value(obj.get("author")),
        year_published=_as_int(obj.get("year_published")),
        genres=genres_from_value(obj.get("genre")),
    )
