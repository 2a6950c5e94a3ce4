# src/book_stats/parsing/strategies.py
"""
Attribute strategies: which (normalized key, original value) pairs a book
contributes for the requested attribute.

A book contributes nothing for an absent or blank value, one pair for
title/author/year_published, and one pair per atomic genre phrase.
"""

from __future__ import annotations

from collections.abc import Callable

from ..constants import SUPPORTED_ATTRIBUTES
from ..errors import InvalidAttributeError
from ..types import Book
from .normalize import clean_value, normalize_key

KeyPair = tuple[str, str]
Strategy = Callable[[Book], list[KeyPair]]


def _text_pairs(raw: str | None) -> list[KeyPair]:
    value = clean_value(raw)
    if value is None:
        return []
    return [(normalize_key(value), value)]


def by_title(book: Book) -> list[KeyPair]:
    return _text_pairs(book.title)


def by_author(book: Book) -> list[KeyPair]:
    return _text_pairs(book.author_name)


def by_year_published(book: Book) -> list[KeyPair]:
    if book.year_published is None:
        return []
    key = str(book.year_published)
    return [(key, key)]


def by_genre(book: Book) -> list[KeyPair]:
    pairs: list[KeyPair] = []
    for genre in book.genres:
        pairs.extend(_text_pairs(genre))
    return pairs


_STRATEGIES: dict[str, Strategy] = {
    "title": by_title,
    "author": by_author,
    "year_published": by_year_published,
    "genre": by_genre,
}


def supported_attributes() -> frozenset[str]:
    """Names accepted by ``get_strategy`` (and by the CLI)."""
    return SUPPORTED_ATTRIBUTES


def get_strategy(attribute: str) -> Strategy:
    """
    Resolve an attribute name (case-insensitive, surrounding spaces ignored).

    Raises:
        InvalidAttributeError: the name is not supported.
    """
    name = (attribute or "").strip().lower()
    try:
        return _STRATEGIES[name]
    except KeyError:
        raise InvalidAttributeError(attribute, SUPPORTED_ATTRIBUTES) from None
