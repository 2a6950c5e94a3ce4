# src/book_stats/ranking.py
from __future__ import annotations

from collections.abc import Mapping

from .parsing.normalize import title_case
from .types import FrequencyEntry, StatisticsItem


def _sort_key(item: tuple[str, FrequencyEntry]) -> tuple[int, str, str]:
    """Count desc, then representative case-insensitively, then the key itself."""
    key, entry = item
    return (-entry.count, entry.representative.casefold(), key)


def rank(entries: Mapping[str, FrequencyEntry]) -> list[StatisticsItem]:
    """
    Turn the final frequency table into ordered statistics items.

    The order depends only on the counted values, never on the order in which
    files were discovered or workers finished.
    """
    return [
        StatisticsItem(value=title_case(entry.representative), count=entry.count)
        for _key, entry in sorted(entries.items(), key=_sort_key)
    ]
