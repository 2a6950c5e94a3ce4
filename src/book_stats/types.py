from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(slots=True)
class Author:
    """Structured author. A bare-text author is ``Author(name=text)``."""

    name: str | None = None
    country: str | None = None
    birth_year: int | None = None


@dataclass(slots=True)
class Book:
    """One book record as read from an input file."""

    title: str | None = None
    author: Author | None = None
    year_published: int | None = None
    genres: list[str] = field(default_factory=list)

    @property
    def author_name(self) -> str | None:
        return self.author.name if self.author is not None else None


@dataclass(slots=True)
class FrequencyEntry:
    """Count plus the first-seen original-case value for one normalized key."""

    count: int
    representative: str


@dataclass(frozen=True, slots=True)
class StatisticsItem:
    value: str
    count: int


@dataclass(frozen=True, slots=True)
class RunResult:
    """Everything one ``process_directory`` call reports."""

    file_count: int
    book_count: int
    statistics: tuple[StatisticsItem, ...]
    parse_time_s: float
    rank_time_s: float
    write_time_s: float
    error_count: int
    output_path: Path

    @property
    def total_time_s(self) -> float:
        return self.parse_time_s + self.rank_time_s + self.write_time_s

    def __str__(self) -> str:
        return (
            f"RunResult(files={self.file_count}, books={self.book_count}, "
            f"items={len(self.statistics)}, errors={self.error_count}, "
            f"time={self.total_time_s:.2f}s)"
        )
