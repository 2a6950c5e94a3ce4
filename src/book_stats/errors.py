"""book_stats exceptions.

Only InvalidAttributeError, InputDirectoryError and InterruptedWaitError
reach the caller of ``process_directory``. FileParseError and
RecordAggregationError are recovered inside a run: logged and counted.
"""

from __future__ import annotations

from pathlib import Path


class BookStatsError(Exception):
    """Base exception for all book_stats errors."""

    pass


class InvalidAttributeError(BookStatsError, ValueError):
    """Raised when the requested attribute is not one of the supported ones."""

    def __init__(self, attribute: str, supported: frozenset[str] | set[str]) -> None:
        self.attribute = attribute
        self.supported = frozenset(supported)
        super().__init__(
            f"Unsupported attribute: {attribute!r}. "
            f"Supported attributes are: {', '.join(sorted(self.supported))}"
        )


class InputDirectoryError(BookStatsError, NotADirectoryError):
    """Raised when the input path is not a readable directory."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Not a directory: {path}")


class FileParseError(BookStatsError):
    """A file's top-level content is not a well-formed array of objects."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse {path}: {reason}")


class RecordAggregationError(BookStatsError):
    """A single record failed inside the attribute strategy."""

    def __init__(self, path: Path | str, index: int, cause: BaseException) -> None:
        self.path = path
        self.index = index
        super().__init__(f"Error processing record {index} from {path}: {cause}")


class InterruptedWaitError(BookStatsError):
    """The wait for file tasks was interrupted; no result is produced."""

    pass
