"""
book_stats package.
"""

from .core import calculate, process_directory
from .parsing.strategies import supported_attributes
from .types import Author, Book, RunResult, StatisticsItem

__all__ = [
    "Author",
    "Book",
    "RunResult",
    "StatisticsItem",
    "calculate",
    "process_directory",
    "supported_attributes",
]
__version__ = "0.1.0"
