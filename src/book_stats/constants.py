# src/book_stats/constants.py
from __future__ import annotations

import os
import re
from typing import Final

# Attributes a run can group by
SUPPORTED_ATTRIBUTES: Final[frozenset[str]] = frozenset(
    {"title", "author", "year_published", "genre"}
)

# Input discovery (non-recursive, suffix compared case-insensitively)
JSON_SUFFIX: Final = ".json"

# A single "genre" string may hold several phrases: "Romance, Tragedy"
GENRE_DELIMITER: Final = ","

# ---------------------------------------------------------------------------
# Output artifact
#   statistics_by_<attribute>.<format>
# ---------------------------------------------------------------------------
OUTPUT_PREFIX: Final = "statistics_by_"
OUTPUT_FORMATS: Final[tuple[str, ...]] = ("xml", "json", "csv")
DEFAULT_FORMAT: Final = "xml"

# Characters not allowed in the attribute part of the artifact name
UNSAFE_NAME_RX: Final[re.Pattern[str]] = re.compile(r"[^A-Za-z0-9_\-]")

# ---------------------------------------------------------------------------
# Worker pool
# ---------------------------------------------------------------------------
CPU_COUNT: Final = os.cpu_count() or 1
DEFAULT_JOBS: Final = CPU_COUNT

# Upper bound on how long the caller waits for all file tasks (seconds)
WAIT_TIMEOUT_S: Final = 30 * 60
