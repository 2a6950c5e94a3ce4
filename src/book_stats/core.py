# src/book_stats/core.py
from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterable
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path

from .aggregate import FrequencyTable, Tally
from .constants import (
    CPU_COUNT,
    DEFAULT_FORMAT,
    DEFAULT_JOBS,
    JSON_SUFFIX,
    OUTPUT_PREFIX,
    UNSAFE_NAME_RX,
    WAIT_TIMEOUT_S,
)
from .errors import (
    FileParseError,
    InputDirectoryError,
    InterruptedWaitError,
    RecordAggregationError,
)
from .io.exports import get_writer
from .io.reader import parse_file
from .parsing.strategies import Strategy, get_strategy
from .ranking import rank
from .types import Book, RunResult, StatisticsItem

log = logging.getLogger(__name__)


# ----------------------------
# Inputs / outputs
# ----------------------------


def collect_json_files(directory: Path) -> list[Path]:
    """Regular ``*.json`` files directly inside ``directory``, sorted by name."""
    return sorted(
        p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == JSON_SUFFIX
    )


def resolve_workers(jobs: int | None, cpu_count: int = CPU_COUNT) -> int:
    """Clamp the requested worker count to [1, 2 * cpu_count]."""
    requested = jobs if jobs is not None else DEFAULT_JOBS
    return max(1, min(requested, 2 * max(1, cpu_count)))


def output_path_for(attribute: str, out_dir: Path | None = None, fmt: str = DEFAULT_FORMAT) -> Path:
    safe = UNSAFE_NAME_RX.sub("_", attribute.strip()).lower()
    base = out_dir if out_dir is not None else Path.cwd()
    return base / f"{OUTPUT_PREFIX}{safe}.{fmt.lower()}"


# ----------------------------
# Per-file worker
# ----------------------------


class _Run:
    """Shared state of one process_directory call, handed to every worker."""

    def __init__(self, strategy: Strategy) -> None:
        self.strategy = strategy
        self.table = FrequencyTable()
        self.books = Tally()
        self.errors = Tally()
        self.cancel = threading.Event()

    def process_file(self, path: Path) -> None:
        """
        Stream one file into a file-local table; merge it into the shared table
        only when the whole file parsed. A malformed file contributes nothing,
        its per-record errors included: it counts as exactly one error.
        """
        if self.cancel.is_set():
            log.debug("Skipping %s (run cancelled)", path)
            return

        local = FrequencyTable()
        books = 0
        errors = 0
        index = 0

        def on_book(book: Book) -> None:
            nonlocal books, errors, index
            index += 1
            try:
                for key, original in self.strategy(book):
                    local.increment(key, original)
            except Exception as e:
                err = RecordAggregationError(path, index, e)
                log.error("%s", err, exc_info=log.isEnabledFor(logging.DEBUG))
                errors += 1
                return
            books += 1

        try:
            parse_file(path, on_book)
        except FileParseError as e:
            log.error("%s", e)
            self.errors.increment()
            return

        if self.cancel.is_set():
            log.debug("Discarding %s (run cancelled)", path)
            return
        self.table.merge(local)
        self.books.increment(books)
        self.errors.increment(errors)
        log.debug("Aggregated %d book(s) from %s", books, path.name)


def _shutdown(executor: ThreadPoolExecutor, run: _Run, futures: list[Future[None]]) -> None:
    run.cancel.set()
    for fut in futures:
        fut.cancel()
    executor.shutdown(wait=False, cancel_futures=True)


def _run_pool(run: _Run, files: list[Path], workers: int) -> None:
    """Fan the files out over the pool and wait for all of them."""
    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="book-stats")
    futures: list[Future[None]] = []
    try:
        futures = [executor.submit(run.process_file, f) for f in files]
        done, not_done = wait(futures, timeout=WAIT_TIMEOUT_S)
        if not_done:
            log.warning(
                "Timed out after %ss waiting for %d file(s); continuing without them",
                WAIT_TIMEOUT_S,
                len(not_done),
            )
            _shutdown(executor, run, futures)
        for fut in done:
            exc = fut.exception()
            if exc is not None:
                log.error("Unexpected error in file task: %s", exc)
                run.errors.increment()
    except KeyboardInterrupt as e:
        log.error("Interrupted while waiting for %d file task(s)", len(futures))
        _shutdown(executor, run, futures)
        raise InterruptedWaitError("interrupted while waiting for file tasks") from e
    executor.shutdown(wait=not run.cancel.is_set())


# ----------------------------
# In-memory calculation
# ----------------------------


def calculate(books: Iterable[Book | None] | None, attribute: str) -> list[StatisticsItem]:
    """
    Rank ``attribute`` over books already in memory; ``None`` entries are skipped.

    Raises:
        InvalidAttributeError: blank or unsupported attribute.
    """
    strategy = get_strategy(attribute)
    table = FrequencyTable()
    for book in books or ():
        if book is None:
            continue
        for key, original in strategy(book):
            table.increment(key, original)
    return rank(table.snapshot())


# ----------------------------
# Entry point
# ----------------------------


def process_directory(
    directory: Path | str,
    attribute: str,
    jobs: int | None = DEFAULT_JOBS,
    *,
    out_dir: Path | str | None = None,
    fmt: str = DEFAULT_FORMAT,
) -> RunResult:
    """
    Count ``attribute`` across every JSON file in ``directory``.

    Raises:
        InvalidAttributeError: unsupported attribute (nothing is touched).
        ValueError: unsupported output format (nothing is touched).
        InputDirectoryError: ``directory`` is not a directory.
        InterruptedWaitError: the wait for file tasks was interrupted.
    """
    strategy = get_strategy(attribute)
    writer = get_writer(fmt)

    directory = Path(directory)
    if not directory.is_dir():
        raise InputDirectoryError(directory)

    try:
        files = collect_json_files(directory)
    except OSError as e:
        raise InputDirectoryError(directory) from e
    out_path = output_path_for(attribute, Path(out_dir) if out_dir is not None else None, fmt)

    run = _Run(strategy)
    parse_start = time.perf_counter()
    if not files:
        log.warning("No JSON files found in directory: %s", directory)
    else:
        workers = resolve_workers(jobs)
        log.info("Processing %d file(s) with %d worker(s)", len(files), workers)
        _run_pool(run, files, workers)
    parse_time = time.perf_counter() - parse_start

    rank_start = time.perf_counter()
    statistics = rank(run.table.snapshot())
    rank_time = time.perf_counter() - rank_start

    write_start = time.perf_counter()
    writer(statistics, out_path)
    write_time = time.perf_counter() - write_start

    result = RunResult(
        file_count=len(files),
        book_count=run.books.value,
        statistics=tuple(statistics),
        parse_time_s=parse_time,
        rank_time_s=rank_time,
        write_time_s=write_time,
        error_count=run.errors.value,
        output_path=out_path,
    )
    if result.error_count:
        log.warning("Processed with %d error(s)", result.error_count)
    log.info("%s -> %s", result, out_path)
    return result
