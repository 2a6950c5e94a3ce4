# src/book_stats/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from .constants import DEFAULT_FORMAT, DEFAULT_JOBS, OUTPUT_FORMATS
from .core import process_directory
from .errors import InputDirectoryError, InterruptedWaitError, InvalidAttributeError
from .parsing.strategies import supported_attributes
from .types import RunResult, StatisticsItem
from .utils.logging import get_logger

EXIT_INTERRUPTED = 130


# ----------------------------
# Interactive prompts
# ----------------------------


def prompt_directory(ask: Callable[[str], str] = input) -> Path:
    while True:
        raw = ask("Directory with JSON files: ").strip()
        if raw:
            return Path(raw)


def prompt_attribute(ask: Callable[[str], str] = input) -> str:
    """Ask until a supported attribute is entered."""
    names = sorted(supported_attributes())
    while True:
        raw = ask(f"Attribute ({', '.join(names)}): ").strip().lower()
        if raw in names:
            return raw
        print(f"Unsupported attribute: {raw!r}")


# ----------------------------
# Console output
# ----------------------------


def format_table(items: Sequence[StatisticsItem], top: int = 10) -> str:
    """Aligned two-column 'value  count' table; top <= 0 shows everything."""
    rows = list(items if top <= 0 else items[:top])
    if not rows:
        return "(no statistics)"
    width = max(len("value"), *(len(it.value) for it in rows))
    lines = [f"{'value':<{width}}  count", f"{'-' * width}  -----"]
    lines.extend(f"{it.value:<{width}}  {it.count}" for it in rows)
    if top > 0 and len(items) > top:
        lines.append(f"... {len(items) - top} more")
    return "\n".join(lines)


def format_summary(result: RunResult) -> str:
    return "\n".join(
        [
            f"Files processed : {result.file_count}",
            f"Books aggregated: {result.book_count}",
            f"Errors          : {result.error_count}",
            f"Parse time      : {result.parse_time_s * 1000:.0f} ms",
            f"Ranking time    : {result.rank_time_s * 1000:.0f} ms",
            f"Write time      : {result.write_time_s * 1000:.0f} ms",
            f"Total time      : {result.total_time_s * 1000:.0f} ms",
            f"Output          : {result.output_path}",
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="book-stats",
        description="Count books by title, author, year or genre across a folder of JSON files.",
    )
    p.add_argument("--input", "-i", type=Path, help="Directory with *.json book files")
    p.add_argument("--attribute", "-a", help="Attribute to group by")
    p.add_argument(
        "--jobs",
        "-j",
        type=int,
        default=DEFAULT_JOBS,
        help=f"Worker threads (default: {DEFAULT_JOBS}; capped at 2x CPU count).",
    )
    p.add_argument(
        "--out-dir", "-o", type=Path, default=None, help="Where to write the artifact (default: cwd)"
    )
    p.add_argument(
        "--format",
        "-f",
        choices=OUTPUT_FORMATS,
        default=DEFAULT_FORMAT,
        help=f"Artifact format (default: {DEFAULT_FORMAT})",
    )
    p.add_argument("--top", type=int, default=10, help="Rows to print (0 = all, default: 10)")
    p.add_argument(
        "--list-attributes", action="store_true", help="Print supported attributes and exit."
    )
    p.add_argument(
        "--debug",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Verbose per-file logs (use --debug / --no-debug).",
    )
    return p


def main(argv: list[str] | None = None) -> None:
    p = build_parser()
    args = p.parse_args(argv)

    get_logger().setLevel(logging.DEBUG if args.debug else logging.INFO)

    if args.list_attributes:
        for name in sorted(supported_attributes()):
            print(name)
        return

    interactive = sys.stdin.isatty()
    try:
        if args.input is None:
            if not interactive:
                p.error("--input is required")
            args.input = prompt_directory()
        if args.attribute is None:
            if not interactive:
                p.error("--attribute is required")
            args.attribute = prompt_attribute()
    except EOFError:
        p.error("input closed before --input and --attribute were given")
    except KeyboardInterrupt:
        print(file=sys.stderr)
        raise SystemExit(EXIT_INTERRUPTED) from None

    if args.attribute.strip().lower() not in supported_attributes():
        p.error(
            f"unsupported attribute {args.attribute!r} "
            f"(choose from {', '.join(sorted(supported_attributes()))})"
        )

    try:
        result = process_directory(
            args.input,
            args.attribute,
            args.jobs,
            out_dir=args.out_dir,
            fmt=args.format,
        )
    except (InvalidAttributeError, InputDirectoryError) as e:
        p.error(str(e))
    except InterruptedWaitError as e:
        print(f"Interrupted: {e}", file=sys.stderr)
        raise SystemExit(EXIT_INTERRUPTED) from e

    print(format_summary(result))
    print()
    print(format_table(result.statistics, top=args.top))


if __name__ == "__main__":
    main()
