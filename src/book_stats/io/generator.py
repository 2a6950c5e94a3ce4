# src/book_stats/io/generator.py
"""
Synthetic input data: directories of JSON book files for demos and load tests.

    book-stats-generate --out data/books --files 20 --per-file 5000 --seed 7
"""

from __future__ import annotations

import argparse
import json
import logging
import random
from pathlib import Path
from typing import Any

from ..utils.logging import get_logger

log = logging.getLogger(__name__)

TITLES = [
    "1984",
    "Animal Farm",
    "Pride and Prejudice",
    "Romeo and Juliet",
    "The Great Gatsby",
    "Moby-Dick",
    "War and Peace",
    "Brave New World",
    "Jane Eyre",
    "The Trial",
]

# (name, country, birth_year)
AUTHORS = [
    ("George Orwell", "UK", 1903),
    ("Jane Austen", "UK", 1775),
    ("William Shakespeare", "UK", 1564),
    ("F. Scott Fitzgerald", "USA", 1896),
    ("Herman Melville", "USA", 1819),
    ("Leo Tolstoy", "Russia", 1828),
    ("Aldous Huxley", "UK", 1894),
    ("Charlotte Bronte", "UK", 1816),
    ("Franz Kafka", "Austria-Hungary", 1883),
]

GENRES = [
    "Dystopian",
    "Political Fiction",
    "Romance",
    "Satire",
    "Tragedy",
    "Historical Fiction",
    "Adventure",
    "Science Fiction",
    "Gothic",
    "Coming-of-age",
]


def generate_book(rng: random.Random) -> dict[str, Any]:
    name, country, birth_year = rng.choice(AUTHORS)
    author: Any = (
        name if rng.random() < 0.5 else {"name": name, "country": country, "birth_year": birth_year}
    )
    return {
        "title": rng.choice(TITLES),
        "author": author,
        "year_published": rng.randint(1590, 2024),
        "genre": ", ".join(rng.sample(GENRES, rng.randint(1, 3))),
    }


def generate_books(count: int, rng: random.Random | None = None) -> list[dict[str, Any]]:
    rng = rng or random.Random()
    return [generate_book(rng) for _ in range(count)]


def write_dataset(
    out_dir: Path,
    files: int,
    books_per_file: int,
    seed: int | None = None,
    invalid: int = 0,
) -> list[Path]:
    """
    Write ``files`` valid files (books_0001.json, ...) and ``invalid``
    malformed ones (broken_0001.json, ...). Returns every written path.
    """
    if files < 0 or books_per_file < 0 or invalid < 0:
        raise ValueError("counts must be non-negative")
    rng = random.Random(seed)
    out_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for i in range(1, files + 1):
        path = out_dir / f"books_{i:04d}.json"
        with open(path, "w", encoding="utf-8") as f:
            json.dump(generate_books(books_per_file, rng), f, ensure_ascii=False)
        written.append(path)

    for i in range(1, invalid + 1):
        path = out_dir / f"broken_{i:04d}.json"
        # valid start, truncated record
        path.write_text('[{"title": "Broken", "genre": ', encoding="utf-8")
        written.append(path)

    log.info("Wrote %d file(s) to %s", len(written), out_dir)
    return written


def main(argv: list[str] | None = None) -> None:
    p = argparse.ArgumentParser(
        prog="book-stats-generate",
        description="Generate a directory of synthetic JSON book files.",
    )
    p.add_argument("--out", "-o", type=Path, required=True, help="Output directory")
    p.add_argument("--files", type=int, default=10, help="Number of valid files (default: 10)")
    p.add_argument(
        "--per-file", type=int, default=1000, help="Books per file (default: 1000)"
    )
    p.add_argument("--seed", type=int, default=None, help="Random seed for reproducible output")
    p.add_argument(
        "--invalid", type=int, default=0, help="Also write N malformed files (default: 0)"
    )
    args = p.parse_args(argv)

    get_logger().setLevel(logging.INFO)
    paths = write_dataset(args.out, args.files, args.per_file, seed=args.seed, invalid=args.invalid)
    print(f"Wrote {len(paths)} file(s) to {args.out}")


if __name__ == "__main__":
    main()
