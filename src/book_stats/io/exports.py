# src/book_stats/io/exports.py
"""
Artifact writers. Each takes the final ordered statistics and a destination.

Every writer renders into a temporary file next to the destination and then
os.replace()s it into place, so a half-written artifact is never visible.
"""

from __future__ import annotations

import csv
import json
import os
import tempfile
import xml.etree.ElementTree as ET
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import IO

from ..constants import OUTPUT_FORMATS
from ..types import StatisticsItem

Writer = Callable[[Sequence[StatisticsItem], Path], Path]


@contextmanager
def _atomic_open(path: Path, newline: str | None = None) -> Iterator[IO[str]]:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline=newline) as fh:
            yield fh
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def write_xml(items: Sequence[StatisticsItem], path: Path) -> Path:
    """
    <statistics>
      <item><value>Romance</value><count>2</count></item>
      ...
    </statistics>
    """
    root = ET.Element("statistics")
    for it in items:
        node = ET.SubElement(root, "item")
        ET.SubElement(node, "value").text = it.value
        ET.SubElement(node, "count").text = str(it.count)
    ET.indent(root)
    tree = ET.ElementTree(root)
    with _atomic_open(path) as fh:
        fh.write("<?xml version='1.0' encoding='utf-8'?>\n")
        tree.write(fh, encoding="unicode")
        fh.write("\n")
    return path


def write_json(items: Sequence[StatisticsItem], path: Path) -> Path:
    payload = [{"value": it.value, "count": it.count} for it in items]
    with _atomic_open(path) as fh:
        json.dump(payload, fh, ensure_ascii=False, indent=2)
        fh.write("\n")
    return path


def write_csv(items: Sequence[StatisticsItem], path: Path) -> Path:
    with _atomic_open(path, newline="") as fh:
        w = csv.writer(fh)
        w.writerow(["value", "count"])
        for it in items:
            w.writerow([it.value, it.count])
    return path


WRITERS: dict[str, Writer] = {
    "xml": write_xml,
    "json": write_json,
    "csv": write_csv,
}


def get_writer(fmt: str) -> Writer:
    """Raises ValueError for formats other than OUTPUT_FORMATS."""
    try:
        return WRITERS[fmt.lower()]
    except KeyError:
        raise ValueError(
            f"Unsupported output format: {fmt!r} (choose from {', '.join(OUTPUT_FORMATS)})"
        ) from None
