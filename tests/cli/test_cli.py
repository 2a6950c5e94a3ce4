from __future__ import annotations

import io
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

from book_stats import cli
from book_stats.cli import format_table, main, prompt_attribute, prompt_directory
from book_stats.core import collect_json_files
from book_stats.types import StatisticsItem


def _answers(*values: str) -> Iterator[str]:
    return iter(values)


@pytest.fixture()
def books_dir(tmp_path: Path) -> Path:
    d = tmp_path / "in"
    d.mkdir()
    (d / "a.json").write_text(
        '[{"title": "1984", "genre": "Dystopian, Political Fiction"},'
        ' {"title": "Animal Farm", "genre": "political fiction, Satire"}]',
        encoding="utf-8",
    )
    return d


def test_collect_json_files(tmp_path: Path) -> None:
    (tmp_path / "b.json").write_text("[]")
    (tmp_path / "a.JSON").write_text("[]")
    (tmp_path / "c.txt").write_text("nope")
    (tmp_path / "sub.json").mkdir()
    (tmp_path / "sub.json" / "d.json").write_text("[]")
    files = collect_json_files(tmp_path)
    assert [p.name for p in files] == ["a.JSON", "b.json"]


def test_list_attributes(capsys: pytest.CaptureFixture[str]) -> None:
    main(["--list-attributes"])
    assert capsys.readouterr().out.split() == ["author", "genre", "title", "year_published"]


def test_full_run(books_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "out"
    main(["-i", str(books_dir), "-a", "genre", "-j", "2", "-o", str(out), "-f", "csv"])
    text = capsys.readouterr().out
    assert "Files processed : 1" in text
    assert "Books aggregated: 2" in text
    assert "Political Fiction  2" in text
    assert (out / "statistics_by_genre.csv").exists()


def test_invalid_attribute_exits_2(books_dir: Path, tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["-i", str(books_dir), "-a", "publisher", "-o", str(tmp_path / "out")])
    assert exc.value.code == 2
    assert not (tmp_path / "out").exists()


def test_missing_directory_exits_2(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["-i", str(tmp_path / "nope"), "-a", "title", "-o", str(tmp_path)])
    assert exc.value.code == 2


def test_missing_input_without_tty_exits_2(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO())
    with pytest.raises(SystemExit) as exc:
        main(["-a", "title"])
    assert exc.value.code == 2


def test_prompt_attribute_repeats_until_valid(capsys: pytest.CaptureFixture[str]) -> None:
    answers = _answers("publisher", "", "  Genre ")
    assert prompt_attribute(lambda _msg: next(answers)) == "genre"
    assert capsys.readouterr().out.count("Unsupported attribute") == 2


def test_prompt_directory_skips_blank() -> None:
    answers = _answers("  ", "/data/books")
    assert prompt_directory(lambda _msg: next(answers)) == Path("/data/books")


def test_format_table() -> None:
    items = [StatisticsItem("Romance", 2), StatisticsItem("Tragedy", 1)]
    assert format_table([]) == "(no statistics)"
    assert format_table(items).splitlines() == [
        "value    count",
        "-------  -----",
        "Romance  2",
        "Tragedy  1",
    ]
    lines = format_table(items, top=1).splitlines()
    assert lines[-1] == "... 1 more"
    assert len(format_table(items, top=0).splitlines()) == 4


class _Tty(io.StringIO):
    def isatty(self) -> bool:
        return True


def test_closed_input_at_prompt_exits_2(monkeypatch: pytest.MonkeyPatch) -> None:
    def closed(*args: object) -> str:
        raise EOFError

    monkeypatch.setattr(sys, "stdin", _Tty())
    monkeypatch.setattr(cli, "prompt_directory", closed)
    with pytest.raises(SystemExit) as exc:
        main(["-a", "title"])
    assert exc.value.code == 2


def test_ctrl_c_at_prompt_exits_130(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def interrupted(*args: object) -> str:
        raise KeyboardInterrupt

    monkeypatch.setattr(sys, "stdin", _Tty())
    monkeypatch.setattr(cli, "prompt_attribute", interrupted)
    with pytest.raises(SystemExit) as exc:
        main(["-i", str(tmp_path)])
    assert exc.value.code == 130
