from __future__ import annotations

import threading

import pytest

from book_stats.aggregate import FrequencyTable, Tally


def test_increment_keeps_first_representative() -> None:
    table = FrequencyTable()
    table.increment("romance", "Romance")
    table.increment("romance", "ROMANCE")
    table.increment("romance", "romance")
    snap = table.snapshot()
    assert snap["romance"].count == 3
    assert snap["romance"].representative == "Romance"
    assert len(table) == 1
    assert "romance" in table
    assert table.count("missing") == 0


def test_snapshot_is_a_copy() -> None:
    table = FrequencyTable()
    table.increment("a", "A")
    snap = table.snapshot()
    snap["a"].count = 99
    assert table.count("a") == 1


def test_merge_adds_counts_and_keeps_existing_representative() -> None:
    shared = FrequencyTable()
    shared.increment("drama", "Drama")
    local = FrequencyTable()
    local.increment("drama", "DRAMA")
    local.increment("drama", "DRAMA")
    local.increment("satire", "Satire")
    shared.merge(local)
    snap = shared.snapshot()
    assert snap["drama"].count == 3
    assert snap["drama"].representative == "Drama"
    assert snap["satire"].count == 1
    assert sorted(shared) == ["drama", "satire"]


def test_merge_into_itself_is_rejected() -> None:
    table = FrequencyTable()
    with pytest.raises(ValueError):
        table.merge(table)


def test_concurrent_increments_are_not_lost() -> None:
    table = FrequencyTable()
    tally = Tally()
    threads_n, per_thread = 8, 2000
    start = threading.Barrier(threads_n)

    def worker(i: int) -> None:
        start.wait()
        for n in range(per_thread):
            table.increment("shared", f"Shared-{i}")
            table.increment(f"k{n % 10}", f"K{n % 10}")
            tally.increment()

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(threads_n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert table.count("shared") == threads_n * per_thread
    assert sum(table.count(f"k{d}") for d in range(10)) == threads_n * per_thread
    assert tally.value == threads_n * per_thread
    # whichever thread won, the representative was written once
    assert table.snapshot()["shared"].representative.startswith("Shared-")


def test_tally_only_counts_up() -> None:
    tally = Tally()
    assert tally.increment() == 1
    assert tally.increment(4) == 5
    assert tally.increment(0) == 5
    with pytest.raises(ValueError):
        tally.increment(-1)
    assert tally.value == 5
