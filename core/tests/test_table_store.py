from __future__ import annotations

from typing import Any

from widgetforge_core.table import TableStore


def _walk(store: TableStore) -> list[Any]:
    rows = []
    store.rewind()
    while store.valid():
        rows.append(store.current())
        store.next()
    return rows


def test_cursor_walks_rows_in_order() -> None:
    store = TableStore(["R1", "R2", "R3"])
    assert _walk(store) == ["R1", "R2", "R3"]


def test_add_to_start_prepends() -> None:
    store = TableStore(["R1", "R2", "R3"])
    store.add_to_start("R0")
    assert _walk(store) == ["R0", "R1", "R2", "R3"]


def test_add_appends() -> None:
    store = TableStore()
    store.add("R1")
    store.add("R2")
    assert _walk(store) == ["R1", "R2"]
    assert len(store) == 2


def test_add_to_start_keeps_the_cursor_on_the_same_row() -> None:
    store = TableStore(["R1", "R2"])
    store.rewind()
    store.next()
    assert store.current() == "R2"

    store.add_to_start("R0")
    assert store.current() == "R2"
    assert store.key() == 2


def test_prev_and_key() -> None:
    store = TableStore(["R1", "R2"])
    store.rewind()
    store.next()
    assert store.key() == 1
    store.prev()
    assert store.current() == "R1"
    store.prev()
    assert not store.valid()


def test_python_iteration_ignores_the_cursor() -> None:
    store = TableStore(["R1", "R2"])
    store.next()
    assert list(store) == ["R1", "R2"]
    assert store.get_rows() == ["R1", "R2"]
    assert store.key() == 1


def test_empty_store_is_not_valid() -> None:
    store = TableStore()
    store.rewind()
    assert not store.valid()
