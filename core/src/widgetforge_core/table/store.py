from __future__ import annotations

from collections.abc import Iterator
from typing import Any


class TableStore:
    """An ordered sequence of row data objects for a table view.

    Besides normal Python iteration, the store keeps an explicit cursor
    (``rewind``/``valid``/``current``/``key``/``next``) for callers that walk
    it step by step.
    """

    def __init__(self, rows: list[Any] | None = None) -> None:
        self._rows: list[Any] = list(rows or [])
        self._current_index = 0

    def current(self) -> Any:
        return self._rows[self._current_index]

    def key(self) -> int:
        return self._current_index

    def next(self) -> None:
        self._current_index += 1

    def prev(self) -> None:
        self._current_index -= 1

    def rewind(self) -> None:
        self._current_index = 0

    def valid(self) -> bool:
        return 0 <= self._current_index < len(self._rows)

    def add(self, data: Any) -> None:
        self._rows.append(data)

    def add_to_start(self, data: Any) -> None:
        self._rows.insert(0, data)
        # keep the cursor on the same row
        self._current_index += 1

    def get_rows(self) -> list[Any]:
        return list(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._rows))
