"""Sparse boolean relation from entity index to attribute indices."""

from __future__ import annotations

from collections.abc import Iterator


class SparseBooleanMatrix:
    """Row-oriented set-of-columns matrix.

    Only ``True`` entries are stored.  Rows grow on demand, so any
    non-negative index may be written or read.
    """

    def __init__(self) -> None:
        self._rows: dict[int, set[int]] = {}

    def __getitem__(self, key: tuple[int, int]) -> bool:
        row, column = key
        return self.test(row, column)

    def __setitem__(self, key: tuple[int, int], value: bool) -> None:
        row, column = key
        self.set(row, column, value)

    def set(self, row: int, column: int, value: bool = True) -> None:
        if row < 0 or column < 0:
            raise IndexError(f"negative index: ({row}, {column})")
        if value:
            self._rows.setdefault(row, set()).add(column)
            return
        columns = self._rows.get(row)
        if columns is not None:
            columns.discard(column)
            if not columns:
                del self._rows[row]

    def test(self, row: int, column: int) -> bool:
        return column in self._rows.get(row, ())

    def row(self, row: int) -> list[int]:
        """Attribute indices of *row* in ascending order."""
        return sorted(self._rows.get(row, ()))

    def iter_row(self, row: int) -> Iterator[int]:
        return iter(self.row(row))

    @property
    def non_empty_rows(self) -> list[int]:
        return sorted(self._rows)

    @property
    def num_entries(self) -> int:
        return sum(len(columns) for columns in self._rows.values())
