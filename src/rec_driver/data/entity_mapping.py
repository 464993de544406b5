"""Bidirectional mapping between external entity IDs and dense indices."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path


class EntityMapping:
    """Injective, order-stable ID mapping.

    Internal indices are assigned densely from ``0`` in first-seen order
    and never change once assigned.
    """

    def __init__(self) -> None:
        self._to_internal: dict[str, int] = {}
        self._to_original: list[str] = []

    def __len__(self) -> int:
        return len(self._to_original)

    def __contains__(self, original_id: object) -> bool:
        return original_id in self._to_internal

    def __iter__(self) -> Iterator[str]:
        return iter(self._to_original)

    @property
    def original_ids(self) -> list[str]:
        return list(self._to_original)

    @property
    def internal_ids(self) -> range:
        return range(len(self._to_original))

    def to_internal(self, original_id: str) -> int:
        """Return the index for *original_id*, assigning a new one if absent."""
        index = self._to_internal.get(original_id)
        if index is None:
            index = len(self._to_original)
            self._to_internal[original_id] = index
            self._to_original.append(original_id)
        return index

    def lookup(self, original_id: str) -> int | None:
        """Return the index for *original_id* without assigning one."""
        return self._to_internal.get(original_id)

    def to_original(self, internal_id: int) -> str:
        """Return the external ID for *internal_id*.

        Raises
        ------
        KeyError
            If no entity was assigned that index.
        """
        if not 0 <= internal_id < len(self._to_original):
            raise KeyError(f"unknown internal ID: {internal_id}")
        return self._to_original[internal_id]

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, path: str | Path) -> None:
        """Write one ``internal<TAB>external`` line per entity."""
        with open(path, "w", encoding="utf-8") as handle:
            for index, original_id in enumerate(self._to_original):
                handle.write(f"{index}\t{original_id}\n")

    @classmethod
    def load(cls, path: str | Path) -> EntityMapping:
        """Read a mapping written by :meth:`save`.

        Raises
        ------
        ValueError
            If the indices in the file are not dense and in order.
        """
        mapping = cls()
        with open(path, encoding="utf-8") as handle:
            for line_number, line in enumerate(handle, start=1):
                line = line.rstrip("\n")
                if not line:
                    continue
                raw_index, _, original_id = line.partition("\t")
                if int(raw_index) != len(mapping):
                    raise ValueError(
                        f"{path}:{line_number}: expected internal ID "
                        f"{len(mapping)}, got {raw_index}"
                    )
                if original_id in mapping:
                    raise ValueError(
                        f"{path}:{line_number}: duplicate ID {original_id!r}"
                    )
                mapping.to_internal(original_id)
        return mapping
