"""
Ordered record representation used by the row comparator.

A record is an ordered association of column names to nullable values, as
read from either the source or the target system. Metadata columns follow
the naming convention ``<column>_ttl`` and ``<column>_writetime``.
"""

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

TTL_SUFFIX = "_ttl"
WRITETIME_SUFFIX = "_writetime"


class Record:
    """
    Immutable, order-preserving row of named values.

    Column names and values are supplied as parallel sequences. Callers must
    hand over internally consistent rows; a length mismatch or duplicate
    column name is a programming error and trips an assertion.
    """

    __slots__ = ("_names", "_values", "_index")

    def __init__(self, column_names: Sequence[str], values: Sequence[Any]):
        names = tuple(column_names)
        row_values = tuple(values)

        assert len(names) == len(row_values), (
            f"Record has {len(names)} column names but {len(row_values)} values"
        )
        assert len(set(names)) == len(names), (
            f"Record has duplicate column names: {names}"
        )

        self._names = names
        self._values = row_values
        self._index = {name: i for i, name in enumerate(names)}

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "Record":
        """Build a record from a mapping, keeping its iteration order."""
        return cls(list(mapping.keys()), list(mapping.values()))

    @property
    def column_names(self) -> tuple[str, ...]:
        return self._names

    @property
    def values(self) -> tuple[Any, ...]:
        return self._values

    def get(self, name: str) -> Any:
        """Return the value of a column, or None if absent or null."""
        index = self._index.get(name)
        if index is None:
            return None
        return self._values[index]

    def get_long(self, name: str) -> int | None:
        """
        Return a column value as an integer.

        Args:
            name: Column name (typically a ``_ttl`` or ``_writetime`` column)

        Returns:
            The value converted to int, or None if the column is absent or null
        """
        value = self.get(name)
        if value is None:
            return None
        return int(value)

    def to_dict(self) -> dict[str, Any]:
        return dict(zip(self._names, self._values))

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self._names == other._names and self._values == other._values

    def __hash__(self) -> int:
        return hash((self._names, self._values))

    def __repr__(self) -> str:
        return f"Record({self.to_dict()!r})"

    def __str__(self) -> str:
        columns = ", ".join(f"{name}: {value!r}" for name, value in zip(self._names, self._values))
        return f"{{{columns}}}"


def is_ttl_column(name: str) -> bool:
    return name.endswith(TTL_SUFFIX)


def is_writetime_column(name: str) -> bool:
    return name.endswith(WRITETIME_SUFFIX)


def is_metadata_column(name: str) -> bool:
    """True for ``_ttl`` and ``_writetime`` sibling columns."""
    return is_ttl_column(name) or is_writetime_column(name)
