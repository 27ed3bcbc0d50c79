"""Row and output-parameter accessors plus the call result pair."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterator, Optional, Sequence, TypeVar

from .types import ColumnNames

if TYPE_CHECKING:
    from .contracts import PreparedCallPort

T = TypeVar("T")
U = TypeVar("U")

_MISSING = object()


class Row:
    """Read-only view of one row in a row-set.

    Columns are addressed by 0-based position or by name. Names come from the
    driver row itself (mapping rows, `sqlite3.Row`) or from
    `cursor.description` for tuple rows.
    """

    __slots__ = ("_values", "_columns", "_index")

    def __init__(self, values: Any, columns: ColumnNames = None):
        if isinstance(values, Mapping):
            columns = list(values.keys())
            values = [values[c] for c in columns]
        elif columns is None and callable(getattr(values, "keys", None)):
            columns = list(values.keys())
        self._values: tuple[Any, ...] = tuple(values)
        self._columns: tuple[str, ...] = tuple(columns) if columns is not None else ()
        if self._columns and len(self._columns) != len(self._values):
            raise ValueError(
                f"row has {len(self._values)} values but {len(self._columns)} column names."
            )
        self._index = {name: i for i, name in enumerate(self._columns)}

    def __getitem__(self, key: int | str) -> Any:
        if isinstance(key, str):
            try:
                return self._values[self._index[key]]
            except KeyError:
                raise KeyError(key) from None
        return self._values[key]

    def get(self, key: int | str, default: Any = None) -> Any:
        try:
            return self[key]
        except (KeyError, IndexError):
            return default

    def keys(self) -> list[str]:
        return list(self._columns)

    def as_dict(self) -> dict[str, Any]:
        if not self._columns:
            raise TypeError("row has no column names; cannot map to dict.")
        return dict(zip(self._columns, self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Row):
            return self._values == other._values and self._columns == other._columns
        return NotImplemented

    def __repr__(self) -> str:
        if self._columns:
            return f"Row({self.as_dict()!r})"
        return f"Row({self._values!r})"


class OutputParams:
    """Positional accessor bound to the declared output-parameter slots.

    Index `0` reads the first declared output, i.e. call position `n + 1`
    where `n` is the number of input parameters. Status fields are not
    part of this view.
    """

    def __init__(self, call: PreparedCallPort, positions: Sequence[int]):
        self._call = call
        self._positions = list(positions)

    def __getitem__(self, index: int) -> Any:
        return self._call.get_out(self._positions[index])

    def get(self, index: int, default: Any = _MISSING) -> Any:
        if -len(self._positions) <= index < len(self._positions):
            return self[index]
        if default is _MISSING:
            raise IndexError(f"output index {index} out of range.")
        return default

    def __len__(self) -> int:
        return len(self._positions)

    def __iter__(self) -> Iterator[Any]:
        for position in self._positions:
            yield self._call.get_out(position)

    def as_list(self) -> list[Any]:
        return list(self)


@dataclass(frozen=True)
class CallResult(Generic[T, U]):
    """Pair of mapped row-set items and mapped output parameters.

    Either side is `None` when it was not requested or not produced.
    """

    items: Optional[list[T]] = None
    output: Optional[U] = None

    def __iter__(self) -> Iterator[Any]:
        yield self.items
        yield self.output


RowMapper = Callable[[Row], T]
OutputMapper = Callable[[OutputParams], U]
