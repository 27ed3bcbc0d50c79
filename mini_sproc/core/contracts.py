"""Core port contracts used by the caller and DB-API adapters."""

from __future__ import annotations

from typing import Any, Iterator, Protocol

from .params import SqlTypeInput
from .results import Row


class RowSetPort(Protocol):
    """Row-set produced by one executed call."""

    def __iter__(self) -> Iterator[Row]: ...

    def close(self) -> None: ...


class PreparedCallPort(Protocol):
    """Positional call handle: bind, execute once, read back."""

    statement: str

    def set_object(self, position: int, value: Any, sql_type: SqlTypeInput) -> None: ...

    def register_out_parameter(self, position: int, sql_type: SqlTypeInput) -> None: ...

    def execute(self) -> bool: ...

    def result_set(self) -> RowSetPort: ...

    def get_out(self, position: int) -> Any: ...

    def close(self) -> None: ...


class CallDialectPort(Protocol):
    """Dialect behavior required by the caller."""

    name: str

    def call_statement(self, proc_name: str, param_count: int) -> str: ...

    def prepare_call(self, conn: Any, proc_name: str, param_count: int) -> PreparedCallPort: ...


class ConnectionProvider(Protocol):
    """Source of driver connections (pool-like or direct)."""

    def acquire(self) -> Any: ...

    def release(self, conn: Any) -> None: ...
