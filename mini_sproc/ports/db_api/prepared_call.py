"""DB-API cursor implementation of the core prepared call port."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator

from ...core.params import SqlTypeInput, normalize_sql_type
from ...core.results import Row
from ...core.types import CallArgs, OutValues

if TYPE_CHECKING:
    from .dialects import Dialect


class DbApiRowSet:
    """Row-set view over an executed cursor."""

    def __init__(self, cursor: Any):
        self._cursor = cursor
        self._closed = False
        desc = getattr(cursor, "description", None)
        self.columns: list[str] | None = [d[0] for d in desc] if desc else None

    def __iter__(self) -> Iterator[Row]:
        while True:
            if self._closed:
                raise RuntimeError("result set is closed")
            row = self._cursor.fetchone()
            if row is None:
                return
            yield Row(row, self.columns)

    def close(self) -> None:
        self._closed = True


class DbApiPreparedCall:
    """Collects positional bindings and runs one `callproc()` on a cursor."""

    def __init__(self, conn: Any, proc_name: str, param_count: int, dialect: Dialect):
        self.proc_name = proc_name
        self.param_count = param_count
        self.dialect = dialect
        self.statement = dialect.call_statement(proc_name, param_count)
        self._cursor = conn.cursor()
        self._inputs: dict[int, tuple[Any, SqlTypeInput]] = {}
        self._outputs: dict[int, SqlTypeInput] = {}
        self._args: CallArgs | None = None
        self._returned: Any = None
        self._out_values: OutValues | None = None
        self._executed = False
        self._closed = False

    def _check_position(self, position: int) -> None:
        if self._executed:
            raise RuntimeError("call has already been executed")
        if not 1 <= position <= self.param_count:
            raise IndexError(
                f"position {position} is outside 1..{self.param_count} for {self.statement}"
            )
        if position in self._inputs or position in self._outputs:
            raise ValueError(f"position {position} is already bound.")

    def set_object(self, position: int, value: Any, sql_type: SqlTypeInput) -> None:
        self._check_position(position)
        self._inputs[position] = (value, normalize_sql_type(sql_type))

    def register_out_parameter(self, position: int, sql_type: SqlTypeInput) -> None:
        self._check_position(position)
        self._outputs[position] = normalize_sql_type(sql_type)

    def execute(self) -> bool:
        """Run the procedure; return whether a row-set is available."""

        if self._closed:
            raise RuntimeError("call is closed")
        if self._executed:
            raise RuntimeError("call has already been executed")
        missing = [
            p
            for p in range(1, self.param_count + 1)
            if p not in self._inputs and p not in self._outputs
        ]
        if missing:
            raise ValueError(f"unbound call positions: {missing}")

        args: CallArgs = []
        for position in range(1, self.param_count + 1):
            if position in self._inputs:
                args.append(self._inputs[position][0])
            else:
                args.append(self.dialect.out_placeholder(self._cursor, self._outputs[position]))

        self._executed = True
        self._args = args
        out_positions = sorted(self._outputs)
        self._returned = self.dialect.invoke(self._cursor, self.proc_name, args, out_positions)
        return self.dialect.has_result_set(self._cursor, out_positions)

    def result_set(self) -> DbApiRowSet:
        if not self._executed:
            raise RuntimeError("call has not been executed")
        return DbApiRowSet(self._cursor)

    def get_out(self, position: int) -> Any:
        if not self._executed:
            raise RuntimeError("call has not been executed")
        if position not in self._outputs:
            raise IndexError(f"position {position} is not a registered output parameter")
        if self._out_values is None:
            self._out_values = self.dialect.read_out_values(
                self._cursor,
                self.proc_name,
                self._args or [],
                self._returned,
                sorted(self._outputs),
            )
        return self._out_values[position]

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        close = getattr(self._cursor, "close", None)
        if callable(close):
            close()
