"""Concrete call dialect implementations for DB-API adapters."""

from __future__ import annotations

import datetime
import decimal
from collections.abc import Mapping
from typing import Any, Sequence

from ...core.params import SqlType, SqlTypeInput
from ...core.statement import ODBC_CALL_TEMPLATE, build_call_statement
from ...core.types import CallArgs, OutValues
from .prepared_call import DbApiPreparedCall


class Dialect:
    """Base dialect: ODBC call escape, outputs from `cursor.callproc()`.

    PEP 249 `callproc()` returns a modified copy of the argument sequence in
    which output slots hold their new values; drivers returning `None` are
    read back from the argument list itself.
    """

    name: str = "generic"
    paramstyle: str = "qmark"
    call_template: str = ODBC_CALL_TEMPLATE
    separator: str = ","

    def placeholder(self) -> str:
        """Return parameter placeholder for current param style."""

        if self.paramstyle == "qmark":
            return "?"
        if self.paramstyle == "format":
            return "%s"
        if self.paramstyle == "numeric":
            return ":{position}"
        raise ValueError(f"Unsupported paramstyle: {self.paramstyle}")

    def call_statement(self, proc_name: str, param_count: int) -> str:
        """Render the call text for `param_count` positional parameters."""

        return build_call_statement(
            proc_name,
            param_count,
            placeholder=self.placeholder(),
            template=self.call_template,
            separator=self.separator,
        )

    def prepare_call(self, conn: Any, proc_name: str, param_count: int) -> DbApiPreparedCall:
        return DbApiPreparedCall(conn, proc_name, param_count, self)

    def out_placeholder(self, cursor: Any, sql_type: SqlTypeInput) -> Any:
        """Argument value passed for an output slot."""

        return None

    def invoke(self, cursor: Any, proc_name: str, args: CallArgs, out_positions: Sequence[int]) -> Any:
        """Run the procedure once and return what the driver handed back."""

        return cursor.callproc(proc_name, args)

    def has_result_set(self, cursor: Any, out_positions: Sequence[int]) -> bool:
        return getattr(cursor, "description", None) is not None

    def read_out_values(
        self,
        cursor: Any,
        proc_name: str,
        args: CallArgs,
        returned: Any,
        out_positions: Sequence[int],
    ) -> OutValues:
        """Collect output values keyed by 1-based call position."""

        values = list(returned) if returned is not None else args
        if len(values) < len(args):
            raise RuntimeError(
                f"driver returned {len(values)} call arguments, expected {len(args)}."
            )
        return {p: _unwrap(values[p - 1]) for p in out_positions}


def _unwrap(value: Any) -> Any:
    getvalue = getattr(value, "getvalue", None)
    if callable(getvalue):
        return getvalue()
    return value


def _row_values(row: Any) -> list[Any]:
    if isinstance(row, Mapping):
        return list(row.values())
    return list(row)


class PostgresDialect(Dialect):
    """PostgreSQL dialect (`CALL p(%s, %s)`, OUT values come back as one row).

    psycopg 3 has no `callproc()`, so the statement is executed directly and
    output slots are passed as NULL, as PostgreSQL procedures expect.
    """

    name = "postgres"
    paramstyle = "format"
    call_template = "CALL {name}({args})"
    separator = ", "

    def invoke(self, cursor: Any, proc_name: str, args: CallArgs, out_positions: Sequence[int]) -> Any:
        cursor.execute(self.call_statement(proc_name, len(args)), args)
        if not out_positions:
            return None
        row = cursor.fetchone()
        if row is None:
            raise RuntimeError(f"procedure {proc_name} returned no output row.")
        returned = list(args)
        for position, value in zip(out_positions, _row_values(row)):
            returned[position - 1] = value
        return returned

    def has_result_set(self, cursor: Any, out_positions: Sequence[int]) -> bool:
        if out_positions:
            return False
        return super().has_result_set(cursor, out_positions)


class MySQLDialect(Dialect):
    """MySQL dialect (`CALL p(%s, %s)`).

    PyMySQL and MySQLdb leave OUT values in `@_<proc>_<index>` server
    variables after `callproc()`; mysql-connector returns them directly.
    """

    name = "mysql"
    paramstyle = "format"
    call_template = "CALL {name}({args})"
    separator = ", "

    def read_out_values(
        self,
        cursor: Any,
        proc_name: str,
        args: CallArgs,
        returned: Any,
        out_positions: Sequence[int],
    ) -> OutValues:
        if not out_positions:
            return {}
        if type(cursor).__module__.lower().startswith("mysql.connector"):
            return super().read_out_values(cursor, proc_name, args, returned, out_positions)

        nextset = getattr(cursor, "nextset", None)
        if callable(nextset):
            while nextset():
                pass
        names = ", ".join(f"@_{proc_name}_{p - 1}" for p in out_positions)
        cursor.execute(f"SELECT {names}")
        row = cursor.fetchone()
        if row is None:
            raise RuntimeError(f"no output values found for procedure {proc_name}.")
        return dict(zip(out_positions, _row_values(row)))


_ORACLE_VAR_TYPES: dict[int, type] = {
    SqlType.BIT: bool,
    SqlType.BOOLEAN: bool,
    SqlType.TINYINT: int,
    SqlType.SMALLINT: int,
    SqlType.INTEGER: int,
    SqlType.BIGINT: int,
    SqlType.FLOAT: float,
    SqlType.REAL: float,
    SqlType.DOUBLE: float,
    SqlType.NUMERIC: decimal.Decimal,
    SqlType.DECIMAL: decimal.Decimal,
    SqlType.DATE: datetime.date,
    SqlType.TIMESTAMP: datetime.datetime,
    SqlType.BINARY: bytes,
    SqlType.VARBINARY: bytes,
}


class OracleDialect(Dialect):
    """Oracle dialect (`BEGIN p(:1, :2); END;`, outputs bound as cursor vars)."""

    name = "oracle"
    paramstyle = "numeric"
    call_template = "BEGIN {name}({args}); END;"
    separator = ", "

    def out_placeholder(self, cursor: Any, sql_type: SqlTypeInput) -> Any:
        return cursor.var(_ORACLE_VAR_TYPES.get(int(sql_type), str))
