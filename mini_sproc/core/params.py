"""Parameter typing model for stored-procedure calls."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Sequence, Tuple, Union


class SqlType(IntEnum):
    """Driver type tags, numbered like the JDBC/ODBC type codes."""

    BIT = -7
    TINYINT = -6
    SMALLINT = 5
    INTEGER = 4
    BIGINT = -5
    FLOAT = 6
    REAL = 7
    DOUBLE = 8
    NUMERIC = 2
    DECIMAL = 3
    CHAR = 1
    VARCHAR = 12
    LONGVARCHAR = -1
    DATE = 91
    TIME = 92
    TIMESTAMP = 93
    BINARY = -2
    VARBINARY = -3
    BLOB = 2004
    CLOB = 2005
    BOOLEAN = 16
    NULL = 0
    OTHER = 1111
    REF_CURSOR = 2012


SqlTypeInput = Union[SqlType, int]


def normalize_sql_type(sql_type: SqlTypeInput) -> SqlTypeInput:
    """Return the `SqlType` member for known codes, raw ints otherwise."""

    if isinstance(sql_type, bool) or not isinstance(sql_type, int):
        raise TypeError(f"sql_type must be an int or SqlType, got {type(sql_type).__name__}.")
    try:
        return SqlType(sql_type)
    except ValueError:
        return int(sql_type)


def type_name(sql_type: SqlTypeInput) -> str:
    """Render a type tag as its name, or its decimal value when unknown."""

    normalized = normalize_sql_type(sql_type)
    if isinstance(normalized, SqlType):
        return normalized.name
    return str(normalized)


@dataclass(frozen=True)
class ParamType:
    """Type of one output parameter slot."""

    sql_type: SqlTypeInput

    def __post_init__(self) -> None:
        object.__setattr__(self, "sql_type", normalize_sql_type(self.sql_type))

    @classmethod
    def of(cls, sql_type: SqlTypeInput) -> ParamType:
        return cls(sql_type)

    def __str__(self) -> str:
        return type_name(self.sql_type)


@dataclass(frozen=True)
class Param(ParamType):
    """Typed input argument bound at one call position."""

    value: Any = None

    @classmethod
    def of(cls, value: Any, sql_type: SqlTypeInput) -> Param:  # type: ignore[override]
        return cls(sql_type=sql_type, value=value)

    def __str__(self) -> str:
        return f"[value={self.value}, type={type_name(self.sql_type)}]"


ParamInput = Union[Param, Tuple[Any, SqlTypeInput]]


def params(*items: ParamInput) -> list[Param]:
    """Build an input parameter list from `Param`s or `(value, sql_type)` pairs."""

    result: list[Param] = []
    for item in items:
        if isinstance(item, Param):
            result.append(item)
            continue
        if isinstance(item, tuple) and len(item) == 2:
            value, sql_type = item
            result.append(Param.of(value, sql_type))
            continue
        raise TypeError(
            "params() expects Param instances or (value, sql_type) pairs, "
            f"got {item!r}."
        )
    return result


def param_types(*sql_types: SqlTypeInput) -> list[ParamType]:
    """Build an output parameter type list."""

    return [ParamType(sql_type) for sql_type in sql_types]


def describe_params(items: Sequence[ParamType] | None) -> str:
    """Render a parameter list for log lines."""

    if items is None:
        return "null"
    return "[" + ", ".join(str(item) for item in items) + "]"
