"""Stored-procedure call helpers over DB-API drivers."""

import logging

from .core import (
    CallBinding,
    CallError,
    CallResult,
    Caller,
    CallerConfig,
    CallStatusError,
    OutputMapper,
    OutputParams,
    Param,
    ParamType,
    Row,
    RowMapper,
    SqlType,
    build_call_statement,
    param_types,
    parameter_count,
    params,
    type_name,
)
from .ports import (
    DbApiPreparedCall,
    Dialect,
    DirectConnector,
    MySQLDialect,
    OracleDialect,
    PostgresDialect,
    as_provider,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Caller",
    "CallerConfig",
    "CallError",
    "CallStatusError",
    "CallResult",
    "CallBinding",
    "OutputMapper",
    "OutputParams",
    "Param",
    "ParamType",
    "Row",
    "RowMapper",
    "SqlType",
    "build_call_statement",
    "param_types",
    "parameter_count",
    "params",
    "type_name",
    "DbApiPreparedCall",
    "Dialect",
    "DirectConnector",
    "MySQLDialect",
    "OracleDialect",
    "PostgresDialect",
    "as_provider",
]
