"""Public core API for call building, binding, and result mapping."""

from .caller import Caller
from .config import CallerConfig
from .errors import CallError, CallStatusError
from .params import Param, ParamType, SqlType, param_types, params, type_name
from .results import CallResult, OutputMapper, OutputParams, Row, RowMapper
from .statement import CallBinding, build_call_statement, parameter_count

__all__ = [
    "Caller",
    "CallerConfig",
    "CallError",
    "CallStatusError",
    "Param",
    "ParamType",
    "SqlType",
    "param_types",
    "params",
    "type_name",
    "CallResult",
    "OutputMapper",
    "OutputParams",
    "Row",
    "RowMapper",
    "CallBinding",
    "build_call_statement",
    "parameter_count",
]
