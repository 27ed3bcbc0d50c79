"""Public port exports for concrete adapter implementations."""

from .db_api import (
    DbApiPreparedCall,
    Dialect,
    DirectConnector,
    MySQLDialect,
    OracleDialect,
    PostgresDialect,
    as_provider,
)

__all__ = [
    "DbApiPreparedCall",
    "Dialect",
    "DirectConnector",
    "MySQLDialect",
    "OracleDialect",
    "PostgresDialect",
    "as_provider",
]
