"""DB-API adapter, connector, and dialect exports."""

from .connectors import DirectConnector, GetconnPoolProvider, as_provider
from .dialects import Dialect, MySQLDialect, OracleDialect, PostgresDialect
from .prepared_call import DbApiPreparedCall, DbApiRowSet

__all__ = [
    "DbApiPreparedCall",
    "DbApiRowSet",
    "Dialect",
    "DirectConnector",
    "GetconnPoolProvider",
    "MySQLDialect",
    "OracleDialect",
    "PostgresDialect",
    "as_provider",
]
