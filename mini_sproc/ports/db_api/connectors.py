"""Connection providers for DB-API drivers."""

from __future__ import annotations

import contextlib
from collections.abc import Callable, Iterator
from typing import Any

from ...core.contracts import ConnectionProvider


class DirectConnector:
    """Opens a fresh driver connection per call with stored credentials.

    Every `acquire()` calls `connect(*args, **kwargs)`; `release()` closes
    the connection.
    """

    def __init__(self, connect: Callable[..., Any], *connect_args: Any, **connect_kwargs: Any):
        if not callable(connect):
            raise TypeError("connect must be callable.")
        self._connect, self._connect_args, self._connect_kwargs = self._normalize_connect_input(
            connect,
            connect_args,
            connect_kwargs,
        )

    def _normalize_connect_input(
        self,
        connect: Callable[..., Any],
        connect_args: tuple[Any, ...],
        connect_kwargs: dict[str, Any],
    ) -> tuple[Callable[..., Any], tuple[Any, ...], dict[str, Any]]:
        base_connect = getattr(connect, "func", None)
        base_args = getattr(connect, "args", None)
        base_kwargs = getattr(connect, "keywords", None)
        if base_connect is None or not isinstance(base_args, tuple):
            return connect, connect_args, connect_kwargs

        merged_args = base_args + connect_args
        merged_kwargs = dict(base_kwargs or {})
        merged_kwargs.update(connect_kwargs)
        return base_connect, merged_args, merged_kwargs

    def acquire(self) -> Any:
        """Open one new connection."""

        return self._connect(*self._connect_args, **self._connect_kwargs)

    def release(self, conn: Any) -> None:
        """Close a connection opened by `acquire()`."""

        close = getattr(conn, "close", None)
        if callable(close):
            close()

    @contextlib.contextmanager
    def connection(self) -> Iterator[Any]:
        """Open and auto-close one connection with a context manager."""

        conn = self.acquire()
        try:
            yield conn
        finally:
            self.release(conn)

    def __repr__(self) -> str:
        name = getattr(self._connect, "__qualname__", repr(self._connect))
        return f"DirectConnector({name})"


class GetconnPoolProvider:
    """Adapts pools exposing `getconn()`/`putconn()` (psycopg2 pools)."""

    def __init__(self, pool: Any):
        self.pool = pool

    def acquire(self) -> Any:
        return self.pool.getconn()

    def release(self, conn: Any) -> None:
        self.pool.putconn(conn)


def as_provider(source: Any, *connect_args: Any, **connect_kwargs: Any) -> ConnectionProvider:
    """Normalize a pool, a pool-like object, or a connect callable.

    Args:
        source: Object with `acquire()`/`release()`, object with
            `getconn()`/`putconn()`, or a driver `connect` callable.
        connect_args: Positional arguments for a connect callable.
        connect_kwargs: Keyword arguments for a connect callable.
    """

    if callable(getattr(source, "acquire", None)) and callable(getattr(source, "release", None)):
        if connect_args or connect_kwargs:
            raise TypeError("connect arguments are only valid with a connect callable.")
        return source
    if callable(getattr(source, "getconn", None)) and callable(getattr(source, "putconn", None)):
        if connect_args or connect_kwargs:
            raise TypeError("connect arguments are only valid with a connect callable.")
        return GetconnPoolProvider(source)
    if callable(source):
        return DirectConnector(source, *connect_args, **connect_kwargs)
    raise TypeError(f"Unsupported connection source: {type(source).__name__}")
