"""Errors raised by stored-procedure calls."""

from __future__ import annotations

from typing import Any


class CallError(Exception):
    """Raised when a stored-procedure call fails.

    Driver and connectivity failures carry `code=None` and chain the driver
    exception as `__cause__`.
    """

    def __init__(
        self,
        message: str | None,
        *,
        code: int | None = None,
        statement: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.statement = statement

    @property
    def is_status_error(self) -> bool:
        return False


class CallStatusError(CallError):
    """Raised when the status code output differs from the success code.

    `result` holds whatever was mapped before the status check.
    """

    def __init__(
        self,
        code: int,
        message: str | None,
        *,
        statement: str | None = None,
        result: Any = None,
    ):
        super().__init__(message, code=code, statement=statement)
        self.result = result

    @property
    def is_status_error(self) -> bool:
        return True

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"
