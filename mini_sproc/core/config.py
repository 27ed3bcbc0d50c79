"""Immutable caller configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Mapping

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}.")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from None


@dataclass(frozen=True)
class CallerConfig:
    """Settings read on every call.

    Attributes:
        use_status_fields: Append the trailing (code, message) output pair to
            every call and fail when the code is not `success_code`.
        success_code: Status code that means the procedure succeeded.
        commit: Commit the connection after a successful call, like driver
            auto-commit does.
    """

    use_status_fields: bool = True
    success_code: int = 0
    commit: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.success_code, bool) or not isinstance(self.success_code, int):
            raise TypeError("success_code must be an int.")

    def replace(self, **changes: Any) -> CallerConfig:
        return replace(self, **changes)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        prefix: str = "MINI_SPROC_",
    ) -> CallerConfig:
        """Build config from `<prefix>USE_STATUS_FIELDS`, `SUCCESS_CODE`, `COMMIT`.

        Unset variables keep their defaults.
        """

        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        name = f"{prefix}USE_STATUS_FIELDS"
        if name in env:
            values["use_status_fields"] = _parse_bool(name, env[name])
        name = f"{prefix}SUCCESS_CODE"
        if name in env:
            values["success_code"] = _parse_int(name, env[name])
        name = f"{prefix}COMMIT"
        if name in env:
            values["commit"] = _parse_bool(name, env[name])
        return cls(**values)
