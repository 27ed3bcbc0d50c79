"""Shared core type aliases used across contracts, caller, and ports."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

Position = int
ColumnNames = Optional[Sequence[str]]

CallArgs = List[Any]
OutValues = Dict[Position, Any]
