"""Call statement text and positional binding layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from .contracts import PreparedCallPort
from .params import Param, ParamType, SqlType, SqlTypeInput, normalize_sql_type

NUM_OF_STATUS_FIELDS = 2
ODBC_CALL_TEMPLATE = "{{call {name}({args})}}"


def build_call_statement(
    proc_name: str,
    param_count: int,
    *,
    placeholder: str = "?",
    template: str = ODBC_CALL_TEMPLATE,
    separator: str = ",",
) -> str:
    """Render call text with exactly `param_count` placeholders.

    The procedure name is not validated; a malformed name fails in the driver.

    Args:
        proc_name: Stored procedure name, optionally schema qualified.
        param_count: Total number of positional parameters.
        placeholder: Marker for one parameter, or a format string using
            `{position}` for numbered markers (e.g. `":{position}"`).
        template: Outer statement shape with `{name}` and `{args}` fields.
        separator: Text between two placeholders.
    """

    if param_count < 0:
        raise ValueError("param_count must be >= 0.")
    markers = [placeholder.format(position=i + 1) for i in range(param_count)]
    return template.format(name=proc_name, args=separator.join(markers))


def parameter_count(
    in_params: Sequence[Any] | None,
    out_types: Sequence[Any] | None,
    use_status_fields: bool,
) -> int:
    """Number of positional slots needed by one call."""

    return (
        (len(in_params) if in_params else 0)
        + (len(out_types) if out_types else 0)
        + (NUM_OF_STATUS_FIELDS if use_status_fields else 0)
    )


@dataclass(frozen=True)
class BindInstruction:
    """One typed binding applied at a 1-based call position."""

    position: int
    sql_type: SqlTypeInput
    output: bool = False
    value: Any = None


class CallBinding:
    """Accumulates typed binding instructions keyed by call position."""

    def __init__(self) -> None:
        self._instructions: dict[int, BindInstruction] = {}
        self.output_positions: list[int] = []
        self.status_code_position: int | None = None
        self.status_message_position: int | None = None

    @classmethod
    def from_params(
        cls,
        in_params: Sequence[Param] | None,
        out_types: Sequence[ParamType] | None,
        *,
        use_status_fields: bool,
    ) -> CallBinding:
        """Lay out inputs, declared outputs, then the status pair."""

        binding = cls()
        position = 0
        for param in in_params or ():
            position += 1
            binding.bind_input(position, param.value, param.sql_type)
        for out_type in out_types or ():
            position += 1
            binding.register_output(position, out_type.sql_type)
            binding.output_positions.append(position)
        if use_status_fields:
            binding.status_code_position = position + 1
            binding.status_message_position = position + 2
            binding.register_output(binding.status_code_position, SqlType.BOOLEAN)
            binding.register_output(binding.status_message_position, SqlType.VARCHAR)
        return binding

    @property
    def param_count(self) -> int:
        return len(self._instructions)

    @property
    def has_status_fields(self) -> bool:
        return self.status_code_position is not None

    @property
    def instructions(self) -> list[BindInstruction]:
        return [self._instructions[p] for p in sorted(self._instructions)]

    def bind_input(self, position: int, value: Any, sql_type: SqlTypeInput) -> None:
        self._add(BindInstruction(position, normalize_sql_type(sql_type), False, value))

    def register_output(self, position: int, sql_type: SqlTypeInput) -> None:
        self._add(BindInstruction(position, normalize_sql_type(sql_type), True))

    def _add(self, instruction: BindInstruction) -> None:
        if instruction.position < 1:
            raise ValueError("call positions are 1-based.")
        if instruction.position in self._instructions:
            raise ValueError(f"position {instruction.position} is already bound.")
        self._instructions[instruction.position] = instruction

    def apply(self, call: PreparedCallPort) -> None:
        """Replay instructions against a prepared call in position order."""

        for instruction in self.instructions:
            if instruction.output:
                call.register_out_parameter(instruction.position, instruction.sql_type)
            else:
                call.set_object(instruction.position, instruction.value, instruction.sql_type)
