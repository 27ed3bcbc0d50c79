"""Stored-procedure call orchestration."""

from __future__ import annotations

import contextlib
import logging
import time
from typing import Any, Callable, Optional, Sequence, TypeVar

from .config import CallerConfig
from .contracts import CallDialectPort, ConnectionProvider, PreparedCallPort
from .errors import CallError, CallStatusError
from .params import Param, ParamType, describe_params
from .results import CallResult, OutputMapper, OutputParams, RowMapper
from .statement import CallBinding

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


def _close_quietly(what: str, close: Callable[..., Any], *args: Any) -> None:
    try:
        close(*args)
    except Exception as exc:
        logger.warning("failed to close %s: %s", what, exc)


def _rollback_on_failure(conn: Any) -> Callable[..., bool]:
    def _exit(exc_type: Any, exc: Any, tb: Any) -> bool:
        if exc_type is not None and not issubclass(exc_type, CallStatusError):
            rollback = getattr(conn, "rollback", None)
            if callable(rollback):
                _close_quietly("transaction", rollback)
        return False

    return _exit


def _status_code(raw: Any) -> int:
    if raw is None:
        return 0
    return int(raw)


class Caller:
    """Executes stored procedures and maps their results.

    Usage:
    - `call()` is the full form: inputs, declared outputs, output mapper, row
      mapper. It returns a `CallResult(items, output)`.
    - `call_list()`, `call_object()` and `execute()` are shortcuts that
      converge on `call()`.
    """

    def __init__(
        self,
        provider: ConnectionProvider,
        dialect: CallDialectPort,
        config: CallerConfig | None = None,
    ):
        """Create caller.

        Args:
            provider: Connection source exposing `acquire()`/`release(conn)`,
                e.g. a pool or `DirectConnector`.
            dialect: Concrete call dialect instance.
            config: Immutable caller settings; defaults to `CallerConfig()`.
        """

        if not callable(getattr(provider, "acquire", None)) or not callable(
            getattr(provider, "release", None)
        ):
            raise TypeError(
                "provider must expose acquire() and release(conn); "
                "wrap raw connect callables or pools with as_provider()."
            )
        self.provider = provider
        self.dialect = dialect
        self.config = config if config is not None else CallerConfig()

    def call(
        self,
        proc_name: str,
        in_params: Optional[Sequence[Param]] = None,
        out_types: Optional[Sequence[ParamType]] = None,
        out_mapper: Optional[OutputMapper[U]] = None,
        rs_mapper: Optional[RowMapper[T]] = None,
    ) -> CallResult[T, U]:
        """Execute one stored procedure call.

        Inputs bind at positions `1..n`, declared outputs at `n+1..n+m` and,
        with status fields enabled, the code and message at `n+m+1` and
        `n+m+2`. Rows are mapped only when the call produced a row-set and
        `rs_mapper` is given. Outputs are mapped once, only when `out_types`
        is non-empty and `out_mapper` is given.

        Raises:
            CallStatusError: Status code differs from `config.success_code`.
            CallError: Any driver, connectivity, or mapping failure.
        """

        started = time.perf_counter()
        statement = proc_name
        result: CallResult[T, U] | None = None
        try:
            binding = CallBinding.from_params(
                in_params,
                out_types,
                use_status_fields=self.config.use_status_fields,
            )
            statement = self.dialect.call_statement(proc_name, binding.param_count)
            with contextlib.ExitStack() as stack:
                conn = self.provider.acquire()
                stack.callback(_close_quietly, "connection", self.provider.release, conn)
                if self.config.commit:
                    stack.push(_rollback_on_failure(conn))

                call = self.dialect.prepare_call(conn, proc_name, binding.param_count)
                stack.callback(_close_quietly, "statement", call.close)

                binding.apply(call)
                has_result = call.execute()

                items: list[T] | None = None
                if has_result and rs_mapper is not None:
                    logger.debug("reading result set")
                    row_set = call.result_set()
                    stack.callback(_close_quietly, "result set", row_set.close)
                    items = [rs_mapper(row) for row in row_set]

                output: U | None = None
                if binding.output_positions and out_mapper is not None:
                    logger.debug("reading output parameters")
                    output = out_mapper(OutputParams(call, binding.output_positions))

                partial: CallResult[T, U] = CallResult(items, output)
                status_error = None
                if binding.has_status_fields:
                    status_error = self._status_error(call, binding, statement, partial)

                # Status failures are committed before they are raised.
                if self.config.commit:
                    commit = getattr(conn, "commit", None)
                    if callable(commit):
                        commit()
                if status_error is not None:
                    raise status_error
                result = partial
        except CallError:
            raise
        except Exception as exc:
            logger.error("[%s] %s", statement, exc)
            raise CallError(str(exc), statement=statement) from exc
        finally:
            self._log_call(started, statement, in_params, out_types, result)
        return result

    def _status_error(
        self,
        call: PreparedCallPort,
        binding: CallBinding,
        statement: str,
        partial: CallResult[Any, Any],
    ) -> CallStatusError | None:
        code = _status_code(call.get_out(binding.status_code_position))
        if code == self.config.success_code:
            return None
        message = call.get_out(binding.status_message_position)
        return CallStatusError(code, message, statement=statement, result=partial)

    def call_list(
        self,
        proc_name: str,
        rs_mapper: RowMapper[T],
        in_params: Optional[Sequence[Param]] = None,
    ) -> list[T]:
        """Execute and return mapped rows (empty when no row-set came back)."""

        items = self.call(proc_name, in_params, None, None, rs_mapper).items
        return items if items is not None else []

    def call_object(
        self,
        proc_name: str,
        out_types: Sequence[ParamType],
        out_mapper: OutputMapper[U],
        in_params: Optional[Sequence[Param]] = None,
    ) -> U | None:
        """Execute and return the mapped output parameters.

        `out_types` lists business outputs only; status fields are added
        from config.
        """

        return self.call(proc_name, in_params, out_types, out_mapper, None).output

    def execute(self, proc_name: str, in_params: Optional[Sequence[Param]] = None) -> None:
        """Execute for side effects only."""

        self.call(proc_name, in_params, None, None, None)

    def _log_call(
        self,
        started: float,
        statement: str,
        in_params: Optional[Sequence[Param]],
        out_types: Optional[Sequence[ParamType]],
        result: CallResult[Any, Any] | None,
    ) -> None:
        took_ms = int((time.perf_counter() - started) * 1000)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "\n>call sp: [%s] \n>\tIN Params: %s, \n>\tOUT Params Types: %s"
                "\n>\tResult: %s; \n>>\ttook: %s ms",
                statement,
                describe_params(in_params),
                describe_params(out_types),
                result,
                took_ms,
            )
        else:
            logger.info(">call sp: [%s] took: %s ms", statement, took_ms)
