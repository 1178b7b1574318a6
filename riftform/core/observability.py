"""Observability for riftform.

Structured logging via structlog (bridged to stdlib logging) and the
``analytics_trace`` decorator that records inputs, duration and failures of
pipeline entry points.
"""

import asyncio
import functools
import json
import logging
import sys
import time
import traceback
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, TypeVar, cast

import structlog
from pydantic import BaseModel, Field
from structlog.contextvars import bind_contextvars, unbind_contextvars

_SHARED_PROCESSORS: list[Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def _configure_structlog(final_processor: Any) -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_SHARED_PROCESSORS,
            final_processor,
        ],
        context_class=dict,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


# Configure structured logging
_configure_structlog(
    structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer()
)

logger = structlog.get_logger()

F = TypeVar("F", bound=Callable[..., Any])


def configure_stdlib_json_logging(level: str = "INFO", file_target: str | None = None) -> None:
    """Route every log record through one structlog JSON renderer.

    Pure scoring modules log with ``logging.getLogger(__name__)``; their
    records go through ``foreign_pre_chain``. structlog events are handed to
    the formatter as event dicts, so each line is rendered exactly once.
    """
    _configure_structlog(structlog.stdlib.ProcessorFormatter.wrap_for_formatter)

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_SHARED_PROCESSORS,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(),
        ],
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if file_target:
        handlers.append(logging.FileHandler(file_target, encoding="utf-8"))

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level.upper())


def set_correlation_id(correlation_id: str) -> None:
    """Bind a correlation id to every log event in the current context."""
    bind_contextvars(correlation_id=correlation_id)


def clear_correlation_id() -> None:
    unbind_contextvars("correlation_id")


class FunctionTrace(BaseModel):
    """Model for function execution trace data."""

    function_name: str = Field(description="Fully qualified function name")
    execution_id: str = Field(description="Unique execution ID")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    duration_ms: float | None = Field(default=None, description="Execution duration in milliseconds")

    args: list[Any] = Field(default_factory=list)
    kwargs: dict[str, Any] = Field(default_factory=dict)
    result: Any | None = Field(default=None)

    is_success: bool = Field(default=True)
    error_type: str | None = Field(default=None)
    error_message: str | None = Field(default=None)
    metadata: dict[str, Any] = Field(default_factory=dict)


def _serialize_value(value: Any, max_length: int = 1000) -> Any:
    """Safely serialize a value for logging, truncating long payloads."""
    try:
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json")

        json_str = json.dumps(value, default=str)
        if len(json_str) > max_length:
            return json_str[:max_length] + "..."
        return json.loads(json_str)

    except (TypeError, ValueError):
        str_repr = str(value)
        if len(str_repr) > max_length:
            return str_repr[:max_length] + "..."
        return str_repr


def analytics_trace(
    *,
    capture_result: bool = False,
    capture_args: bool = True,
    max_arg_length: int = 500,
    log_level: str = "INFO",
    add_metadata: dict[str, Any] | None = None,
) -> Callable[[F], F]:
    """Decorator that logs entry, duration, result and failures of a call.

    Works for both sync and async functions. Exceptions are logged with
    their traceback and re-raised unchanged.

    Example:
        >>> @analytics_trace(capture_result=True)
        ... async def load_profile(puuid: str) -> PlayerProfile:
        ...     ...
    """

    def decorator(func: F) -> F:
        function_name = f"{func.__module__}.{func.__name__}"

        def _start(args: tuple[Any, ...], kwargs: dict[str, Any]) -> FunctionTrace:
            trace = FunctionTrace(
                function_name=function_name,
                execution_id=f"{function_name}_{int(time.time() * 1000000)}",
                metadata=add_metadata or {},
            )
            if capture_args:
                trace.args = [_serialize_value(arg, max_arg_length) for arg in args]
                trace.kwargs = {k: _serialize_value(v, max_arg_length) for k, v in kwargs.items()}
            bind_contextvars(execution_id=trace.execution_id)
            logger.log(
                logging.getLevelName(log_level.upper()),
                f"Executing: {function_name}",
                args=trace.args if capture_args else None,
                kwargs=trace.kwargs if capture_args else None,
                **trace.metadata,
            )
            return trace

        def _succeed(trace: FunctionTrace, started: float, result: Any) -> None:
            trace.duration_ms = (time.perf_counter() - started) * 1000
            if capture_result:
                trace.result = _serialize_value(result, max_arg_length)
            logger.log(
                logging.getLevelName(log_level.upper()),
                f"Successfully executed: {function_name}",
                duration_ms=trace.duration_ms,
                result=trace.result if capture_result else None,
            )

        def _fail(trace: FunctionTrace, started: float, exc: Exception) -> None:
            trace.duration_ms = (time.perf_counter() - started) * 1000
            trace.is_success = False
            trace.error_type = type(exc).__name__
            trace.error_message = str(exc)
            logger.error(
                f"Error in function: {function_name}",
                duration_ms=trace.duration_ms,
                error_type=trace.error_type,
                error_message=trace.error_message,
                traceback=traceback.format_exc(),
            )

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            trace = _start(args, kwargs)
            started = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _fail(trace, started, e)
                raise
            else:
                _succeed(trace, started, result)
                return result
            finally:
                unbind_contextvars("execution_id")

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            trace = _start(args, kwargs)
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _fail(trace, started, e)
                raise
            else:
                _succeed(trace, started, result)
                return result
            finally:
                unbind_contextvars("execution_id")

        if asyncio.iscoroutinefunction(func):
            return cast(F, async_wrapper)
        return cast(F, sync_wrapper)

    return decorator
