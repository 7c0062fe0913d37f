import datetime
import functools
import inspect
import json
import logging
import traceback
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from .metrics_config import record_tool_call_error
from .metrics_config import record_tool_call_start
from .metrics_config import record_tool_call_success

# Attributes every LogRecord carries; anything else came in through ``extra``.
_STANDARD_RECORD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class ErrorCategory(Enum):
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


_CATEGORY_LEVELS = {
    ErrorCategory.CRITICAL: logging.CRITICAL,
    ErrorCategory.ERROR: logging.ERROR,
    ErrorCategory.WARNING: logging.WARNING,
    ErrorCategory.INFO: logging.INFO,
}


class StructuredLogFormatter(logging.Formatter):
    """Format records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.datetime.fromtimestamp(record.created, tz=datetime.timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, exc_tb = record.exc_info
            log_entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": traceback.format_exception(exc_type, exc_value, exc_tb),
            }

        for key, value in vars(record).items():
            if key not in _STANDARD_RECORD_ATTRS and key not in log_entry:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


# --- Logging Setup ---
_log_dir = Path(__file__).resolve().parent

mcp_call_logger = logging.getLogger("mcp_call_logger")
mcp_call_logger.setLevel(logging.INFO)

# maxBytes: 10MB per file, backupCount: 5 files (total ~50MB)
file_handler = RotatingFileHandler(_log_dir / "mcp_calls.log", maxBytes=10 * 1024 * 1024, backupCount=5)
file_handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
mcp_call_logger.addHandler(file_handler)
# stdout carries the stdio transport, so never propagate to a console handler
mcp_call_logger.propagate = False

error_logger = logging.getLogger("error_logger")
error_logger.setLevel(logging.INFO)
error_file_handler = RotatingFileHandler(_log_dir / "errors.log", maxBytes=10 * 1024 * 1024, backupCount=5)
error_file_handler.setFormatter(StructuredLogFormatter())
error_logger.addHandler(error_file_handler)
error_logger.propagate = False


def log_structured_error(
    category: ErrorCategory,
    message: str,
    exception: Exception | None = None,
    context: dict[str, Any] | None = None,
    **kwargs: Any,
) -> None:
    """Log an error with its category and context as structured fields."""
    extra: dict[str, Any] = {"error_category": category.value}
    if context:
        extra.update(context)
    extra.update(kwargs)
    if exception is not None:
        extra.setdefault("error_type", type(exception).__name__)
        error_code = getattr(exception, "error_code", None)
        if error_code:
            extra.setdefault("error_code", error_code)

    error_logger.log(
        _CATEGORY_LEVELS[category],
        message,
        exc_info=exception is not None,
        extra=extra,
    )


def _describe(value: Any) -> str:
    if hasattr(value, "model_dump_json"):  # Pydantic v2 model
        return value.model_dump_json(indent=None, exclude_none=True)
    if isinstance(value, list) and value and hasattr(value[0], "model_dump_json"):
        return "[" + ", ".join(_describe(item) for item in value) + "]"
    return repr(value)


def _result_size(result: Any) -> int:
    if isinstance(result, str):
        return len(result.encode("utf-8"))
    return len(_describe(result))


# --- Decorator for Logging MCP Calls with Metrics ---
def log_mcp_call(func):
    """Log a tool's arguments, result or exception and record call metrics.

    Works for both plain and ``async`` tool functions.
    """
    func_name = getattr(func, "__name__", "unknown_function")

    def _start(args, kwargs):
        start_time = None
        try:
            start_time = record_tool_call_start(func_name, args, kwargs)
        except Exception as e:
            mcp_call_logger.warning(f"Metrics recording failed for {func_name}: {e}")
        try:
            logged_args = [_describe(arg) for arg in args]
            logged_kwargs = {k: _describe(v) for k, v in kwargs.items()}
            arg_str = f"args={logged_args}, kwargs={logged_kwargs}"
        except Exception as e:
            arg_str = f"args/kwargs logging error: {e}"
        mcp_call_logger.info(f"Calling tool: {func_name} with {arg_str}")
        return start_time

    def _success(start_time, result):
        try:
            record_tool_call_success(func_name, start_time, _result_size(result))
        except Exception as e:
            mcp_call_logger.warning(f"Metrics success recording failed for {func_name}: {e}")
        try:
            result_str = _describe(result)
        except Exception as e:
            result_str = f"Result logging error: {e}"
        mcp_call_logger.info(f"Tool {func_name} returned: {result_str}")

    def _failure(start_time, error):
        try:
            record_tool_call_error(func_name, start_time, error)
        except Exception as metrics_error:
            mcp_call_logger.warning(f"Metrics error recording failed for {func_name}: {metrics_error}")
        mcp_call_logger.error(f"Tool {func_name} raised exception: {error}", exc_info=True)
        log_structured_error(
            category=ErrorCategory.ERROR,
            message=f"Tool {func_name} raised an unhandled exception",
            exception=error,
            operation="tool_execution",
            function=func_name,
        )

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            start_time = _start(args, kwargs)
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _failure(start_time, e)
                raise
            _success(start_time, result)
            return result

        return async_wrapper

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = _start(args, kwargs)
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            _failure(start_time, e)
            raise
        _success(start_time, result)
        return result

    return wrapper
