"""Operation-boundary error handling.

Tools call into the structure layer and the backends, which raise
``DocsMCPError`` subclasses. The helpers here log those failures and turn them
into an ``OperationStatus`` error payload so that no tool failure propagates
to the transport.
"""

from __future__ import annotations

import logging
from typing import Any

from .exceptions import DocsMCPError
from .logger_config import ErrorCategory
from .logger_config import log_structured_error
from .models import OperationStatus

logger = logging.getLogger(__name__)


def create_error_response(error: Exception, operation: str) -> OperationStatus:
    """Build the error payload for a failed operation."""
    if isinstance(error, DocsMCPError):
        details = dict(error.details)
        details.update({"error_code": error.error_code, "operation": operation})
        return OperationStatus(success=False, message=error.user_message, details=details)

    return OperationStatus(
        success=False,
        message=f"An unexpected error occurred during {operation}: {error}",
        details={
            "error_code": "UNEXPECTED_ERROR",
            "error_type": type(error).__name__,
            "operation": operation,
        },
    )


def handle_mcp_tool_error(
    tool_name: str, error: Exception, context: dict[str, Any] | None = None
) -> OperationStatus:
    """Log a tool failure and return its error payload."""
    expected = isinstance(error, DocsMCPError)
    logger.error(
        f"Tool {tool_name} failed: {error}",
        exc_info=not expected,
        extra={"tool_name": tool_name, "context": context or {}},
    )
    log_structured_error(
        category=ErrorCategory.WARNING if expected else ErrorCategory.ERROR,
        message=f"Tool {tool_name} failed",
        exception=error,
        context=context,
        operation=tool_name,
    )
    return create_error_response(error, tool_name)


def log_operation_start(operation: str, **context: Any) -> None:
    logger.info(f"Starting {operation}", extra={"context": context})


def log_operation_success(operation: str, result: Any = None) -> None:
    extra: dict[str, Any] = {}
    if result is not None:
        if isinstance(result, (list, dict)):
            extra["result_summary"] = f"{len(result)} items"
        elif isinstance(result, str):
            extra["result_summary"] = result[:100]
        else:
            extra["result_summary"] = type(result).__name__
    logger.info(f"{operation} completed successfully", extra=extra)
