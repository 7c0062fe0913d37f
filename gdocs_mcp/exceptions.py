"""Custom exception hierarchy for the Google Docs MCP server.

Every error raised by the structure layer or by a backend derives from
``DocsMCPError`` so tools can convert it into a uniform error payload at the
operation boundary. The classes map onto these failure categories:

- NotFound: DocumentNotFoundError, TableNotFoundError, CellNotFoundError,
  EditorNotFoundError
- InvalidArgument: ValidationError, InvalidDimensionsError
- BackendRejected: BackendRejectedError
- RateLimited: RateLimitedError
- StateConflict: StateConflictError
- TransportFailure: TransportError
"""

from __future__ import annotations

from typing import Any


class DocsMCPError(Exception):
    """Base exception for all server errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        details: dict[str, Any] | None = None,
        user_message: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.user_message = user_message or message


# === InvalidArgument ===


class ValidationError(DocsMCPError):
    """Raised when tool input fails validation."""

    def __init__(self, message: str, field: str | None = None, value: Any = None, **kwargs):
        details = kwargs.pop("details", {})
        if field:
            details["field"] = field
        if value is not None:
            details["invalid_value"] = value
        super().__init__(message, error_code=kwargs.pop("error_code", "VALIDATION_ERROR"), details=details, **kwargs)


class InvalidDimensionsError(ValidationError):
    """Raised when a table is requested with fewer than one row or column."""

    def __init__(self, rows: int, columns: int):
        super().__init__(
            f"Invalid table dimensions {rows}x{columns}: rows and columns must be at least 1",
            error_code="INVALID_DIMENSIONS",
            details={"rows": rows, "columns": columns},
            user_message="A table needs at least one row and one column.",
        )
        self.rows = rows
        self.columns = columns


# === NotFound ===


class DocumentNotFoundError(DocsMCPError):
    """Raised when a document ID does not resolve."""

    def __init__(self, document_id: str, **kwargs):
        details = kwargs.pop("details", {})
        details["document_id"] = document_id
        super().__init__(
            f"Document '{document_id}' not found",
            error_code="DOCUMENT_NOT_FOUND",
            details=details,
            user_message=f"The document '{document_id}' does not exist or is not accessible.",
            **kwargs,
        )


class TableNotFoundError(DocsMCPError):
    """Raised when the requested table is not present in the snapshot."""

    def __init__(self, table_index: int | None = None, min_start_index: int | None = None, table_count: int = 0):
        details: dict[str, Any] = {"table_count": table_count}
        if table_index is not None:
            details["table_index"] = table_index
            message = f"Table with index {table_index} not found in document ({table_count} tables present)"
        else:
            details["min_start_index"] = min_start_index
            message = f"No table found at or after index {min_start_index}"
        super().__init__(
            message,
            error_code="TABLE_NOT_FOUND",
            details=details,
            user_message=message,
        )
        self.table_index = table_index


class CellNotFoundError(DocsMCPError):
    """Raised when a row or column coordinate is outside the table.

    ``axis`` is ``"row"`` or ``"column"`` so callers can report exactly which
    coordinate was invalid.
    """

    def __init__(self, axis: str, row: int, column: int, limit: int):
        if axis == "row":
            message = f"Row {row} not found in table ({limit} rows)"
        else:
            message = f"Column {column} not found in row {row} ({limit} cells)"
        super().__init__(
            message,
            error_code=f"{axis.upper()}_NOT_FOUND",
            details={"axis": axis, "row": row, "column": column, "limit": limit},
            user_message=message,
        )
        self.axis = axis
        self.row = row
        self.column = column


class EditorNotFoundError(DocsMCPError):
    """Raised on HTTP 404 from the keyword service."""

    def __init__(self, editor_id: int):
        super().__init__(
            f"Content Editor {editor_id} not found (404)",
            error_code="EDITOR_NOT_FOUND",
            details={"editor_id": editor_id, "status_code": 404},
            user_message=f"Content Editor {editor_id} does not exist.",
        )
        self.editor_id = editor_id


# === Backend failures ===


class BackendRejectedError(DocsMCPError):
    """Raised when a backend refuses a request (stale offsets, permissions, ...)."""

    def __init__(self, backend: str, reason: str, status_code: int | None = None, **kwargs):
        details = kwargs.pop("details", {})
        details.update({"backend": backend, "failure_reason": reason})
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            f"{backend} rejected the request: {reason}",
            error_code="BACKEND_REJECTED",
            details=details,
            **kwargs,
        )
        self.status_code = status_code


class RateLimitedError(DocsMCPError):
    """Raised on an explicit HTTP 429."""

    def __init__(self, backend: str):
        super().__init__(
            f"{backend} rate limit exceeded (429)",
            error_code="RATE_LIMITED",
            details={"backend": backend, "status_code": 429},
            user_message="Rate limit exceeded (429). Wait a moment before retrying.",
        )


class StateConflictError(DocsMCPError):
    """Raised on HTTP 409: the resource is not in a patchable state."""

    def __init__(self, backend: str, reason: str = "resource is not in a patchable state"):
        super().__init__(
            f"{backend} conflict (409): {reason}",
            error_code="STATE_CONFLICT",
            details={"backend": backend, "status_code": 409},
            user_message=f"Conflict (409): {reason}.",
        )


class TransportError(DocsMCPError):
    """Raised when a backend cannot be reached (network error, timeout)."""

    def __init__(self, backend: str, reason: str):
        super().__init__(
            f"Could not reach {backend}: {reason}",
            error_code="TRANSPORT_FAILURE",
            details={"backend": backend, "failure_reason": reason},
        )


class BackendNotReadyError(DocsMCPError):
    """Raised when a tool runs before the backends were initialized."""

    def __init__(self, backend: str = "document backend"):
        super().__init__(
            f"The {backend} is not initialized yet",
            error_code="BACKEND_NOT_READY",
            details={"backend": backend},
            user_message="The server has not finished connecting to its backends.",
        )


class PartialOperationError(DocsMCPError):
    """Raised when a multi-step operation fails after earlier steps were applied.

    Applied steps are not rolled back; ``completed_steps`` describes what is
    already in the document and ``failed_step`` what did not happen.
    """

    def __init__(self, operation: str, completed_steps: list[str], failed_step: str, cause: Exception):
        reason = cause.user_message if isinstance(cause, DocsMCPError) else str(cause)
        super().__init__(
            f"{operation} failed during '{failed_step}': {reason}",
            error_code="PARTIAL_OPERATION",
            details={
                "operation": operation,
                "completed_steps": completed_steps,
                "failed_step": failed_step,
                "failure_reason": reason,
                "cause_error_code": cause.error_code if isinstance(cause, DocsMCPError) else "UNEXPECTED_ERROR",
            },
        )
        self.completed_steps = completed_steps
        self.failed_step = failed_step
        self.cause = cause


# === Startup ===


class ConfigurationError(DocsMCPError):
    """Raised when local configuration (API key file, credentials) is missing or broken."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(
            message,
            error_code="CONFIGURATION_ERROR",
            details={"path": path} if path else {},
            user_message=f"Configuration error: {message}",
        )


class AuthenticationError(DocsMCPError):
    """Raised when the initial Google authentication fails. Fatal at startup."""

    def __init__(self, reason: str):
        super().__init__(
            f"Google authentication failed: {reason}",
            error_code="AUTHENTICATION_FAILED",
            details={"failure_reason": reason},
        )
