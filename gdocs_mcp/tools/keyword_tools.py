"""Keyword Tools.

This module contains MCP tools for Surfer SEO content editors:
- list_content_editors: Page through content editors
- get_surfer_keywords: Read an editor's suggested terms
- update_content_editor: Push content and/or included terms to an editor

The keyword backend is created on first use, so a missing Surfer API key only
makes these tools fail.
"""

from mcp.server import FastMCP

from ..backends import get_backends
from ..error_handler import handle_mcp_tool_error
from ..error_handler import log_operation_start
from ..error_handler import log_operation_success
from ..exceptions import ValidationError
from ..helpers import format_editor_page
from ..helpers import format_editor_update
from ..helpers import format_keywords
from ..helpers import split_terms
from ..logger_config import log_mcp_call
from ..models import OperationStatus

MAX_EDITOR_PAGE_SIZE = 100


def register_keyword_tools(mcp_server: FastMCP) -> None:
    """Register all keyword tools with the MCP server."""

    @mcp_server.tool()
    @log_mcp_call
    async def list_content_editors(
        from_date: str | None = None,
        to_date: str | None = None,
        page: int = 1,
        page_size: int = 25,
    ) -> OperationStatus:
        """List Surfer SEO content editors.

        Parameters:
            from_date (str, optional): ISO8601 timestamp; only editors created
                after it (e.g. 2023-01-01T00:00:00Z)
            to_date (str, optional): ISO8601 timestamp; only editors created before it
            page (int): Page number (default: 1)
            page_size (int): Items per page, 1-100 (default: 25)
        """
        context = {"from_date": from_date, "to_date": to_date, "page": page, "page_size": page_size}
        try:
            if page < 1:
                raise ValidationError("page must be at least 1", field="page", value=page)
            if not 1 <= page_size <= MAX_EDITOR_PAGE_SIZE:
                raise ValidationError(
                    f"page_size must be between 1 and {MAX_EDITOR_PAGE_SIZE}", field="page_size", value=page_size
                )
            result = await get_backends().keywords.list_editors(from_date, to_date, page, page_size)
        except Exception as e:
            return handle_mcp_tool_error("list_content_editors", e, context)

        return OperationStatus(
            success=True,
            message=format_editor_page(result, from_date, to_date),
            details=result.model_dump(),
        )

    @mcp_server.tool()
    @log_mcp_call
    async def get_surfer_keywords(content_editor_id: int) -> OperationStatus:
        """Read the terms a content editor suggests.

        Terms are split into those to include in the body and those to use in
        headings.
        """
        try:
            terms = await get_backends().keywords.get_terms(content_editor_id)
        except Exception as e:
            return handle_mcp_tool_error("get_surfer_keywords", e, {"content_editor_id": content_editor_id})

        included, headings = split_terms(terms)
        return OperationStatus(
            success=True,
            message=format_keywords(content_editor_id, terms),
            details={
                "content_editor_id": content_editor_id,
                "included_terms": included,
                "heading_terms": headings,
                "total_terms": len(terms),
            },
        )

    @mcp_server.tool()
    @log_mcp_call
    async def update_content_editor(
        content_editor_id: int,
        content: str | None = None,
        included_terms: list[str] | None = None,
    ) -> OperationStatus:
        """Update a content editor's content and/or included terms.

        At least one of ``content`` or ``included_terms`` must be given. Surfer
        answers 409 (STATE_CONFLICT) while the editor is still processing.

        Parameters:
            content_editor_id (int): ID of the content editor
            content (str, optional): New HTML content replacing the existing content
            included_terms (List[str], optional): Terms to use in this editor
        """
        context = {
            "content_editor_id": content_editor_id,
            "content_length": len(content) if content else 0,
            "included_terms": len(included_terms) if included_terms is not None else None,
        }
        log_operation_start("update_content_editor", **context)
        try:
            if not content and included_terms is None:
                raise ValidationError(
                    "Provide at least 'content' or 'included_terms' to update",
                    details={"missing_fields": ["content", "included_terms"]},
                )
            await get_backends().keywords.patch_editor(content_editor_id, content, included_terms)
        except Exception as e:
            return handle_mcp_tool_error("update_content_editor", e, context)

        log_operation_success("update_content_editor", content_editor_id)
        return OperationStatus(
            success=True,
            message=format_editor_update(content_editor_id, content, included_terms),
            details={
                "content_editor_id": content_editor_id,
                "content_updated": bool(content),
                "included_terms": included_terms,
            },
        )
