"""Document Management Tools.

This module contains the MCP resources and tools for whole documents:
- googledocs://list and googledocs://{doc_id} resources
- list_docs: List Google Docs visible to the account
- get_doc: Read a document's title and plain text
- search_docs: Full-text search over documents
- create_doc: Create a document, optionally with initial content
- update_doc: Append to a document or replace its whole body
- delete_doc: Delete a document
"""

from mcp.server import FastMCP

from ..backends import get_backends
from ..backends.google import documents_query
from ..config import get_settings
from ..error_handler import handle_mcp_tool_error
from ..error_handler import log_operation_start
from ..error_handler import log_operation_success
from ..exceptions import ValidationError
from ..helpers import document_uri
from ..helpers import file_details
from ..helpers import format_document
from ..helpers import format_document_listing
from ..helpers import format_search_results
from ..logger_config import log_mcp_call
from ..models import OperationStatus
from ..structure import executor
from ..structure.reader import compute_document_length
from ..structure.reader import extract_plain_text
from ..structure.reader import tables


def register_document_tools(mcp_server: FastMCP) -> None:
    """Register document resources and tools with the MCP server."""

    # --- Resources ---

    @mcp_server.resource("googledocs://list", name="list-docs", mime_type="text/plain")
    @log_mcp_call
    async def list_docs_resource() -> str:
        """The most recently relevant Google Docs in the account's drives."""
        try:
            files = await get_backends().files.list(documents_query(), get_settings().list_page_size)
        except Exception as e:
            error = handle_mcp_tool_error("list-docs", e)
            return f"Error listing documents: {error.message}"
        return format_document_listing(files)

    @mcp_server.resource("googledocs://{doc_id}", name="get-doc", mime_type="text/plain")
    @log_mcp_call
    async def get_doc_resource(doc_id: str) -> str:
        """A single Google Doc rendered as its title and plain text."""
        try:
            snapshot = await get_backends().documents.get(doc_id)
        except Exception as e:
            error = handle_mcp_tool_error("get-doc", e, {"doc_id": doc_id})
            return f"Error getting document {doc_id}: {error.message}"
        return format_document(snapshot)

    # --- Tools ---

    @mcp_server.tool()
    @log_mcp_call
    async def list_docs(page_size: int = 50) -> OperationStatus:
        """List Google Docs across all drives the account can see.

        Parameters:
            page_size (int): Maximum number of documents to return (default: 50)

        Returns:
            OperationStatus: ``message`` holds a Title/ID/Created/Last Modified
            listing; ``details.documents`` holds the same entries as objects.
        """
        try:
            if page_size < 1:
                raise ValidationError("page_size must be at least 1", field="page_size", value=page_size)
            files = await get_backends().files.list(documents_query(), page_size)
        except Exception as e:
            return handle_mcp_tool_error("list_docs", e, {"page_size": page_size})

        return OperationStatus(
            success=True,
            message=format_document_listing(files),
            details={"documents": file_details(files), "count": len(files)},
        )

    @mcp_server.tool()
    @log_mcp_call
    async def get_doc(doc_id: str) -> OperationStatus:
        """Read a document's title and plain text.

        Only top-level paragraph text is returned; text inside tables is not.

        Parameters:
            doc_id (str): Google Docs document ID

        Example Usage:
            ```json
            {
                "name": "get_doc",
                "arguments": {"doc_id": "1AbC..."}
            }
            ```
        """
        try:
            snapshot = await get_backends().documents.get(doc_id)
        except Exception as e:
            return handle_mcp_tool_error("get_doc", e, {"doc_id": doc_id})

        return OperationStatus(
            success=True,
            message=format_document(snapshot),
            details={
                "document_id": doc_id,
                "title": snapshot.title,
                "text": extract_plain_text(snapshot),
                "length": compute_document_length(snapshot),
                "table_count": len(tables(snapshot)),
                "revision_id": snapshot.revision_id,
            },
        )

    @mcp_server.tool()
    @log_mcp_call
    async def search_docs(query: str) -> OperationStatus:
        """Search Google Docs by full text.

        Parameters:
            query (str): Text to search for; quotes and backslashes are escaped

        Returns:
            OperationStatus: Up to ten matching documents.
        """
        try:
            if not query or not query.strip():
                raise ValidationError("Search query must not be empty", field="query")
            files = await get_backends().files.list(documents_query(query), get_settings().search_page_size)
        except Exception as e:
            return handle_mcp_tool_error("search_docs", e, {"query": query})

        return OperationStatus(
            success=True,
            message=format_search_results(query, files),
            details={"query": query, "documents": file_details(files), "count": len(files)},
        )

    @mcp_server.tool()
    @log_mcp_call
    async def create_doc(title: str, content: str = "") -> OperationStatus:
        """Create a new Google Doc.

        Parameters:
            title (str): Title of the new document
            content (str): Optional text inserted at the start of the body

        Returns:
            OperationStatus: ``details.document_id`` and ``details.uri`` identify
            the new document.
        """
        log_operation_start("create_doc", title=title, content_length=len(content))
        try:
            if not title or not title.strip():
                raise ValidationError("Document title must not be empty", field="title")
            document_id = await executor.create_document(get_backends().documents, title, content)
        except Exception as e:
            return handle_mcp_tool_error("create_doc", e, {"title": title})

        log_operation_success("create_doc", document_id)
        uri = document_uri(document_id)
        return OperationStatus(
            success=True,
            message=(
                f"Document created successfully!\nTitle: {title}\nDocument ID: {document_id}\n"
                f"You can now reference this document using: {uri}"
            ),
            details={"document_id": document_id, "title": title, "uri": uri},
        )

    @mcp_server.tool()
    @log_mcp_call
    async def update_doc(doc_id: str, content: str, replace_all: bool = False) -> OperationStatus:
        """Append text to a document, or replace its whole body.

        Parameters:
            doc_id (str): Google Docs document ID
            content (str): Text to write
            replace_all (bool): Replace the body instead of appending (default: False)

        Example Usage:
            ```json
            {
                "name": "update_doc",
                "arguments": {"doc_id": "1AbC...", "content": "New intro\\n", "replace_all": true}
            }
            ```
        """
        mode = "replace_all" if replace_all else "append"
        log_operation_start("update_doc", doc_id=doc_id, mode=mode)
        try:
            backend = get_backends().documents
            if replace_all:
                commands = await executor.replace_all(backend, doc_id, content)
            else:
                commands = await executor.append_text(backend, doc_id, content)
        except Exception as e:
            return handle_mcp_tool_error("update_doc", e, {"doc_id": doc_id, "mode": mode})

        log_operation_success("update_doc", commands)
        return OperationStatus(
            success=True,
            message=f"Document updated successfully!\nDocument ID: {doc_id}",
            details={"document_id": doc_id, "mode": mode, "commands": len(commands)},
        )

    @mcp_server.tool()
    @log_mcp_call
    async def delete_doc(doc_id: str) -> OperationStatus:
        """Delete a Google Doc permanently.

        The document is read first so the confirmation can name it.
        """
        log_operation_start("delete_doc", doc_id=doc_id)
        try:
            backends = get_backends()
            snapshot = await backends.documents.get(doc_id)
            await backends.files.delete(doc_id)
        except Exception as e:
            return handle_mcp_tool_error("delete_doc", e, {"doc_id": doc_id})

        log_operation_success("delete_doc", doc_id)
        return OperationStatus(
            success=True,
            message=f'Document "{snapshot.title}" (ID: {doc_id}) has been successfully deleted.',
            details={"document_id": doc_id, "title": snapshot.title},
        )
