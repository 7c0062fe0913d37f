"""Table Tools.

This module contains MCP tools that create and edit tables inside documents:
- insert_table: Insert an empty table
- update_table_cell: Replace or extend the text of one cell
- create_formatted_table: Insert a table with a header row and fill it

Table and cell coordinates are 0-based. ``table_index`` counts top-level
tables in document order.
"""

from mcp.server import FastMCP

from ..backends import get_backends
from ..config import get_settings
from ..error_handler import handle_mcp_tool_error
from ..error_handler import log_operation_start
from ..error_handler import log_operation_success
from ..logger_config import log_mcp_call
from ..models import OperationStatus
from ..structure import executor


def register_table_tools(mcp_server: FastMCP) -> None:
    """Register all table tools with the MCP server."""

    @mcp_server.tool()
    @log_mcp_call
    async def insert_table(doc_id: str, rows: int, columns: int, insert_index: int | None = None) -> OperationStatus:
        """Insert an empty table into a document.

        Parameters:
            doc_id (str): Google Docs document ID
            rows (int): Number of rows, at least 1
            columns (int): Number of columns, at least 1
            insert_index (int, optional): Document index to insert at. When
                omitted the table goes just before the final newline of the body.

        Returns:
            OperationStatus: ``details.insert_index`` is where the table was placed.

        Example Usage:
            ```json
            {
                "name": "insert_table",
                "arguments": {"doc_id": "1AbC...", "rows": 3, "columns": 2}
            }
            ```
        """
        context = {"doc_id": doc_id, "rows": rows, "columns": columns, "insert_index": insert_index}
        log_operation_start("insert_table", **context)
        try:
            target = await executor.insert_table(get_backends().documents, doc_id, rows, columns, insert_index)
        except Exception as e:
            return handle_mcp_tool_error("insert_table", e, context)

        log_operation_success("insert_table", target)
        return OperationStatus(
            success=True,
            message=(
                f"Table created successfully!\nRows: {rows}\nColumns: {columns}\n"
                f"Document ID: {doc_id}\nInserted at index: {target}"
            ),
            details={"document_id": doc_id, "rows": rows, "columns": columns, "insert_index": target},
        )

    @mcp_server.tool()
    @log_mcp_call
    async def update_table_cell(
        doc_id: str,
        table_index: int,
        row: int,
        column: int,
        text: str,
        replace_content: bool = True,
    ) -> OperationStatus:
        """Write text into one table cell.

        With ``replace_content`` (the default) the cell's existing text is
        removed first; otherwise ``text`` is appended to it. An out-of-range
        ``row`` or ``column`` is reported as ROW_NOT_FOUND or COLUMN_NOT_FOUND.

        Parameters:
            doc_id (str): Google Docs document ID
            table_index (int): 0-based index of the table in the document
            row (int): 0-based row
            column (int): 0-based column
            text (str): Text to write
            replace_content (bool): Replace instead of append (default: True)
        """
        context = {"doc_id": doc_id, "table_index": table_index, "row": row, "column": column}
        log_operation_start("update_table_cell", **context)
        try:
            commands = await executor.update_table_cell(
                get_backends().documents, doc_id, table_index, row, column, text, replace_content
            )
        except Exception as e:
            return handle_mcp_tool_error("update_table_cell", e, context)

        log_operation_success("update_table_cell", commands)
        return OperationStatus(
            success=True,
            message=(
                f"Table cell updated successfully!\nTable: {table_index}\nRow: {row}\n"
                f'Column: {column}\nText: "{text}"'
            ),
            details={**context, "document_id": doc_id, "replaced": replace_content, "commands": len(commands)},
        )

    @mcp_server.tool()
    @log_mcp_call
    async def create_formatted_table(
        doc_id: str,
        headers: list[str],
        data: list[list[str]],
        insert_index: int | None = None,
        header_style: bool = True,
    ) -> OperationStatus:
        """Insert a table with a header row and fill it with data.

        The table has ``len(data) + 1`` rows and ``len(headers)`` columns. The
        header row is bolded when ``header_style`` is set. Empty strings leave
        their cell empty; values beyond the header width are ignored.

        The insert and the fill are separate document updates. If filling
        fails the table stays in the document; the error's
        ``details.completed_steps`` lists what was applied and
        ``details.failed_step`` what was not.

        Parameters:
            doc_id (str): Google Docs document ID
            headers (List[str]): Header row values, at least one
            data (List[List[str]]): Body rows
            insert_index (int, optional): Document index to insert at
            header_style (bool): Bold the header row (default: True)

        Example Usage:
            ```json
            {
                "name": "create_formatted_table",
                "arguments": {
                    "doc_id": "1AbC...",
                    "headers": ["Keyword", "Volume"],
                    "data": [["seo tools", "1200"], ["content editor", "800"]]
                }
            }
            ```
        """
        context = {"doc_id": doc_id, "columns": len(headers), "data_rows": len(data), "insert_index": insert_index}
        log_operation_start("create_formatted_table", **context)
        settings = get_settings()
        try:
            report = await executor.create_formatted_table(
                get_backends().documents,
                doc_id,
                headers,
                data,
                insert_index=insert_index,
                header_style=header_style,
                settle_delay=settings.table_settle_delay,
                batch_size=settings.fill_batch_size,
                batch_pause=settings.fill_batch_pause,
            )
        except Exception as e:
            return handle_mcp_tool_error("create_formatted_table", e, context)

        log_operation_success("create_formatted_table", report)
        return OperationStatus(
            success=True,
            message=(
                f"Formatted table created successfully!\nRows: {report.rows} (including header)\n"
                f"Columns: {report.columns}\nDocument ID: {doc_id}\n"
                f"Applied {report.fill_commands} fill commands in {len(report.batches)} batches"
            ),
            details=report.model_dump(),
        )
