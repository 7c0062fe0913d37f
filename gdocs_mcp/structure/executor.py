"""Apply planned edits through a document backend.

Each operation reads a fresh snapshot, plans against it and sends the
resulting batch. Operations that need offsets which only exist after a
mutation (filling a table that was just inserted) re-read the document
instead of reusing the earlier snapshot.

Failures are not retried and applied batches are never rolled back.
"""

from __future__ import annotations

import asyncio
import logging

from ..backends.base import DocumentBackend
from ..exceptions import PartialOperationError
from ..exceptions import ValidationError
from ..models import TableFillReport
from .commands import Command
from .commands import InsertText
from .planner import DEFAULT_FILL_BATCH_SIZE
from .planner import partition_batches
from .planner import plan_append
from .planner import plan_insert_table
from .planner import plan_replace_all
from .planner import plan_table_fill
from .planner import plan_update_cell
from .planner import validate_table_dimensions
from .reader import FIRST_BODY_INDEX
from .reader import find_table_at_or_after

logger = logging.getLogger(__name__)


async def append_text(backend: DocumentBackend, document_id: str, text: str) -> list[Command]:
    snapshot = await backend.get(document_id)
    commands = plan_append(snapshot, text)
    await backend.batch_update(document_id, commands)
    return commands


async def replace_all(backend: DocumentBackend, document_id: str, text: str) -> list[Command]:
    snapshot = await backend.get(document_id)
    commands = plan_replace_all(snapshot, text)
    await backend.batch_update(document_id, commands)
    return commands


async def insert_table(
    backend: DocumentBackend,
    document_id: str,
    rows: int,
    columns: int,
    insert_index: int | None = None,
) -> int:
    """Insert an empty table and return the index it was inserted at."""
    validate_table_dimensions(rows, columns)
    snapshot = await backend.get(document_id)
    commands = plan_insert_table(snapshot, rows, columns, insert_index)
    logger.info(f"Inserting {rows}x{columns} table into {document_id} at index {commands[0].index}")
    await backend.batch_update(document_id, commands)
    return commands[0].index


async def update_table_cell(
    backend: DocumentBackend,
    document_id: str,
    table_index: int,
    row: int,
    column: int,
    text: str,
    replace: bool = True,
) -> list[Command]:
    snapshot = await backend.get(document_id)
    commands = plan_update_cell(snapshot, table_index, row, column, text, replace)
    await backend.batch_update(document_id, commands)
    return commands


async def create_document(backend: DocumentBackend, title: str, content: str = "") -> str:
    """Create a document, inserting ``content`` at the start of the new body."""
    document_id = await backend.create(title)
    if content:
        await backend.batch_update(document_id, [InsertText(FIRST_BODY_INDEX, content)])
    return document_id


async def create_formatted_table(
    backend: DocumentBackend,
    document_id: str,
    headers: list[str],
    rows: list[list[str]],
    insert_index: int | None = None,
    header_style: bool = True,
    settle_delay: float = 0.5,
    batch_size: int = DEFAULT_FILL_BATCH_SIZE,
    batch_pause: float = 0.2,
) -> TableFillReport:
    """Insert a table with a header row and fill it.

    1. Insert an empty ``(len(rows) + 1) x len(headers)`` table.
    2. Wait ``settle_delay`` and re-read the document.
    3. Locate the new table as the first table starting at or after the
       insertion index.
    4. Fill it in batches of ``batch_size`` with ``batch_pause`` between them.

    Raises:
        PartialOperationError: If any step after the table insert fails. The
            empty or partly filled table stays in the document.
    """
    if not headers:
        raise ValidationError("At least one header is required", field="headers")
    table_rows = len(rows) + 1
    table_columns = len(headers)
    validate_table_dimensions(table_rows, table_columns)

    target = await insert_table(backend, document_id, table_rows, table_columns, insert_index)
    completed = [f"inserted {table_rows}x{table_columns} table at index {target}"]

    step = "locate new table"
    try:
        await asyncio.sleep(settle_delay)
        fresh = await backend.get(document_id)
        table = find_table_at_or_after(fresh, target)
        logger.info(f"Found new table at {table.start_index} with {len(table.rows)} rows")

        commands = plan_table_fill(table, headers, rows, header_style)
        batches = partition_batches(commands, batch_size)
        for number, batch in enumerate(batches, start=1):
            step = f"fill batch {number}/{len(batches)}"
            await backend.batch_update(document_id, batch)
            completed.append(f"applied {step} ({len(batch)} commands)")
            if number < len(batches):
                await asyncio.sleep(batch_pause)
    except Exception as e:
        logger.error(f"create_formatted_table failed at '{step}' for {document_id}: {e}")
        raise PartialOperationError("create_formatted_table", completed, step, e) from e

    return TableFillReport(
        document_id=document_id,
        insert_index=target,
        table_start_index=table.start_index,
        rows=table_rows,
        columns=table_columns,
        fill_commands=len(commands),
        batches=[len(batch) for batch in batches],
    )
