"""Mutation planner.

Turns an editing intent into the ordered list of primitive commands that
achieves it when sent as one ``batchUpdate``. Every function takes the snapshot
it plans against; commands are only valid for that snapshot's offsets.
"""

from __future__ import annotations

from ..exceptions import InvalidDimensionsError
from ..exceptions import ValidationError
from .commands import Command
from .commands import DeleteRange
from .commands import InsertTable
from .commands import InsertText
from .commands import bold
from .reader import FIRST_BODY_INDEX
from .reader import compute_document_length
from .reader import find_insertion_point
from .reader import find_nth_table
from .reader import resolve_cell
from .snapshot import Snapshot
from .snapshot import Table

DEFAULT_FILL_BATCH_SIZE = 10


def plan_append(snapshot: Snapshot, text: str) -> list[Command]:
    """Insert ``text`` at the full document length."""
    return [InsertText(compute_document_length(snapshot), text)]


def plan_replace_all(snapshot: Snapshot, text: str) -> list[Command]:
    """Delete the whole body and insert ``text`` at the first position.

    Both commands use pre-batch offsets; the delete must come first. An empty
    body (length 1) gets no delete.
    """
    length = compute_document_length(snapshot)
    commands: list[Command] = []
    if length > FIRST_BODY_INDEX:
        commands.append(DeleteRange(FIRST_BODY_INDEX, length))
    commands.append(InsertText(FIRST_BODY_INDEX, text))
    return commands


def validate_table_dimensions(rows: int, columns: int) -> None:
    if rows < 1 or columns < 1:
        raise InvalidDimensionsError(rows, columns)


def plan_insert_table(
    snapshot: Snapshot, rows: int, columns: int, insert_index: int | None = None
) -> list[Command]:
    validate_table_dimensions(rows, columns)
    return [InsertTable(find_insertion_point(snapshot, insert_index), rows, columns)]


def plan_update_cell(
    snapshot: Snapshot,
    table_index: int,
    row: int,
    column: int,
    text: str,
    replace: bool = True,
) -> list[Command]:
    """Write ``text`` into one cell of the ``table_index``-th table.

    With ``replace`` the cell's content is deleted (terminator kept) and
    ``text`` inserted at the cell start; otherwise ``text`` is inserted just
    before the terminator.
    """
    cell = resolve_cell(find_nth_table(snapshot, table_index), row, column)
    if not replace:
        return [InsertText(cell.terminator_index, text)]

    commands: list[Command] = []
    if cell.content_length > 1:
        commands.append(DeleteRange(cell.start_index, cell.terminator_index))
    commands.append(InsertText(cell.start_index, text))
    return commands


def plan_table_fill(
    table: Table,
    headers: list[str],
    rows: list[list[str]],
    header_style: bool = True,
) -> list[Command]:
    """Fill a freshly created (empty) table.

    Row 0 takes ``headers``; row ``i + 1`` takes ``rows[i]``. Empty strings are
    skipped, as are values that fall outside the table. Cells are disjoint
    ranges, so inserting at one cell's start never moves another cell's start
    and all commands can target the offsets of this one snapshot.
    """
    commands: list[Command] = []

    if table.rows:
        header_cells = table.rows[0].cells
        for header_text, cell in zip(headers, header_cells):
            if not header_text:
                continue
            commands.append(InsertText(cell.start_index, header_text))
            if header_style:
                commands.append(bold(cell.start_index, cell.start_index + len(header_text)))

    for row_values, table_row in zip(rows, table.rows[1:]):
        for cell_text, cell in zip(row_values, table_row.cells):
            if cell_text:
                commands.append(InsertText(cell.start_index, cell_text))

    return commands


def partition_batches(commands: list[Command], batch_size: int = DEFAULT_FILL_BATCH_SIZE) -> list[list[Command]]:
    """Split commands into consecutive batches of at most ``batch_size``."""
    if batch_size < 1:
        raise ValidationError("Batch size must be at least 1", field="batch_size", value=batch_size)
    return [commands[i : i + batch_size] for i in range(0, len(commands), batch_size)]
