"""Structural reader: offset facts extracted from a snapshot.

All functions are pure. They walk the top-level body of a ``Snapshot`` in
document order and rely on the API's guarantee that elements are listed in
non-decreasing offset order.
"""

from __future__ import annotations

from ..exceptions import CellNotFoundError
from ..exceptions import TableNotFoundError
from .snapshot import Paragraph
from .snapshot import Snapshot
from .snapshot import Table
from .snapshot import TableCell
from .snapshot import TextRun

# Offset 0 is reserved; the first addressable position in a body is 1.
FIRST_BODY_INDEX = 1


def extract_plain_text(snapshot: Snapshot) -> str:
    """Concatenate every top-level text run in document order.

    Table cell text is not included. An empty body gives an empty string.
    """
    parts: list[str] = []
    for element in snapshot.body:
        if isinstance(element, Paragraph):
            parts.extend(run.content for run in element.elements if isinstance(run, TextRun))
    return "".join(parts)


def compute_document_length(snapshot: Snapshot) -> int:
    """Return one past the final addressable position, never less than 1."""
    return max([FIRST_BODY_INDEX] + [element.end_index for element in snapshot.body])


def tables(snapshot: Snapshot) -> list[Table]:
    return [element for element in snapshot.body if isinstance(element, Table)]


def find_nth_table(snapshot: Snapshot, index: int) -> Table:
    """Return the ``index``-th (0-based) top-level table."""
    found = tables(snapshot)
    if index < 0 or index >= len(found):
        raise TableNotFoundError(table_index=index, table_count=len(found))
    return found[index]


def find_table_at_or_after(snapshot: Snapshot, offset: int) -> Table:
    """Return the first table, in document order, starting at or after ``offset``.

    Used to locate a table that was just inserted at ``offset``; tables that
    were already in the document before that point are skipped.
    """
    found = tables(snapshot)
    for table in found:
        if table.start_index >= offset:
            return table
    raise TableNotFoundError(min_start_index=offset, table_count=len(found))


def resolve_cell(table: Table, row: int, column: int) -> TableCell:
    """Bounds-check ``row`` then ``column`` and return the cell."""
    if row < 0 or row >= len(table.rows):
        raise CellNotFoundError("row", row, column, limit=len(table.rows))
    cells = table.rows[row].cells
    if column < 0 or column >= len(cells):
        raise CellNotFoundError("column", row, column, limit=len(cells))
    return cells[column]


def find_insertion_point(snapshot: Snapshot, explicit_index: int | None = None) -> int:
    """Return where new block content (a table) should be inserted.

    An explicit index is returned unchanged. Otherwise the position just before
    the body's final newline, which content can never follow.
    """
    if explicit_index is not None:
        return explicit_index
    return max(FIRST_BODY_INDEX, compute_document_length(snapshot) - 1)
