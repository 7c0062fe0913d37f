"""Immutable document snapshots.

A snapshot is the parsed form of one ``documents.get`` response. It is built
once per planning step and discarded afterwards; nothing in the structure
layer keeps a snapshot across a mutation of the same document.

Structural elements form a closed union, ``Paragraph | Table | OpaqueElement``.
Section breaks, tables of contents and any element type added to the API later
land in ``OpaqueElement`` and are skipped by the reader.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Union


@dataclass(frozen=True)
class TextRun:
    """A run of text inside a paragraph."""

    start_index: int
    end_index: int
    content: str


@dataclass(frozen=True)
class OpaqueRun:
    """A non-text paragraph element (inline image, footnote reference, ...)."""

    start_index: int
    end_index: int
    kind: str


ParagraphElement = Union[TextRun, OpaqueRun]


@dataclass(frozen=True)
class Paragraph:
    start_index: int
    end_index: int
    elements: tuple[ParagraphElement, ...] = ()


@dataclass(frozen=True)
class TableCell:
    """A table cell.

    The cell's content occupies ``[start_index, end_index - 1)``. The position
    ``end_index - 1`` holds the cell terminator, which is never deleted.
    """

    start_index: int
    end_index: int
    content: tuple["StructuralElement", ...] = ()

    @property
    def terminator_index(self) -> int:
        return self.end_index - 1

    @property
    def content_length(self) -> int:
        return self.end_index - self.start_index


@dataclass(frozen=True)
class TableRow:
    start_index: int
    end_index: int
    cells: tuple[TableCell, ...] = ()


@dataclass(frozen=True)
class Table:
    start_index: int
    end_index: int
    rows: tuple[TableRow, ...] = ()

    @property
    def column_count(self) -> int:
        return len(self.rows[0].cells) if self.rows else 0


@dataclass(frozen=True)
class OpaqueElement:
    start_index: int
    end_index: int
    kind: str


StructuralElement = Union[Paragraph, Table, OpaqueElement]


@dataclass(frozen=True)
class Snapshot:
    """One read of a document's body."""

    document_id: str
    title: str = ""
    body: tuple[StructuralElement, ...] = ()
    revision_id: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_api(cls, document: dict[str, Any]) -> Snapshot:
        """Build a snapshot from a Docs API ``Document`` resource."""
        content = (document.get("body") or {}).get("content") or []
        return cls(
            document_id=document.get("documentId", ""),
            title=document.get("title", ""),
            body=tuple(_parse_structural_element(element) for element in content),
            revision_id=document.get("revisionId"),
            raw=document,
        )


# --- Parsing ---


def _offsets(data: dict[str, Any]) -> tuple[int, int]:
    # The leading section break has no startIndex in API responses.
    start = data.get("startIndex", 0)
    end = data.get("endIndex", start)
    return start, end


def _parse_paragraph_element(data: dict[str, Any]) -> ParagraphElement:
    start, end = _offsets(data)
    if "textRun" in data:
        return TextRun(start, end, data["textRun"].get("content", ""))
    kind = next((key for key in data if key not in ("startIndex", "endIndex")), "unknown")
    return OpaqueRun(start, end, kind)


def _parse_table(data: dict[str, Any], start: int, end: int) -> Table:
    rows = []
    for row_data in data.get("tableRows") or []:
        row_start, row_end = _offsets(row_data)
        cells = []
        for cell_data in row_data.get("tableCells") or []:
            cell_start, cell_end = _offsets(cell_data)
            cells.append(
                TableCell(
                    cell_start,
                    cell_end,
                    tuple(_parse_structural_element(e) for e in cell_data.get("content") or []),
                )
            )
        rows.append(TableRow(row_start, row_end, tuple(cells)))
    return Table(start, end, tuple(rows))


def _parse_structural_element(data: dict[str, Any]) -> StructuralElement:
    start, end = _offsets(data)
    if "paragraph" in data:
        elements = data["paragraph"].get("elements") or []
        return Paragraph(start, end, tuple(_parse_paragraph_element(e) for e in elements))
    if "table" in data:
        return _parse_table(data["table"], start, end)
    kind = next((key for key in data if key not in ("startIndex", "endIndex")), "unknown")
    return OpaqueElement(start, end, kind)
