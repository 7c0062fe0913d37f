"""Document index/structure resolution layer.

- snapshot: immutable parsed document body (Paragraph | Table | OpaqueElement)
- reader: offset facts (plain text, length, tables, cells, insertion point)
- commands: primitive edit commands and their API request form
- planner: intent -> ordered command batch, pure
- executor: read -> plan -> write (-> re-read) cycles against a backend
"""

from .commands import Command
from .commands import DeleteRange
from .commands import InsertTable
from .commands import InsertText
from .commands import SetTextStyle
from .reader import compute_document_length
from .reader import extract_plain_text
from .reader import find_insertion_point
from .reader import find_nth_table
from .reader import find_table_at_or_after
from .reader import resolve_cell
from .snapshot import Snapshot

__all__ = [
    "Command",
    "DeleteRange",
    "InsertTable",
    "InsertText",
    "SetTextStyle",
    "Snapshot",
    "compute_document_length",
    "extract_plain_text",
    "find_insertion_point",
    "find_nth_table",
    "find_table_at_or_after",
    "resolve_cell",
]
