"""Primitive edit commands and their Docs API request form.

A batch of commands is applied by the backend against one fixed pre-batch
offset space, so every command here is expressed in the coordinates of the
snapshot it was planned from.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from typing import Union


@dataclass(frozen=True)
class InsertText:
    index: int
    text: str

    def to_request(self) -> dict[str, Any]:
        return {"insertText": {"location": {"index": self.index}, "text": self.text}}


@dataclass(frozen=True)
class DeleteRange:
    start_index: int
    end_index: int

    def to_request(self) -> dict[str, Any]:
        return {
            "deleteContentRange": {
                "range": {"startIndex": self.start_index, "endIndex": self.end_index}
            }
        }


@dataclass(frozen=True)
class InsertTable:
    index: int
    rows: int
    columns: int

    def to_request(self) -> dict[str, Any]:
        return {
            "insertTable": {
                "rows": self.rows,
                "columns": self.columns,
                "location": {"index": self.index},
            }
        }


@dataclass(frozen=True)
class SetTextStyle:
    """Apply a text style over ``[start_index, end_index)``.

    Only the fields named in ``style`` are touched.
    """

    start_index: int
    end_index: int
    style: tuple[tuple[str, Any], ...] = (("bold", True),)

    def to_request(self) -> dict[str, Any]:
        style = dict(self.style)
        return {
            "updateTextStyle": {
                "range": {"startIndex": self.start_index, "endIndex": self.end_index},
                "textStyle": style,
                "fields": ",".join(style),
            }
        }


Command = Union[InsertText, DeleteRange, InsertTable, SetTextStyle]


def bold(start_index: int, end_index: int) -> SetTextStyle:
    return SetTextStyle(start_index, end_index, (("bold", True),))


def to_requests(commands: list[Command]) -> list[dict[str, Any]]:
    """Serialize a batch for ``documents.batchUpdate``."""
    return [command.to_request() for command in commands]
