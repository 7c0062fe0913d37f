"""Pydantic models for the Google Docs MCP server.

This module contains the result payload returned by every tool plus the
records exchanged with the file-listing and keyword-service backends.
"""

import datetime
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

# === Core Operation Models ===


class OperationStatus(BaseModel):
    """Generic status returned by every tool."""

    success: bool
    message: str
    details: dict[str, Any] | None = None  # error_code, completed_steps, entity ids


# === Drive Models ===


class FileMeta(BaseModel):
    """A document file as listed by Drive."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    created_time: datetime.datetime | None = Field(default=None, alias="createdTime")
    modified_time: datetime.datetime | None = Field(default=None, alias="modifiedTime")


# === Keyword Service Models ===


class KeywordTerm(BaseModel):
    """One term suggested by a content editor."""

    term: str
    included: bool = False
    use_in_heading: bool = False


class ContentEditor(BaseModel):
    """Summary of a content editor as returned by the list endpoint."""

    model_config = ConfigDict(extra="allow")

    id: int
    title: str | None = None
    status: str | None = None
    created_at: str | None = None
    keyword: str | None = None


class Pagination(BaseModel):
    current_page: int | None = None
    last_page: int | None = None
    total: int | None = None


class EditorPage(BaseModel):
    """One page of content editors."""

    items: list[ContentEditor]
    pagination: Pagination | None = None
    page: int = 1


# === Table Models ===


class TableFillReport(BaseModel):
    """Outcome of creating and filling a formatted table."""

    document_id: str
    insert_index: int
    table_start_index: int
    rows: int  # including the header row
    columns: int
    fill_commands: int
    batches: list[int]  # command count of each applied fill batch
