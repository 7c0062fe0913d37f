"""Result formatting helpers shared by the tool modules.

Tools return an ``OperationStatus`` whose ``message`` is the human-readable
rendering produced here and whose ``details`` carry the same data in
structured form.
"""

import datetime
from typing import Any

from .models import EditorPage
from .models import FileMeta
from .models import KeywordTerm
from .structure.reader import extract_plain_text
from .structure.snapshot import Snapshot

RESOURCE_SCHEME = "googledocs"


def document_uri(document_id: str) -> str:
    return f"{RESOURCE_SCHEME}://{document_id}"


def _format_time(value: datetime.datetime | None) -> str:
    if value is None:
        return "unknown"
    return value.isoformat().replace("+00:00", "Z")


# --- Documents ---


def format_file_listing(files: list[FileMeta], header: str, empty: str) -> str:
    """Render a Drive file listing as Title/ID/Created/Last Modified blocks."""
    content = f"{header}\n\n"
    if not files:
        return content + empty

    for item in files:
        content += f"Title: {item.name}\n"
        content += f"ID: {item.id}\n"
        content += f"Created: {_format_time(item.created_time)}\n"
        content += f"Last Modified: {_format_time(item.modified_time)}\n\n"
    return content


def format_document_listing(files: list[FileMeta]) -> str:
    return format_file_listing(files, "Google Docs in your Drive:", "No Google Docs found.")


def format_search_results(query: str, files: list[FileMeta]) -> str:
    return format_file_listing(files, f'Search results for "{query}":', "No documents found matching your query.")


def format_document(snapshot: Snapshot) -> str:
    """Render a document as its title followed by its plain text."""
    return f"Document: {snapshot.title}\n\n{extract_plain_text(snapshot)}"


def file_details(files: list[FileMeta]) -> list[dict[str, Any]]:
    return [item.model_dump(mode="json") for item in files]


# --- Keywords ---


def split_terms(terms: list[KeywordTerm]) -> tuple[list[str], list[str]]:
    """Split terms into those to include in the body and those for headings."""
    included = [t.term for t in terms if t.included]
    headings = [t.term for t in terms if t.use_in_heading]
    return included, headings


def format_keywords(editor_id: int, terms: list[KeywordTerm]) -> str:
    included, headings = split_terms(terms)
    result = f"Surfer SEO keywords (Content Editor: {editor_id})\n\n"

    result += f"Terms to include ({len(included)}):\n"
    for term in included:
        result += f"- {term}\n"

    result += f"\nTerms for headings ({len(headings)}):\n"
    for term in headings:
        result += f"- {term}\n"
    return result


def format_editor_page(
    page: EditorPage, from_date: str | None = None, to_date: str | None = None
) -> str:
    """Render one page of content editors with its pagination footer."""
    result = "Content Editors\n\n"
    if not page.items:
        result += "No Content Editors found."
        if from_date or to_date:
            result += f"\nCheck that the dates are correct ({from_date or 'none'} - {to_date or 'none'})."
        return result

    result += f"Found {len(page.items)} editors (page {page.page}):\n\n"
    for editor in page.items:
        result += f"ID: {editor.id}\n"
        result += f"   Title: {editor.title or 'Untitled'}\n"
        result += f"   Status: {editor.status or 'Unknown'}\n"
        result += f"   Created: {editor.created_at or 'Unknown date'}\n"
        if editor.keyword:
            result += f"   Keyword: {editor.keyword}\n"
        result += "\n"

    if page.pagination:
        result += "Pagination:\n"
        result += f"   Page: {page.pagination.current_page or page.page}\n"
        result += f"   Total pages: {page.pagination.last_page or 'unknown'}\n"
        result += f"   Total items: {page.pagination.total or 'unknown'}\n"
    return result


def format_editor_update(editor_id: int, content: str | None, included_terms: list[str] | None) -> str:
    result = "Content Editor updated successfully!\n\n"
    result += f"ID: {editor_id}\n"
    if content:
        result += f"Updated content: {len(content)} characters\n"
    if included_terms is not None:
        result += f"Updated included terms ({len(included_terms)}):\n"
        for term in included_terms:
            result += f"   - {term}\n"
    result += "\nThe Content Score will be recalculated automatically."
    return result
