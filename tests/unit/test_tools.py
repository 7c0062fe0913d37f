"""Unit tests for the MCP tools and resources against fake backends."""

import pytest

from gdocs_mcp.backends import BackendContext
from gdocs_mcp.backends import initialize_backends
from gdocs_mcp.backends.google import documents_query
from gdocs_mcp.config import get_settings
from gdocs_mcp.doc_tool_server import mcp_server
from gdocs_mcp.exceptions import BackendRejectedError
from gdocs_mcp.exceptions import ConfigurationError
from gdocs_mcp.exceptions import EditorNotFoundError
from gdocs_mcp.exceptions import RateLimitedError
from gdocs_mcp.exceptions import StateConflictError
from gdocs_mcp.exceptions import TransportError
from gdocs_mcp.models import ContentEditor
from gdocs_mcp.models import EditorPage
from gdocs_mcp.models import FileMeta
from gdocs_mcp.models import KeywordTerm
from gdocs_mcp.models import Pagination
from gdocs_mcp.structure.commands import DeleteRange
from gdocs_mcp.structure.commands import InsertTable
from gdocs_mcp.structure.commands import InsertText
from tests.shared.fakes import FakeDocumentBackend
from tests.shared.fakes import FakeFileBackend
from tests.shared.fakes import document_json
from tests.shared.fakes import table_element
from tests.shared.fakes import text_paragraph


def tool(name: str):
    return mcp_server._tool_manager.get_tool(name).fn


def hello_document() -> dict:
    return document_json("doc", "Hello", text_paragraph(1, "Hello\n"))


def with_table() -> dict:
    """``hello_document`` after a 3x2 table was inserted at index 6."""
    return document_json(
        "doc", "Hello", text_paragraph(1, "Hello"), table_element(6, 3, 2), text_paragraph(23, "\n")
    )


class TestRegistration:
    def test_all_tools_registered(self):
        names = {t.name for t in mcp_server._tool_manager.list_tools()}

        assert names == {
            "list_docs",
            "get_doc",
            "search_docs",
            "create_doc",
            "update_doc",
            "delete_doc",
            "insert_table",
            "update_table_cell",
            "create_formatted_table",
            "list_content_editors",
            "get_surfer_keywords",
            "update_content_editor",
        }

    @pytest.mark.asyncio
    async def test_tool_before_backends_ready(self):
        result = await tool("get_doc")(doc_id="doc")

        assert result.success is False
        assert result.details["error_code"] == "BACKEND_NOT_READY"


class TestResources:
    @pytest.mark.asyncio
    async def test_list_resource(self, backends, file_backend):
        file_backend.files = [FileMeta(id="doc-1", name="Plan")]

        contents = list(await mcp_server.read_resource("googledocs://list"))

        assert "Google Docs in your Drive:" in contents[0].content
        assert "ID: doc-1" in contents[0].content
        assert file_backend.queries == [(documents_query(), 50)]

    @pytest.mark.asyncio
    async def test_document_resource(self, backends, document_backend):
        document_backend.documents["doc"] = [hello_document()]

        contents = list(await mcp_server.read_resource("googledocs://doc"))

        assert contents[0].content == "Document: Hello\n\nHello\n"

    @pytest.mark.asyncio
    async def test_missing_document_resource_returns_error_text(self, backends):
        contents = list(await mcp_server.read_resource("googledocs://missing"))

        assert contents[0].content == (
            "Error getting document missing: The document 'missing' does not exist or is not accessible."
        )

    @pytest.mark.asyncio
    async def test_list_resource_backend_failure(self, backends, file_backend):
        file_backend.error = TransportError("Google Drive", "connection reset")

        contents = list(await mcp_server.read_resource("googledocs://list"))

        assert contents[0].content.startswith("Error listing documents: ")


class TestDocumentTools:
    @pytest.mark.asyncio
    async def test_list_docs(self, backends, file_backend):
        file_backend.files = [FileMeta(id="a", name="A"), FileMeta(id="b", name="B")]

        result = await tool("list_docs")(page_size=1)

        assert result.success is True
        assert result.details["count"] == 1
        assert result.details["documents"][0]["id"] == "a"
        assert file_backend.queries == [(documents_query(), 1)]

    @pytest.mark.asyncio
    async def test_list_docs_rejects_page_size(self, backends):
        result = await tool("list_docs")(page_size=0)

        assert result.details["error_code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_list_docs_backend_failure(self, backends, file_backend):
        file_backend.error = BackendRejectedError("Google Drive", "forbidden", status_code=403)

        result = await tool("list_docs")()

        assert result.success is False
        assert result.details["error_code"] == "BACKEND_REJECTED"
        assert result.details["status_code"] == 403

    @pytest.mark.asyncio
    async def test_get_doc(self, backends, document_backend):
        document_backend.documents["doc"] = [with_table()]

        result = await tool("get_doc")(doc_id="doc")

        assert result.success is True
        assert result.message == "Document: Hello\n\nHello\n"
        assert result.details["length"] == 24
        assert result.details["table_count"] == 1

    @pytest.mark.asyncio
    async def test_get_doc_missing(self, backends):
        result = await tool("get_doc")(doc_id="nope")

        assert result.success is False
        assert result.details["error_code"] == "DOCUMENT_NOT_FOUND"
        assert result.details["operation"] == "get_doc"

    @pytest.mark.asyncio
    async def test_search_docs(self, backends, file_backend):
        result = await tool("search_docs")(query="it's")

        assert result.success is True
        assert file_backend.queries == [(documents_query("it's"), get_settings().search_page_size)]
        assert result.message.startswith('Search results for "it\'s"')

    @pytest.mark.asyncio
    async def test_search_docs_empty_query(self, backends, file_backend):
        result = await tool("search_docs")(query="  ")

        assert result.details["error_code"] == "VALIDATION_ERROR"
        assert file_backend.queries == []

    @pytest.mark.asyncio
    async def test_create_doc(self, backends, document_backend):
        result = await tool("create_doc")(title="Notes", content="Hi\n")

        document_id = result.details["document_id"]
        assert result.success is True
        assert result.details["uri"] == f"googledocs://{document_id}"
        assert document_backend.batches == [(document_id, [InsertText(1, "Hi\n")])]

    @pytest.mark.asyncio
    async def test_create_doc_requires_title(self, backends, document_backend):
        result = await tool("create_doc")(title="")

        assert result.details["error_code"] == "VALIDATION_ERROR"
        assert document_backend.created == []

    @pytest.mark.asyncio
    async def test_update_doc_appends(self, backends, document_backend):
        document_backend.documents["doc"] = [hello_document()]

        result = await tool("update_doc")(doc_id="doc", content=" more")

        assert result.details["mode"] == "append"
        assert document_backend.commands == [InsertText(7, " more")]

    @pytest.mark.asyncio
    async def test_update_doc_replaces(self, backends, document_backend):
        document_backend.documents["doc"] = [hello_document()]

        result = await tool("update_doc")(doc_id="doc", content="New", replace_all=True)

        assert result.details["commands"] == 2
        assert document_backend.commands == [DeleteRange(1, 7), InsertText(1, "New")]

    @pytest.mark.asyncio
    async def test_delete_doc(self, backends, document_backend, file_backend):
        document_backend.documents["doc"] = [hello_document()]

        result = await tool("delete_doc")(doc_id="doc")

        assert result.success is True
        assert result.message == 'Document "Hello" (ID: doc) has been successfully deleted.'
        assert file_backend.deleted == ["doc"]

    @pytest.mark.asyncio
    async def test_delete_missing_doc(self, backends, file_backend):
        result = await tool("delete_doc")(doc_id="nope")

        assert result.details["error_code"] == "DOCUMENT_NOT_FOUND"
        assert file_backend.deleted == []


class TestTableTools:
    @pytest.mark.asyncio
    async def test_insert_table(self, backends, document_backend):
        document_backend.documents["doc"] = [hello_document()]

        result = await tool("insert_table")(doc_id="doc", rows=2, columns=3)

        assert result.success is True
        assert result.details["insert_index"] == 6
        assert "Inserted at index: 6" in result.message
        assert document_backend.commands == [InsertTable(6, 2, 3)]

    @pytest.mark.asyncio
    async def test_insert_table_invalid_dimensions(self, backends, document_backend):
        document_backend.documents["doc"] = [hello_document()]

        result = await tool("insert_table")(doc_id="doc", rows=0, columns=3)

        assert result.details["error_code"] == "INVALID_DIMENSIONS"
        assert document_backend.batches == []

    @pytest.mark.asyncio
    async def test_update_table_cell(self, backends, document_backend):
        document_backend.documents["doc"] = [with_table()]

        result = await tool("update_table_cell")(doc_id="doc", table_index=0, row=2, column=1, text="X")

        assert result.success is True
        assert document_backend.commands == [DeleteRange(20, 21), InsertText(20, "X")]

    @pytest.mark.asyncio
    async def test_update_table_cell_append(self, backends, document_backend):
        document_backend.documents["doc"] = [with_table()]

        await tool("update_table_cell")(doc_id="doc", table_index=0, row=0, column=0, text="X", replace_content=False)

        assert document_backend.commands == [InsertText(9, "X")]

    @pytest.mark.asyncio
    async def test_update_table_cell_bad_row(self, backends, document_backend):
        document_backend.documents["doc"] = [with_table()]

        result = await tool("update_table_cell")(doc_id="doc", table_index=0, row=3, column=0, text="X")

        assert result.details["error_code"] == "ROW_NOT_FOUND"
        assert result.details["axis"] == "row"

    @pytest.mark.asyncio
    async def test_update_table_cell_bad_table(self, backends, document_backend):
        document_backend.documents["doc"] = [with_table()]

        result = await tool("update_table_cell")(doc_id="doc", table_index=1, row=0, column=0, text="X")

        assert result.details["error_code"] == "TABLE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_create_formatted_table(self, backends, document_backend):
        document_backend.documents["doc"] = [hello_document(), with_table()]

        result = await tool("create_formatted_table")(
            doc_id="doc", headers=["A", "B"], data=[["1", "2"], ["3", "4"]]
        )

        assert result.success is True
        assert result.details["fill_commands"] == 8
        assert result.details["batches"] == [8]
        assert "Rows: 3 (including header)" in result.message

    @pytest.mark.asyncio
    async def test_create_formatted_table_partial_failure(self, backends):
        failing = FakeDocumentBackend(
            {"doc": [hello_document(), with_table()]},
            fail_on_batch=2,
            fail_with=BackendRejectedError("Google Docs", "Invalid requests[3]", status_code=400),
        )
        initialize_backends(get_settings(), BackendContext(failing, FakeFileBackend()))

        result = await tool("create_formatted_table")(doc_id="doc", headers=["A", "B"], data=[["1", "2"]])

        assert result.success is False
        assert result.details["error_code"] == "PARTIAL_OPERATION"
        assert result.details["completed_steps"] == ["inserted 2x2 table at index 6"]
        assert result.details["failed_step"] == "fill batch 1/1"
        assert result.details["cause_error_code"] == "BACKEND_REJECTED"
        assert failing.commands == [InsertTable(6, 2, 2)]

    @pytest.mark.asyncio
    async def test_create_formatted_table_rate_limited_fill(self, backends):
        failing = FakeDocumentBackend(
            {"doc": [hello_document(), with_table()]},
            fail_on_batch=2,
            fail_with=RateLimitedError("Google Docs"),
        )
        initialize_backends(get_settings(), BackendContext(failing, FakeFileBackend()))

        result = await tool("create_formatted_table")(doc_id="doc", headers=["A", "B"], data=[["1", "2"]])

        assert result.details["error_code"] == "PARTIAL_OPERATION"
        assert result.details["cause_error_code"] == "RATE_LIMITED"

    @pytest.mark.asyncio
    async def test_create_formatted_table_without_headers(self, backends, document_backend):
        document_backend.documents["doc"] = [hello_document()]

        result = await tool("create_formatted_table")(doc_id="doc", headers=[], data=[])

        assert result.details["error_code"] == "VALIDATION_ERROR"


class TestKeywordTools:
    @pytest.mark.asyncio
    async def test_list_content_editors(self, backends, keyword_backend):
        keyword_backend.page = EditorPage(
            items=[ContentEditor(id=5, title="Guide")],
            pagination=Pagination(current_page=2, last_page=2, total=26),
            page=2,
        )

        result = await tool("list_content_editors")(from_date="2024-01-01T00:00:00Z", page=2)

        assert result.success is True
        assert keyword_backend.list_calls == [("2024-01-01T00:00:00Z", None, 2, 25)]
        assert result.details["items"][0]["id"] == 5
        assert "Total items: 26" in result.message

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page_size", [0, 101])
    async def test_list_content_editors_page_size_bounds(self, backends, keyword_backend, page_size):
        result = await tool("list_content_editors")(page_size=page_size)

        assert result.details["error_code"] == "VALIDATION_ERROR"
        assert keyword_backend.list_calls == []

    @pytest.mark.asyncio
    async def test_get_surfer_keywords(self, backends, keyword_backend):
        keyword_backend.terms = [
            KeywordTerm(term="seo", included=True, use_in_heading=True),
            KeywordTerm(term="audit", included=True),
        ]

        result = await tool("get_surfer_keywords")(content_editor_id=7)

        assert result.details["included_terms"] == ["seo", "audit"]
        assert result.details["heading_terms"] == ["seo"]

    @pytest.mark.asyncio
    async def test_get_surfer_keywords_not_found(self, backends, keyword_backend):
        keyword_backend.error = EditorNotFoundError(7)

        result = await tool("get_surfer_keywords")(content_editor_id=7)

        assert result.success is False
        assert result.details["error_code"] == "EDITOR_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_update_content_editor(self, backends, keyword_backend):
        result = await tool("update_content_editor")(content_editor_id=7, included_terms=["seo"])

        assert result.success is True
        assert keyword_backend.patches == [(7, None, ["seo"])]

    @pytest.mark.asyncio
    async def test_update_content_editor_requires_input(self, backends, keyword_backend):
        result = await tool("update_content_editor")(content_editor_id=7)

        assert result.details["error_code"] == "VALIDATION_ERROR"
        assert keyword_backend.patches == []

    @pytest.mark.asyncio
    async def test_update_content_editor_conflict(self, backends, keyword_backend):
        keyword_backend.error = StateConflictError("Surfer SEO", "Content Editor is not in 'completed' state")

        result = await tool("update_content_editor")(content_editor_id=7, content="<p>x</p>")

        assert result.details["error_code"] == "STATE_CONFLICT"

    @pytest.mark.asyncio
    async def test_missing_api_key(self, document_backend, file_backend):
        def no_key():
            raise ConfigurationError("Surfer config file not found")

        initialize_backends(get_settings(), BackendContext(document_backend, file_backend, keyword_factory=no_key))

        result = await tool("get_surfer_keywords")(content_editor_id=7)

        assert result.details["error_code"] == "CONFIGURATION_ERROR"
