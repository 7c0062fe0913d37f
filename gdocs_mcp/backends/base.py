"""Abstract base classes for the backends the server proxies to.

Defines the narrow contracts the structure layer and the tools rely on:
a document backend, a file-listing backend and a keyword-service backend.
"""

from __future__ import annotations

from abc import ABC
from abc import abstractmethod
from typing import Any

from ..models import EditorPage
from ..models import FileMeta
from ..models import KeywordTerm
from ..structure.commands import Command
from ..structure.snapshot import Snapshot


class DocumentBackend(ABC):
    """Structural rich-text document store (Google Docs)."""

    @abstractmethod
    async def get(self, document_id: str) -> Snapshot:
        """Read a fresh snapshot of a document.

        Raises:
            DocumentNotFoundError: If the ID does not resolve
        """
        pass

    @abstractmethod
    async def create(self, title: str) -> str:
        """Create an empty document and return its ID."""
        pass

    @abstractmethod
    async def batch_update(self, document_id: str, commands: list[Command]) -> dict[str, Any]:
        """Apply commands atomically against one pre-batch offset space.

        The whole batch fails if any command is rejected.

        Raises:
            BackendRejectedError: If the batch was refused
        """
        pass


class FileBackend(ABC):
    """File listing and deletion (Google Drive)."""

    @abstractmethod
    async def list(self, query: str, page_size: int) -> list[FileMeta]:
        """List files matching a Drive query string."""
        pass

    @abstractmethod
    async def delete(self, file_id: str) -> None:
        """Delete a file permanently."""
        pass


class KeywordBackend(ABC):
    """Keyword-analysis editors (Surfer SEO content editors).

    HTTP 404, 409 and 429 surface as EditorNotFoundError, StateConflictError
    and RateLimitedError.
    """

    @abstractmethod
    async def list_editors(
        self,
        from_: str | None = None,
        to: str | None = None,
        page: int = 1,
        page_size: int = 25,
    ) -> EditorPage:
        pass

    @abstractmethod
    async def get_terms(self, editor_id: int) -> list[KeywordTerm]:
        pass

    @abstractmethod
    async def patch_editor(
        self,
        editor_id: int,
        content: str | None = None,
        included_terms: list[str] | None = None,
    ) -> None:
        pass
