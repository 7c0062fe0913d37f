"""Google Docs and Google Drive backends.

Implements the DocumentBackend and FileBackend interfaces with
google-api-python-client. The client library is blocking, so every
``execute()`` runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httplib2
from google.auth.exceptions import TransportError as GoogleTransportError
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..exceptions import BackendRejectedError
from ..exceptions import DocumentNotFoundError
from ..exceptions import RateLimitedError
from ..exceptions import TransportError
from ..metrics_config import record_batch_update
from ..models import FileMeta
from ..structure.commands import Command
from ..structure.commands import to_requests
from ..structure.snapshot import Snapshot
from .base import DocumentBackend
from .base import FileBackend

logger = logging.getLogger(__name__)

DOCS_MIME_TYPE = "application/vnd.google-apps.document"
FILE_FIELDS = "files(id, name, createdTime, modifiedTime)"


def documents_query(full_text: str | None = None) -> str:
    """Build a Drive query selecting Google Docs, optionally by full text."""
    query = f"mimeType='{DOCS_MIME_TYPE}'"
    if full_text:
        escaped = full_text.replace("\\", "\\\\").replace("'", "\\'")
        query += f" and fullText contains '{escaped}'"
    return query


async def _execute(request: Any, backend: str, document_id: str | None = None) -> dict[str, Any]:
    """Run a prepared API request off the event loop and map its failures."""
    try:
        return await asyncio.to_thread(request.execute) or {}
    except HttpError as e:
        status = e.resp.status
        reason = getattr(e, "reason", None) or str(e)
        logger.warning(f"{backend} returned HTTP {status}: {reason}")
        if status == 404 and document_id:
            raise DocumentNotFoundError(document_id) from e
        if status == 429:
            raise RateLimitedError(backend) from e
        raise BackendRejectedError(backend, reason, status_code=status) from e
    except (httplib2.HttpLib2Error, GoogleTransportError, OSError) as e:
        raise TransportError(backend, str(e)) from e


class GoogleDocumentBackend(DocumentBackend):
    """Document backend backed by the Docs v1 API.

    Args:
        credentials: Authorized google-auth credentials
        service: Prebuilt Docs service (mainly for tests)
    """

    def __init__(self, credentials: Any = None, service: Any = None):
        self._service = service or build("docs", "v1", credentials=credentials, cache_discovery=False)

    async def get(self, document_id: str) -> Snapshot:
        request = self._service.documents().get(documentId=document_id)
        document = await _execute(request, "Google Docs", document_id)
        return Snapshot.from_api(document)

    async def create(self, title: str) -> str:
        request = self._service.documents().create(body={"title": title})
        document = await _execute(request, "Google Docs")
        return document["documentId"]

    async def batch_update(self, document_id: str, commands: list[Command]) -> dict[str, Any]:
        request = self._service.documents().batchUpdate(
            documentId=document_id,
            body={"requests": to_requests(commands)},
        )
        logger.debug(f"batchUpdate {document_id}: {len(commands)} commands")
        try:
            response = await _execute(request, "Google Docs", document_id)
        except Exception:
            record_batch_update(len(commands), status="error")
            raise
        record_batch_update(len(commands))
        return response


class GoogleDriveFileBackend(FileBackend):
    """File backend backed by the Drive v3 API, across all drives."""

    def __init__(self, credentials: Any = None, service: Any = None):
        self._service = service or build("drive", "v3", credentials=credentials, cache_discovery=False)

    async def list(self, query: str, page_size: int) -> list[FileMeta]:
        request = self._service.files().list(
            q=query,
            fields=FILE_FIELDS,
            pageSize=page_size,
            supportsAllDrives=True,
            includeItemsFromAllDrives=True,
            corpora="allDrives",
        )
        response = await _execute(request, "Google Drive")
        return [FileMeta.model_validate(item) for item in response.get("files") or []]

    async def delete(self, file_id: str) -> None:
        request = self._service.files().delete(fileId=file_id, supportsAllDrives=True)
        await _execute(request, "Google Drive", file_id)
