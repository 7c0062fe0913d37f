"""Surfer SEO keyword-service backend.

Implements the KeywordBackend interface over the Surfer REST+JSON API with
``requests``. Blocking calls run in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import requests

from ..exceptions import BackendRejectedError
from ..exceptions import EditorNotFoundError
from ..exceptions import RateLimitedError
from ..exceptions import StateConflictError
from ..exceptions import TransportError
from ..models import ContentEditor
from ..models import EditorPage
from ..models import KeywordTerm
from ..models import Pagination
from .base import KeywordBackend

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://app.surferseo.com/api/v1"
BACKEND_NAME = "Surfer SEO"


class SurferKeywordBackend(KeywordBackend):
    """Keyword backend for Surfer SEO content editors.

    Args:
        api_key: Surfer API key, sent in the ``API-KEY`` header
        base_url: API root, without trailing slash
        timeout: Per-request timeout in seconds
        session: Optional ``requests.Session`` (mainly for tests)
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "API-KEY": api_key,
                "Content-Type": "application/json",
                "Accept": "application/json",
            }
        )

    def _request(
        self,
        method: str,
        path: str,
        editor_id: int | None = None,
        **kwargs: Any,
    ) -> requests.Response:
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            response = self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportError(BACKEND_NAME, str(e)) from e

        if response.ok:
            return response

        logger.warning(f"{method} {path} returned {response.status_code} {response.reason}")
        if response.status_code == 404 and editor_id is not None:
            raise EditorNotFoundError(editor_id)
        if response.status_code == 409:
            raise StateConflictError(BACKEND_NAME, "Content Editor is not in 'completed' state")
        if response.status_code == 429:
            raise RateLimitedError(BACKEND_NAME)
        raise BackendRejectedError(
            BACKEND_NAME,
            f"{response.status_code} - {response.reason}",
            status_code=response.status_code,
        )

    # === KeywordBackend ===

    async def list_editors(
        self,
        from_: str | None = None,
        to: str | None = None,
        page: int = 1,
        page_size: int = 25,
    ) -> EditorPage:
        params: dict[str, Any] = {}
        if from_:
            params["from"] = from_
        if to:
            params["to"] = to
        params["page"] = page
        params["page_size"] = page_size

        response = await asyncio.to_thread(self._request, "GET", "content_editors", params=params)
        payload = response.json()
        meta = payload.get("meta")
        return EditorPage(
            items=[ContentEditor.model_validate(item) for item in payload.get("data") or []],
            pagination=Pagination.model_validate(meta) if meta else None,
            page=page,
        )

    async def get_terms(self, editor_id: int) -> list[KeywordTerm]:
        response = await asyncio.to_thread(
            self._request, "GET", f"content_editors/{editor_id}/terms", editor_id
        )
        return [KeywordTerm.model_validate(term) for term in response.json().get("terms") or []]

    async def patch_editor(
        self,
        editor_id: int,
        content: str | None = None,
        included_terms: list[str] | None = None,
    ) -> None:
        body: dict[str, Any] = {}
        if content:
            body["content"] = content
        if included_terms is not None:
            body["included_terms"] = included_terms

        await asyncio.to_thread(
            self._request, "PATCH", f"content_editors/{editor_id}", editor_id, json=body
        )
