"""Backend capability object.

Tools never reach for module-level API clients. They ask for the
``BackendContext`` produced once at startup by ``initialize_backends`` and get
a distinct ``BackendNotReadyError`` if startup has not completed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from typing import TYPE_CHECKING
from typing import Callable

from ..exceptions import BackendNotReadyError

if TYPE_CHECKING:
    from ..config import Settings
    from .base import DocumentBackend
    from .base import FileBackend
    from .base import KeywordBackend

logger = logging.getLogger(__name__)


@dataclass
class BackendContext:
    """The backends a tool call may use.

    The keyword backend is built on first use so that a missing Surfer API key
    only fails the keyword tools. ``keyword_factory`` is called at most once.
    """

    documents: DocumentBackend
    files: FileBackend
    keyword_factory: Callable[[], KeywordBackend] | None = None
    _keywords: KeywordBackend | None = field(default=None, repr=False)

    @property
    def keywords(self) -> KeywordBackend:
        if self._keywords is None:
            if self.keyword_factory is None:
                raise BackendNotReadyError("keyword backend")
            self._keywords = self.keyword_factory()
        return self._keywords


def create_backend_context(settings: Settings) -> BackendContext:
    """Authenticate against Google and build the production backends.

    Raises:
        AuthenticationError: If Google credentials cannot be obtained
    """
    from ..auth import authorize
    from .google import GoogleDocumentBackend
    from .google import GoogleDriveFileBackend
    from .surfer import SurferKeywordBackend

    credentials = authorize(settings.credentials_path, settings.token_path)
    logger.info("Google credentials ready, building Docs and Drive clients")

    def keyword_factory() -> KeywordBackend:
        return SurferKeywordBackend(
            api_key=settings.load_surfer_api_key(),
            base_url=settings.surfer_base_url,
            timeout=settings.http_timeout,
        )

    return BackendContext(
        documents=GoogleDocumentBackend(credentials),
        files=GoogleDriveFileBackend(credentials),
        keyword_factory=keyword_factory,
    )


# Singleton instance for the application
_context: BackendContext | None = None


def initialize_backends(settings: Settings, context: BackendContext | None = None) -> BackendContext:
    """Install the process-wide backend context.

    Passing ``context`` installs it as-is (used by tests); otherwise the
    production backends are built from ``settings``.
    """
    global _context
    _context = context or create_backend_context(settings)
    return _context


def get_backends() -> BackendContext:
    """Return the installed context or raise ``BackendNotReadyError``."""
    if _context is None:
        raise BackendNotReadyError()
    return _context


def reset_backends() -> None:
    """Reset the global backend context (for testing)."""
    global _context
    _context = None
