"""Backend layer for the Google Docs MCP server.

Narrow async contracts for the services the server proxies to, their Google
Docs / Drive and Surfer SEO implementations, and the capability object tools
receive them through.

Usage:
    from gdocs_mcp.backends import get_backends

    backends = get_backends()
    snapshot = await backends.documents.get(doc_id)
"""

from .base import DocumentBackend
from .base import FileBackend
from .base import KeywordBackend
from .factory import BackendContext
from .factory import get_backends
from .factory import initialize_backends
from .factory import reset_backends

__all__ = [
    "BackendContext",
    "DocumentBackend",
    "FileBackend",
    "KeywordBackend",
    "get_backends",
    "initialize_backends",
    "reset_backends",
]
