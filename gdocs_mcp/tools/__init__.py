"""Tool category modules for the Google Docs MCP server.

This package contains MCP tools organized by functional categories:
- document_tools: Document resources and management (list, get, search, create, update, delete)
- table_tools: Table operations (insert, update cell, create formatted table)
- keyword_tools: Surfer SEO content editors (list, terms, update)
"""

from .document_tools import register_document_tools
from .keyword_tools import register_keyword_tools
from .table_tools import register_table_tools

__all__ = [
    "register_document_tools",
    "register_table_tools",
    "register_keyword_tools",
]
