"""Google Docs SEO MCP server.

Exposes Google Docs documents and tables and Surfer SEO content editors to
MCP clients.
"""

__version__ = "1.0.0"
