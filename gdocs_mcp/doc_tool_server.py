"""MCP Server for Google Docs and Surfer SEO.

This module provides a FastMCP-based MCP server exposing Google Docs documents
and tables, plus Surfer SEO content editors, as tools and resources.

In stdio mode stdout carries the protocol, so every diagnostic goes to stderr
or to the log files configured in ``logger_config``.
"""

import argparse
import json
import logging
import sys

from mcp.server import FastMCP
from starlette.requests import Request
from starlette.responses import Response

from .backends import initialize_backends
from .config import get_settings
from .exceptions import AuthenticationError
from .logger_config import error_logger
from .metrics_config import METRICS_ENABLED
from .metrics_config import ensure_metrics_initialized
from .metrics_config import get_metrics_export
from .metrics_config import get_metrics_summary
from .metrics_config import shutdown_metrics
from .models import OperationStatus
from .tools import register_document_tools
from .tools import register_keyword_tools
from .tools import register_table_tools

logger = logging.getLogger(__name__)

mcp_server = FastMCP(name="GoogleDocsSEOTools")

# Register tools from modular architecture
register_document_tools(mcp_server)
register_table_tools(mcp_server)
register_keyword_tools(mcp_server)


@mcp_server.custom_route("/health", methods=["GET"], name="health")
async def health_check(request: Request) -> Response:
    """Health check endpoint to verify server readiness."""
    return Response(status_code=200)


@mcp_server.custom_route("/metrics", methods=["GET"], name="metrics")
async def metrics_endpoint(request: Request) -> Response:
    """Prometheus metrics endpoint for monitoring tool usage."""
    metrics_data, content_type = get_metrics_export()
    return Response(content=metrics_data, status_code=200, media_type=content_type)


@mcp_server.custom_route("/metrics/summary", methods=["GET"], name="metrics_summary")
async def metrics_summary_endpoint(request: Request) -> Response:
    """JSON summary of the metrics configuration and status."""
    return Response(content=json.dumps(get_metrics_summary(), indent=2), media_type="application/json")


__all__ = [
    "OperationStatus",
    "main",
    "mcp_server",
]


def _configure_logging(level: str, structured: bool) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    error_logger.disabled = not structured


# --- Main Server Execution ---
def main():
    """Run the main entry point for the server with argument parsing."""
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Google Docs SEO MCP Server")
    parser.add_argument(
        "transport",
        choices=["sse", "stdio"],
        default="stdio",
        nargs="?",
        help="Transport: 'sse' for HTTP SSE or 'stdio' for standard I/O (default: stdio)",
    )
    parser.add_argument(
        "--host",
        default=settings.sse_host,
        help=f"Host to bind to for SSE transport (default: {settings.sse_host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.sse_port,
        help=f"Port to bind to for SSE transport (default: {settings.sse_port})",
    )

    args = parser.parse_args()
    _configure_logging(settings.log_level, settings.structured_logging)

    ensure_metrics_initialized()
    logger.info(f"Metrics: {'enabled' if METRICS_ENABLED else 'disabled'}")

    try:
        initialize_backends(settings)
    except AuthenticationError as e:
        logger.critical(f"Failed to initialize Google API clients: {e.message}")
        sys.exit(1)
    if not settings.surfer_configured:
        logger.warning("No Surfer API key configured; keyword tools will report a configuration error")

    logger.info(f"Google Docs server starting. Tools exposed by '{mcp_server.name}'")
    try:
        if args.transport == "stdio":
            logger.info("MCP server running with stdio transport. Waiting for client connection...")
            mcp_server.run(transport="stdio")
        else:
            logger.info(f"MCP server running with HTTP SSE transport on {args.host}:{args.port}")
            logger.info(f"SSE endpoint: http://{args.host}:{args.port}/sse")
            logger.info(f"Health endpoint: http://{args.host}:{args.port}/health")
            # Update server settings before running
            mcp_server.settings.host = args.host
            mcp_server.settings.port = args.port
            mcp_server.run(transport="sse")
    finally:
        shutdown_metrics()


if __name__ == "__main__":
    main()
