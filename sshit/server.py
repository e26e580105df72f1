"""sshit FastMCP server.

Thin wiring of the socket lifecycle tools into an MCP server. Business
logic lives in services/ and tools/.
"""

import logging

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from sshit.config import Settings
from sshit.middleware import ErrorHandlingMiddleware, ToolLoggingMiddleware
from sshit.services import get_settings
from sshit.tools import (
    socket_check,
    socket_create,
    socket_exec,
    socket_exit,
    socket_path,
    socket_remove,
    socket_teardown,
    socket_validate,
)

logger = logging.getLogger(__name__)

SOCKET_TOOLS = [
    socket_create,
    socket_check,
    socket_exec,
    socket_exit,
    socket_remove,
    socket_teardown,
    socket_validate,
    socket_path,
]


def configure_middleware(server: FastMCP, settings: Settings) -> None:
    """Add middleware in order: ErrorHandling -> ToolLogging.

    Args:
        server: The FastMCP server to configure.
        settings: Source of payload, slow-call and traceback options.
    """
    server.add_middleware(ErrorHandlingMiddleware(include_traceback=settings.include_traceback))
    server.add_middleware(
        ToolLoggingMiddleware(
            include_payloads=settings.log_payloads,
            slow_threshold_ms=float(settings.slow_threshold_ms),
        )
    )


def create_server(settings: Settings | None = None) -> FastMCP:
    """Create the MCP server with middleware, tools and health route.

    Returns:
        Configured FastMCP server instance
    """
    settings = settings or get_settings()
    server = FastMCP("sshit")

    configure_middleware(server, settings)

    for tool in SOCKET_TOOLS:
        server.tool(tool)

    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint."""
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    logger.debug("Registered %d socket tool(s)", len(SOCKET_TOOLS))
    return server


def run_server(settings: Settings | None = None) -> None:
    """Run the MCP server with the configured transport."""
    settings = settings or get_settings()
    server = create_server(settings)

    if settings.transport == "stdio":
        logger.info("Starting sshit MCP server (transport=stdio)")
        server.run(transport="stdio")
    else:
        logger.info(
            "Starting sshit MCP server (transport=http, host=%s, port=%d)",
            settings.http_host,
            settings.http_port,
        )
        server.run(transport="http", host=settings.http_host, port=settings.http_port)
