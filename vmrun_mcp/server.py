"""vmrun MCP FastMCP server.

Thin wrapper that exposes the vmrun tools over MCP. All vmrun logic lives
in the services/ package.
"""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from vmrun_mcp.services import get_settings, get_vmrun
from vmrun_mcp.tools import vm_guest, vm_list, vm_power, vm_snapshots
from vmrun_mcp.utils.console import ColorfulFormatter

NOISY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "httpx",
    "httpcore",
    "fastmcp",
    "starlette",
    "anyio",
)


def _configure_logging() -> None:
    """Configure colorful logging for the vmrun_mcp package.

    Called at module load time so loggers are configured however the
    server is started.
    """
    settings = get_settings()
    use_colors = settings.log_colors and sys.stderr.isatty()

    package_logger = logging.getLogger("vmrun_mcp")
    package_logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    # Only add handler if not already configured
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColorfulFormatter(use_colors=use_colors))
        package_logger.addHandler(handler)
        package_logger.propagate = False

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


_configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Log the vmrun handle the tools will use.

    Args:
        server: The FastMCP server instance

    Yields:
        Dict with the resolved host type
    """
    vmrun = get_vmrun()
    logger.info("vmrun MCP server starting up (%r)", vmrun)
    try:
        yield {"host_type": vmrun.options.host_type.value}
    finally:
        logger.info("vmrun MCP server shutdown complete")


def create_server() -> FastMCP:
    """Create the MCP server with all tools registered.

    Returns:
        Configured FastMCP server instance
    """
    server = FastMCP("vmrun_mcp", lifespan=app_lifespan)

    server.tool()(vm_list)
    server.tool()(vm_power)
    server.tool()(vm_snapshots)
    server.tool()(vm_guest)

    # Health check endpoint for HTTP transport
    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint."""
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    return server


# Default server instance
mcp = create_server()
