"""Google Tag Manager MCP server.

Exposes the Tag Manager API v2 as MCP tools over stdio. Tool calls are
validated against the catalog in :mod:`gtm_mcp.server.tools`, forwarded to
:class:`gtm_mcp.gtm_client.GTMClient` and returned as pretty-printed JSON.

Authentication is lazy: the first tool call loads (or refreshes) the cached
token. Errors that stop a call before it reaches the API are raised as
:class:`ToolError`; the MCP SDK reports them as error-flagged tool results
and the connection stays up.
"""

import asyncio
import json
import logging
import os
import sys
from typing import Any

import jsonschema
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from gtm_mcp import components
from gtm_mcp.__version__ import __version__
from gtm_mcp.auth import AuthenticationError
from gtm_mcp.gtm_client import GTMClient
from gtm_mcp.server.tools import TOOL_SPECS, list_tool_definitions

LOG_LEVEL_ENV = "GTM_MCP_LOG_LEVEL"

# stdout carries the MCP transport
logging.basicConfig(
    level=getattr(logging, os.environ.get(LOG_LEVEL_ENV, "INFO").upper(), logging.INFO),
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

SERVER_NAME = "gtm-mcp"


class ToolError(Exception):
    """Tool call rejected before reaching the Tag Manager API."""


class GTMServer:
    """MCP server for the Google Tag Manager API.

    Attributes:
        server: MCP Server instance.
        client: GTMClient that serves the tool calls.
    """

    def __init__(self, client: GTMClient | None = None) -> None:
        """Initialize the GTM MCP server.

        Args:
            client: API client. Creates default if not provided.
        """
        self.server = Server(SERVER_NAME, version=__version__)
        self.client = client or GTMClient()
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Register MCP tool handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            """List available GTM tools."""
            return list_tool_definitions()

        # Arguments are validated by call_tool against the same catalog
        @self.server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
            """Handle tool calls."""
            result = await self.call_tool(name, arguments)
            return [TextContent(type="text", text=json.dumps(result, indent=2))]

    async def _ensure_authenticated(self) -> None:
        if self.client.is_authenticated:
            return
        try:
            await self.client.authenticate()
        except (AuthenticationError, FileNotFoundError, ValueError) as e:
            logger.error(f"Authentication failed: {e}")
            raise ToolError(f"Authentication error: {e}") from e

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> dict[str, Any]:
        """Validate, authenticate and dispatch a tool call.

        Args:
            name: Tool name.
            arguments: Tool arguments as received from the client.

        Returns:
            The GTMClient (or component) result.

        Raises:
            ToolError: If the tool is unknown, the arguments are invalid, or
                authentication fails.
        """
        spec = TOOL_SPECS.get(name)
        if spec is None:
            raise ToolError(f"Unknown tool: {name}")

        arguments = arguments or {}
        try:
            jsonschema.validate(arguments, spec.tool.inputSchema)
        except jsonschema.ValidationError as e:
            raise ToolError(f"Invalid arguments for {name}: {e.message}") from e

        await self._ensure_authenticated()

        kwargs = spec.to_kwargs(arguments)
        logger.info(f"Calling tool {name}")

        result: dict[str, Any]
        if spec.component:
            handler = getattr(components, spec.method)
            result = await handler(self.client, **kwargs)
        else:
            result = await getattr(self.client, spec.method)(**kwargs)
        return result

    async def run(self) -> None:
        """Run the MCP server using stdio transport."""
        try:
            async with stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )
        finally:
            await self.client.close()


def main() -> None:
    """Entry point for the GTM MCP server."""
    server = GTMServer()
    asyncio.run(server.run())


if __name__ == "__main__":
    main()
