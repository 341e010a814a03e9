"""MCP server implementation for Google Tag Manager.

Tools cover the Tag Manager API v2:

- Accounts, user permissions and containers
- Workspaces: status, sync, conflicts, preview, versioning and publishing
- Tags, triggers, variables, folders and built-in variables
- Versions, version headers and environments
- Server-side clients, transformations, Google tag configs, templates, zones
- Pre-built GA4, Facebook Pixel, form tracking and site workflows

Transport: Stdio
Authentication: OAuth 2.0, loaded on the first tool call
"""

from gtm_mcp.server.gtm_server import GTMServer, ToolError, main


def create_server() -> GTMServer:
    """Create and configure a GTM MCP server.

    Returns:
        GTMServer: Configured server instance ready to run.

    Example:
        >>> server = create_server()
        >>> asyncio.run(server.run())
    """
    return GTMServer()


__all__ = ["create_server", "GTMServer", "ToolError", "main"]
