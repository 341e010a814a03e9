"""Google Tag Manager MCP Server.

Exposes the Google Tag Manager Admin API v2 as MCP tools.
"""

from gtm_mcp.__version__ import __version__

__all__ = ["__version__"]
