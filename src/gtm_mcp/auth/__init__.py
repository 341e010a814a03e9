"""OAuth authentication for the Google Tag Manager MCP server.

Quick Start:
    ```python
    from gtm_mcp.auth import OAuthManager

    manager = OAuthManager()

    # Load the cached token, refreshing or prompting as needed
    credentials = await manager.authorize()
    ```
"""

from gtm_mcp.auth.models import (
    OAuthToken,
    StoredToken,
    TokenMetadata,
    TokenStatus,
)
from gtm_mcp.auth.oauth_manager import (
    GTM_SCOPES,
    AuthenticationError,
    AuthenticationRequiredError,
    OAuthManager,
)
from gtm_mcp.auth.token_storage import TokenStorage

__all__ = [
    "OAuthManager",
    "TokenStorage",
    "OAuthToken",
    "StoredToken",
    "TokenMetadata",
    "TokenStatus",
    "AuthenticationError",
    "AuthenticationRequiredError",
    "GTM_SCOPES",
]
