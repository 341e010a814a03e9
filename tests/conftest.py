"""Shared pytest fixtures for gtm-mcp tests.

This module provides reusable fixtures for OAuth token handling, a
recording fake of the Tag Manager REST API served through
httpx.MockTransport, and CLI testing.
"""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from google.oauth2.credentials import Credentials

from gtm_mcp.auth.models import OAuthToken, StoredToken, TokenMetadata
from gtm_mcp.auth.oauth_manager import GTM_SCOPES

# =============================================================================
# Token Fixtures
# =============================================================================


@pytest.fixture
def valid_token() -> OAuthToken:
    """Create a valid, non-expired OAuth token."""
    return OAuthToken(
        access_token="test_access_token_abc123",
        refresh_token="test_refresh_token_xyz789",
        expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
        scopes=list(GTM_SCOPES),
        token_type="Bearer",
    )


@pytest.fixture
def expired_token() -> OAuthToken:
    """Create an expired OAuth token."""
    return OAuthToken(
        access_token="expired_access_token",
        refresh_token="test_refresh_token",
        expires_at=datetime.now(timezone.utc) - timedelta(hours=1),
        scopes=["https://www.googleapis.com/auth/tagmanager.readonly"],
        token_type="Bearer",
    )


@pytest.fixture
def token_metadata() -> TokenMetadata:
    """Create token metadata for testing."""
    return TokenMetadata(
        service_name="gtm-mcp",
        provider="google",
        created_at=datetime.now(timezone.utc) - timedelta(days=1),
    )


@pytest.fixture
def stored_token(valid_token: OAuthToken, token_metadata: TokenMetadata) -> StoredToken:
    """Create a complete stored token for testing."""
    return StoredToken(
        version=1,
        metadata=token_metadata,
        token=valid_token,
    )


# =============================================================================
# Token Storage / OAuth Manager Fixtures
# =============================================================================


@pytest.fixture
def temp_token_path(tmp_path: Path) -> Path:
    """Get the path for a temporary token.json file."""
    return tmp_path / "token.json"


@pytest.fixture
def token_storage(temp_token_path: Path):
    """Create a TokenStorage instance with temporary storage."""
    from gtm_mcp.auth.token_storage import TokenStorage

    return TokenStorage(token_path=temp_token_path)


@pytest.fixture
def client_secrets() -> dict[str, Any]:
    """OAuth client secrets in the Desktop app format."""
    return {
        "installed": {
            "client_id": "test-client-id.apps.googleusercontent.com",
            "client_secret": "test-client-secret",  # pragma: allowlist secret
            "auth_uri": "https://accounts.google.com/o/oauth2/auth",
            "token_uri": "https://oauth2.googleapis.com/token",
            "redirect_uris": ["http://localhost"],
        }
    }


@pytest.fixture
def credentials_file(tmp_path: Path, client_secrets: dict[str, Any]) -> Path:
    """Write client secrets to a temporary credentials.json."""
    path = tmp_path / "credentials.json"
    path.write_text(json.dumps(client_secrets))
    return path


@pytest.fixture
def oauth_manager(token_storage, credentials_file: Path):
    """Create an OAuthManager with temporary storage and client secrets."""
    from gtm_mcp.auth.oauth_manager import OAuthManager

    return OAuthManager(storage=token_storage, credentials_path=credentials_file)


@pytest.fixture
def mock_google_credentials() -> MagicMock:
    """Create a mock Google OAuth2 Credentials object."""
    mock_creds = MagicMock()
    mock_creds.token = "mock_access_token"
    mock_creds.refresh_token = "mock_refresh_token"
    mock_creds.expiry = datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(hours=1)
    mock_creds.expired = False
    mock_creds.valid = True
    mock_creds.scopes = ["https://www.googleapis.com/auth/tagmanager.readonly"]
    return mock_creds


# =============================================================================
# Fake Tag Manager API
# =============================================================================


class FakeGTMApi:
    """Serves canned Tag Manager responses and records every request.

    Responses are queued per (method, path). The last queued response for a
    route keeps being served once the earlier ones are used up. Paths are
    relative to the API base, e.g. "accounts/123/containers/456/workspaces".
    """

    PREFIX = "/tagmanager/v2/"

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[tuple[int, Any]]] = {}

    def add(self, method: str, path: str, json_body: Any = None, status: int = 200) -> None:
        """Queue a response for a route."""
        self._routes.setdefault((method, path), []).append((status, json_body))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix(self.PREFIX)
        queue = self._routes.get((request.method, path))
        if not queue:
            return httpx.Response(
                404,
                json={"error": {"code": 404, "message": f"No route for {request.method} {path}"}},
            )
        status, body = queue.pop(0) if len(queue) > 1 else queue[0]
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def calls(self, method: str | None = None, path: str | None = None) -> list[httpx.Request]:
        """Requests matching an optional method and path."""
        return [
            request
            for request in self.requests
            if (method is None or request.method == method)
            and (path is None or request.url.path.removeprefix(self.PREFIX) == path)
        ]

    def body(self, request: httpx.Request) -> Any:
        """Decoded JSON body of a recorded request."""
        return json.loads(request.content) if request.content else None

    def route_log(self) -> list[tuple[str, str]]:
        """(method, path) of every request, in order."""
        return [
            (request.method, request.url.path.removeprefix(self.PREFIX))
            for request in self.requests
        ]


@pytest.fixture
def gtm_api() -> FakeGTMApi:
    """Fake Tag Manager API with no routes configured."""
    return FakeGTMApi()


@pytest.fixture
def mock_auth() -> MagicMock:
    """OAuthManager stand-in whose authorize() returns test credentials."""
    auth = MagicMock()
    auth.authorize = AsyncMock(return_value=Credentials(token="test-access-token"))
    auth.refresh = AsyncMock()
    return auth


@pytest.fixture
def unauthenticated_client(gtm_api: FakeGTMApi, mock_auth: MagicMock):
    """GTMClient wired to the fake API that has not authenticated yet."""
    from gtm_mcp.gtm_client import GTMClient

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(gtm_api.handler))
    return GTMClient(auth=mock_auth, http_client=http_client)


@pytest.fixture
def gtm_client(unauthenticated_client):
    """Authenticated GTMClient wired to the fake API."""
    unauthenticated_client._credentials = Credentials(token="test-access-token")
    return unauthenticated_client


# =============================================================================
# CLI Test Fixtures
# =============================================================================


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
