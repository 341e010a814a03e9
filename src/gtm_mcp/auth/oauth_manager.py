"""OAuth session manager for the Google Tag Manager API.

Loads the cached token, refreshes it when expired and, when no usable token
exists, runs an interactive copy/paste consent flow using google-auth-oauthlib.

Environment Variables:
    GTM_CREDENTIALS_FILE: OAuth client secrets JSON (default: ./credentials.json)
    GTM_TOKEN_FILE: Token cache JSON (default: ./token.json)
"""

import asyncio
import json
import logging
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import click
from google.auth.exceptions import RefreshError, TransportError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow

from gtm_mcp.auth.models import OAuthToken, TokenMetadata, TokenStatus
from gtm_mcp.auth.token_storage import TokenStorage

logger = logging.getLogger(__name__)

# Google Tag Manager OAuth scopes
GTM_SCOPES = [
    "https://www.googleapis.com/auth/tagmanager.edit.containers",
    "https://www.googleapis.com/auth/tagmanager.edit.containerversions",
    "https://www.googleapis.com/auth/tagmanager.publish",
    "https://www.googleapis.com/auth/tagmanager.delete.containers",
    "https://www.googleapis.com/auth/tagmanager.manage.accounts",
    "https://www.googleapis.com/auth/tagmanager.manage.users",
    "https://www.googleapis.com/auth/tagmanager.readonly",
]

CREDENTIALS_FILE_ENV = "GTM_CREDENTIALS_FILE"
DEFAULT_CREDENTIALS_FILENAME = "credentials.json"
DEFAULT_REDIRECT_URI = "http://localhost"
TOKEN_URI = "https://oauth2.googleapis.com/token"  # nosec B105 - public endpoint


class AuthenticationError(RuntimeError):
    """OAuth flow failed."""


class AuthenticationRequiredError(AuthenticationError):
    """No usable token and no terminal to run the consent flow in."""


def get_credentials_path() -> Path:
    """Get the configured OAuth client secrets path.

    Returns:
        Path from GTM_CREDENTIALS_FILE, or credentials.json in the working directory.
    """
    configured = os.environ.get(CREDENTIALS_FILE_ENV)
    if configured:
        return Path(configured)
    return Path.cwd() / DEFAULT_CREDENTIALS_FILENAME


def is_interactive() -> bool:
    """Return True when both stdin and stdout are attached to a terminal."""
    return sys.stdin.isatty() and sys.stdout.isatty()


class OAuthManager:
    """OAuth session manager for Google Tag Manager.

    Handles loading, refreshing and persisting the user's OAuth token and
    produces google-auth Credentials for the API client.

    Attributes:
        storage: Token storage instance for persisting credentials.
        credentials_path: Location of the OAuth client secrets file.
        scopes: OAuth scopes requested during consent.

    Example:
        ```python
        manager = OAuthManager()

        # Load, refresh or acquire credentials
        credentials = await manager.authorize()

        # Force a fresh consent flow (used by `gtm-mcp setup`)
        token = await manager.authenticate()
        ```
    """

    def __init__(
        self,
        storage: TokenStorage | None = None,
        credentials_path: Path | None = None,
        scopes: list[str] | None = None,
    ) -> None:
        """Initialize OAuth manager.

        Args:
            storage: Token storage instance. Creates default if not provided.
            credentials_path: Client secrets file. Uses GTM_CREDENTIALS_FILE if not provided.
            scopes: OAuth scopes. Uses GTM_SCOPES if not provided.
        """
        self.storage = storage or TokenStorage()
        self.credentials_path = Path(credentials_path) if credentials_path else get_credentials_path()
        self.scopes = scopes or GTM_SCOPES
        self._service_name = "gtm-mcp"

    @property
    def token_path(self) -> Path:
        """Get the token storage path."""
        return self.storage.token_path

    def has_valid_tokens(self) -> bool:
        """Check if a valid, unexpired token is cached."""
        return self.storage.get_status() == TokenStatus.VALID

    def get_status(self) -> TokenStatus:
        """Get the status of the cached token."""
        return self.storage.get_status()

    def load_client_secrets(self) -> dict[str, Any]:
        """Load the OAuth client secrets file.

        Returns:
            The parsed client secrets with an "installed" or "web" section.

        Raises:
            FileNotFoundError: If the client secrets file does not exist.
            ValueError: If the file is not a valid client secrets document.
        """
        if not self.credentials_path.exists():
            raise FileNotFoundError(
                f"Credentials file not found: {self.credentials_path}. "
                "Please download OAuth 2.0 credentials from Google Cloud Console."
            )

        try:
            with open(self.credentials_path) as f:
                secrets = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Credentials file {self.credentials_path} is not valid JSON: {e}") from e

        if not isinstance(secrets, dict) or not ("installed" in secrets or "web" in secrets):
            raise ValueError(
                f"Credentials file {self.credentials_path} must contain an "
                "'installed' or 'web' OAuth client section"
            )
        return secrets

    @staticmethod
    def _client_section(secrets: dict[str, Any]) -> dict[str, Any]:
        section: dict[str, Any] = secrets.get("installed") or secrets["web"]
        return section

    def _credentials_to_token(self, credentials: Credentials) -> OAuthToken:
        """Convert google-auth Credentials to OAuthToken.

        Args:
            credentials: Google OAuth2 credentials.

        Returns:
            OAuthToken with all credential data.
        """
        if credentials.expiry:
            expires_at = credentials.expiry
            # google-auth keeps expiry as naive UTC
            if expires_at.tzinfo is None:
                expires_at = expires_at.replace(tzinfo=timezone.utc)
        else:
            # Default to 1 hour expiration
            expires_at = datetime.now(timezone.utc) + timedelta(hours=1)

        return OAuthToken(  # nosec B106 - "Bearer" is OAuth token type, not a password
            access_token=credentials.token,
            refresh_token=credentials.refresh_token,
            expires_at=expires_at,
            scopes=list(credentials.scopes or self.scopes),
            token_type="Bearer",
        )

    def _token_to_credentials(
        self, token: OAuthToken, client: dict[str, Any] | None = None
    ) -> Credentials:
        """Convert OAuthToken to google-auth Credentials.

        Args:
            token: OAuth token to convert.
            client: Client secrets section, needed for refresh.

        Returns:
            Google OAuth2 credentials.
        """
        client = client or {}
        expiry = token.expires_at.astimezone(timezone.utc).replace(tzinfo=None)
        return Credentials(
            token=token.access_token,
            refresh_token=token.refresh_token,
            token_uri=client.get("token_uri", TOKEN_URI),
            client_id=client.get("client_id"),
            client_secret=client.get("client_secret"),
            scopes=token.scopes or self.scopes,
            expiry=expiry,
        )

    def save_credentials(
        self, credentials: Credentials, metadata: TokenMetadata | None = None
    ) -> OAuthToken:
        """Persist credentials to the token cache.

        Args:
            credentials: Credentials to store.
            metadata: Existing metadata to carry forward, if any.

        Returns:
            The stored OAuthToken.
        """
        token = self._credentials_to_token(credentials)
        if metadata is None:
            metadata = TokenMetadata(service_name=self._service_name, provider="google")
        else:
            metadata.last_refreshed = datetime.now(timezone.utc)
        self.storage.store(token, metadata)
        return token

    async def authorize(self) -> Credentials:
        """Produce authorized credentials for the Tag Manager API.

        Loads the cached token, refreshes it when expired, and falls back to
        the interactive consent flow when no usable token exists.

        Returns:
            Google OAuth2 credentials ready for API use.

        Raises:
            FileNotFoundError: If the client secrets file is missing.
            AuthenticationRequiredError: If consent is needed but no terminal is attached.
            AuthenticationError: If the consent flow fails.
        """
        stored = self.storage.retrieve()
        secrets = self.load_client_secrets()
        client = self._client_section(secrets)

        if stored is None or not stored.token.access_token:
            return await self._consent_or_fail(secrets)

        credentials = self._token_to_credentials(stored.token, client)

        if stored.token.is_expired(buffer_seconds=0):
            logger.info("Cached token expired, attempting refresh...")
            loop = asyncio.get_running_loop()
            try:
                await loop.run_in_executor(None, credentials.refresh, Request())
            except (RefreshError, TransportError) as e:
                logger.warning(f"Token refresh failed: {e}")
                return await self._consent_or_fail(secrets)
            self.save_credentials(credentials, stored.metadata)

        return credentials

    async def refresh(self, credentials: Credentials) -> Credentials:
        """Refresh credentials in place and persist the new token.

        Args:
            credentials: Expired credentials carrying a refresh token.

        Returns:
            The same credentials object, refreshed.
        """
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, credentials.refresh, Request())
        stored = self.storage.retrieve()
        self.save_credentials(credentials, stored.metadata if stored else None)
        return credentials

    async def authenticate(self) -> OAuthToken:
        """Run the consent flow unconditionally and store the result.

        Returns:
            OAuthToken containing access and refresh tokens.

        Raises:
            FileNotFoundError: If the client secrets file is missing.
            AuthenticationError: If the code exchange fails.
        """
        secrets = self.load_client_secrets()
        loop = asyncio.get_running_loop()
        credentials = await loop.run_in_executor(None, self._run_consent_flow, secrets)
        return self.save_credentials(credentials)

    async def _consent_or_fail(self, secrets: dict[str, Any]) -> Credentials:
        if not is_interactive():
            raise AuthenticationRequiredError(
                "Authentication required. Run 'gtm-mcp setup' to authenticate first."
            )
        loop = asyncio.get_running_loop()
        credentials = await loop.run_in_executor(None, self._run_consent_flow, secrets)
        self.save_credentials(credentials)
        return credentials

    def _run_consent_flow(self, secrets: dict[str, Any]) -> Credentials:
        """Run the copy/paste consent flow (blocking operation).

        Prints the authorization URL to stderr and reads the code the user
        pastes back from the provider's page.

        Args:
            secrets: Parsed client secrets file.

        Returns:
            Google OAuth2 credentials.
        """
        client = self._client_section(secrets)
        redirect_uris = client.get("redirect_uris") or [DEFAULT_REDIRECT_URI]

        flow = Flow.from_client_config(
            secrets,
            scopes=self.scopes,
            redirect_uri=redirect_uris[0],
        )
        auth_url, _ = flow.authorization_url(access_type="offline", prompt="consent")

        click.echo(f"Authorize this app by visiting this url: {auth_url}", err=True)
        click.echo("Waiting for authorization code...", err=True)
        code = click.prompt("Enter the code from that page here", err=True).strip()

        try:
            flow.fetch_token(code=code)
        except Exception as e:
            raise AuthenticationError(f"Error while trying to retrieve access token: {e}") from e

        return flow.credentials
