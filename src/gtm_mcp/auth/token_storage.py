"""JSON token cache for the GTM MCP server.

Storage Location: $GTM_TOKEN_FILE, or ./token.json in the working directory.

The cache holds a single StoredToken. A file that cannot be parsed is
logged and treated as "no token" so the caller can re-authenticate.
"""

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from gtm_mcp.auth.models import (
    OAuthToken,
    StoredToken,
    TokenMetadata,
    TokenStatus,
)

logger = logging.getLogger(__name__)

TOKEN_FILE_ENV = "GTM_TOKEN_FILE"
DEFAULT_TOKEN_FILENAME = "token.json"


def get_token_path() -> Path:
    """Get the configured token cache path.

    Returns:
        Path from GTM_TOKEN_FILE, or token.json in the working directory.
    """
    configured = os.environ.get(TOKEN_FILE_ENV)
    if configured:
        return Path(configured)
    return Path.cwd() / DEFAULT_TOKEN_FILENAME


class TokenStorage:
    """Simple JSON-based storage for the OAuth token.

    Attributes:
        token_path: Path to the token cache file.

    Example:
        ```python
        storage = TokenStorage()

        token = OAuthToken(
            access_token="abc123",
            expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
            scopes=["https://www.googleapis.com/auth/tagmanager.readonly"],
        )
        storage.store(token, TokenMetadata(service_name="gtm-mcp"))

        stored = storage.retrieve()
        if stored:
            print(f"Token expires at: {stored.token.expires_at}")
        ```
    """

    def __init__(self, token_path: Path | None = None) -> None:
        """Initialize token storage.

        Args:
            token_path: Custom path for the token cache.
                Falls back to GTM_TOKEN_FILE, then ./token.json.
        """
        self.token_path = Path(token_path) if token_path else get_token_path()

    def _ensure_parent_dir(self) -> None:
        """Create the token directory with owner-only permissions if missing."""
        parent = self.token_path.parent
        if not parent.exists():
            parent.mkdir(parents=True, mode=0o700)

    def _load_raw(self) -> dict | None:
        """Read the token file.

        Returns:
            Parsed JSON object, or None if the file is missing or unreadable.
        """
        if not self.token_path.exists():
            return None

        try:
            with open(self.token_path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load token file {self.token_path}: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Token file {self.token_path} does not contain a JSON object")
            return None
        return data

    def store(self, token: OAuthToken, metadata: TokenMetadata) -> None:
        """Persist an OAuth token.

        Args:
            token: OAuth token data to store.
            metadata: Token metadata including provider info.
        """
        stored_token = StoredToken(version=1, metadata=metadata, token=token)

        self._ensure_parent_dir()
        with open(self.token_path, "w") as f:
            f.write(stored_token.model_dump_json(indent=2))

        # Owner read/write only
        self.token_path.chmod(0o600)
        logger.info(f"Token stored to {self.token_path}")

    def retrieve(self) -> StoredToken | None:
        """Retrieve the stored OAuth token.

        Returns:
            StoredToken if present and well-formed, None otherwise.
        """
        data = self._load_raw()
        if data is None:
            return None

        try:
            return StoredToken.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed token file {self.token_path}: {e}")
            return None

    def delete(self) -> bool:
        """Delete the token cache.

        Returns:
            True if a file was removed, False if none existed.
        """
        if not self.token_path.exists():
            return False
        self.token_path.unlink()
        return True

    def get_status(self) -> TokenStatus:
        """Get the status of the stored token.

        Returns:
            TokenStatus indicating the token's current state.
        """
        if not self.token_path.exists():
            return TokenStatus.MISSING

        stored = self.retrieve()
        if stored is None:
            # File exists but couldn't be parsed
            return TokenStatus.INVALID

        if stored.token.is_expired():
            return TokenStatus.EXPIRED

        return TokenStatus.VALID
