"""Pydantic models for cached OAuth tokens."""

from datetime import datetime, timedelta, timezone
from enum import Enum

from pydantic import BaseModel, Field


class TokenStatus(str, Enum):
    """State of the token cache file."""

    VALID = "valid"
    EXPIRED = "expired"
    MISSING = "missing"
    INVALID = "invalid"


class OAuthToken(BaseModel):
    """OAuth2 access/refresh token pair.

    Attributes:
        access_token: Bearer token sent with every API request.
        refresh_token: Long-lived token used to mint new access tokens.
        expires_at: Timezone-aware expiry of the access token.
        scopes: Scopes granted to the token.
        token_type: Always "Bearer" for Google.
    """

    access_token: str = Field(..., description="OAuth access token")
    refresh_token: str | None = Field(default=None, description="OAuth refresh token")
    expires_at: datetime = Field(..., description="Access token expiry (UTC)")
    scopes: list[str] = Field(default_factory=list, description="Granted scopes")
    token_type: str = Field(default="Bearer", description="Token type")

    def is_expired(self, buffer_seconds: int = 60) -> bool:
        """Check whether the access token is expired or about to expire.

        Args:
            buffer_seconds: Treat the token as expired this many seconds early.

        Returns:
            True if the token should be refreshed before use.
        """
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return datetime.now(timezone.utc) + timedelta(seconds=buffer_seconds) >= expires_at


class TokenMetadata(BaseModel):
    """Bookkeeping stored next to a token."""

    service_name: str
    provider: str = "google"
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    last_refreshed: datetime | None = None


class StoredToken(BaseModel):
    """On-disk envelope of the token cache file."""

    version: int = 1
    metadata: TokenMetadata
    token: OAuthToken
