"""Unit tests for OAuth token models."""

from datetime import datetime, timedelta, timezone

import pytest

from gtm_mcp.auth.models import OAuthToken, StoredToken, TokenMetadata, TokenStatus


@pytest.mark.unit
class TestOAuthToken:
    """Tests for OAuthToken model."""

    def test_should_create_valid_token(self, valid_token: OAuthToken) -> None:
        """Verify token creation with valid data."""
        assert valid_token.access_token == "test_access_token_abc123"
        assert valid_token.refresh_token == "test_refresh_token_xyz789"
        assert valid_token.token_type == "Bearer"
        assert len(valid_token.scopes) == 7

    def test_should_detect_non_expired_token(self, valid_token: OAuthToken) -> None:
        assert valid_token.is_expired() is False

    def test_should_detect_expired_token(self, expired_token: OAuthToken) -> None:
        assert expired_token.is_expired() is True

    def test_should_respect_buffer_seconds(self) -> None:
        """Verify is_expired respects buffer_seconds parameter."""
        # Token expires in 30 seconds
        token = OAuthToken(
            access_token="test",
            expires_at=datetime.now(timezone.utc) + timedelta(seconds=30),
        )
        assert token.is_expired(buffer_seconds=60) is True
        assert token.is_expired(buffer_seconds=10) is False

    def test_should_treat_naive_expiry_as_utc(self) -> None:
        """Verify naive datetimes compare as UTC instead of raising."""
        token = OAuthToken(
            access_token="test",
            expires_at=datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(hours=1),
        )
        assert token.is_expired() is False

    def test_should_allow_missing_refresh_token(self) -> None:
        token = OAuthToken(access_token="test", expires_at=datetime.now(timezone.utc))
        assert token.refresh_token is None
        assert token.scopes == []


@pytest.mark.unit
class TestTokenMetadata:
    """Tests for TokenMetadata model."""

    def test_should_create_metadata_with_defaults(self) -> None:
        """Verify metadata creation with required fields only."""
        metadata = TokenMetadata(service_name="gtm-mcp")
        assert metadata.service_name == "gtm-mcp"
        assert metadata.provider == "google"
        assert metadata.created_at is not None
        assert metadata.last_refreshed is None


@pytest.mark.unit
class TestStoredToken:
    """Tests for StoredToken model."""

    def test_should_create_stored_token(self, stored_token: StoredToken) -> None:
        """Verify stored token combines token and metadata."""
        assert stored_token.version == 1
        assert stored_token.token.access_token == "test_access_token_abc123"
        assert stored_token.metadata.service_name == "gtm-mcp"

    def test_should_survive_json_serialization(self, stored_token: StoredToken) -> None:
        """Verify the on-disk JSON form parses back to the same token."""
        restored = StoredToken.model_validate_json(stored_token.model_dump_json())
        assert restored.token.expires_at == stored_token.token.expires_at
        assert restored.token.scopes == stored_token.token.scopes


@pytest.mark.unit
class TestTokenStatus:
    """Tests for TokenStatus enum."""

    def test_should_have_expected_statuses(self) -> None:
        assert TokenStatus.VALID.value == "valid"
        assert TokenStatus.EXPIRED.value == "expired"
        assert TokenStatus.MISSING.value == "missing"
        assert TokenStatus.INVALID.value == "invalid"
