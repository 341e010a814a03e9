"""Command-line interface for gtm-mcp.

All output goes to stderr; stdout is reserved for the MCP transport.
"""

import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from gtm_mcp.__version__ import __version__

if TYPE_CHECKING:
    from gtm_mcp.auth import OAuthManager

CREDENTIALS_OPTION_HELP = "OAuth client secrets JSON downloaded from Google Cloud Console"
TOKEN_OPTION_HELP = "Where to store the OAuth token"


def _echo(message: str = "") -> None:
    click.echo(message, err=True)


def _build_manager(credentials_file: Path | None, token_file: Path | None) -> "OAuthManager":
    from gtm_mcp.auth import OAuthManager, TokenStorage

    return OAuthManager(
        storage=TokenStorage(token_path=token_file),
        credentials_path=credentials_file,
    )


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """Google Tag Manager MCP Server - manage GTM from an MCP client.

    Tools cover accounts, containers, workspaces, tags, triggers, variables,
    versions, environments and publishing, plus pre-built GA4, Facebook
    Pixel and form tracking setups.
    """
    pass


@main.command()
@click.option(
    "--credentials-file",
    envvar="GTM_CREDENTIALS_FILE",
    type=click.Path(path_type=Path, dir_okay=False),
    help=CREDENTIALS_OPTION_HELP,
)
@click.option(
    "--token-file",
    envvar="GTM_TOKEN_FILE",
    type=click.Path(path_type=Path, dir_okay=False),
    help=TOKEN_OPTION_HELP,
)
def setup(credentials_file: Path | None, token_file: Path | None) -> None:
    """Authenticate with Google Tag Manager.

    This will:
    1. Print a Google consent URL
    2. Ask for the authorization code shown after consent
    3. Store the token (default: ./token.json)

    Requires an OAuth client secrets file (default: ./credentials.json).
    """
    manager = _build_manager(credentials_file, token_file)

    if manager.has_valid_tokens():
        _echo("✓ Already authenticated!")
        _echo(f"Token stored at: {manager.token_path}")
        _echo()

        if not click.confirm("Re-authenticate?", err=True):
            return

        manager.storage.delete()
        _echo("Removed existing token.")

    _echo("Starting OAuth authentication flow...")
    _echo()

    try:
        asyncio.run(manager.authenticate())
    except FileNotFoundError as e:
        _echo(f"❌ {e}")
        _echo()
        _echo("Create an OAuth client (Desktop app) in Google Cloud Console, download")
        _echo("its JSON and pass it with --credentials-file or GTM_CREDENTIALS_FILE.")
        sys.exit(1)
    except Exception as e:
        _echo(f"❌ Authentication failed: {e}")
        sys.exit(1)

    _echo("✓ Authentication successful!")
    _echo(f"Token stored at: {manager.token_path}")
    _echo()
    _echo("Run 'gtm-mcp doctor' to verify setup.")


@main.command()
def mcp() -> None:
    """Start the MCP server over stdio.

    Authentication happens on the first tool call; run 'gtm-mcp setup'
    beforehand when the server has no terminal to prompt in.
    """
    from gtm_mcp.server import main as server_main

    try:
        _echo("Starting Google Tag Manager MCP server...")
        server_main()
    except KeyboardInterrupt:
        _echo("\nServer stopped.")
    except Exception as e:
        _echo(f"❌ Server error: {e}")
        sys.exit(1)


@main.command()
@click.option(
    "--credentials-file",
    envvar="GTM_CREDENTIALS_FILE",
    type=click.Path(path_type=Path, dir_okay=False),
    help=CREDENTIALS_OPTION_HELP,
)
@click.option(
    "--token-file",
    envvar="GTM_TOKEN_FILE",
    type=click.Path(path_type=Path, dir_okay=False),
    help=TOKEN_OPTION_HELP,
)
def doctor(credentials_file: Path | None, token_file: Path | None) -> None:
    """Check installation and authentication status.

    Verifies:
    1. Python dependencies installed
    2. OAuth client secrets present
    3. Token validity
    """
    from gtm_mcp.auth import TokenStatus

    _echo("Google Tag Manager MCP Status:")
    _echo()

    _echo("Dependencies:")
    try:
        import google.auth  # noqa: F401
        import google_auth_oauthlib  # noqa: F401
        import mcp  # noqa: F401

        _echo("  ✓ google-auth installed")
        _echo("  ✓ google-auth-oauthlib installed")
        _echo("  ✓ mcp installed")
    except ImportError as e:
        _echo(f"  ❌ Missing dependency: {e}")
        sys.exit(1)

    _echo()

    manager = _build_manager(credentials_file, token_file)

    _echo("Credentials:")
    _echo(f"  Client secrets: {manager.credentials_path}")
    try:
        manager.load_client_secrets()
        _echo("  ✓ Client secrets found")
    except (FileNotFoundError, ValueError) as e:
        _echo(f"  ❌ {e}")
        sys.exit(1)

    _echo()

    status = manager.get_status()
    stored = manager.storage.retrieve()

    _echo("Authentication:")
    _echo(f"  Token file: {manager.token_path}")

    if status == TokenStatus.MISSING:
        _echo("  ❌ Not authenticated")
        _echo()
        _echo("Run 'gtm-mcp setup' to authenticate.")
        sys.exit(1)
    elif status == TokenStatus.INVALID:
        _echo("  ❌ Token file corrupted")
        _echo()
        _echo("Run 'gtm-mcp setup' to re-authenticate.")
        sys.exit(1)
    elif status == TokenStatus.EXPIRED:
        _echo("  ⚠️  Token expired (will refresh on first use)")
    elif status == TokenStatus.VALID:
        _echo("  ✓ Authenticated")
        if stored:
            _echo(f"  Token expires: {stored.token.expires_at.strftime('%Y-%m-%d %H:%M:%S UTC')}")
            _echo(f"  Scopes: {len(stored.token.scopes)} configured")

    _echo()
    _echo("✓ Ready to use!")


if __name__ == "__main__":
    main()
