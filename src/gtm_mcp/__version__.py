"""Version information for gtm-mcp."""

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DIST_NAME = "gtm-mcp"


def _get_version() -> str:
    """Installed distribution version, else the repository VERSION file."""
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        pass

    version_file = Path(__file__).resolve().parents[2] / "VERSION"
    if version_file.exists():
        return version_file.read_text().strip()
    return "0.0.0"


__version__ = _get_version()
