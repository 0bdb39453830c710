"""Installed version of todoist-sync and the User-Agent the client sends by default."""

from importlib import metadata

DISTRIBUTION = "todoist-sync"
UNKNOWN_VERSION = "0.0.0"


def get_version() -> str:
    """Version of the installed distribution; ``0.0.0`` when the package is imported without being installed."""
    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return UNKNOWN_VERSION


def default_user_agent() -> str:
    """``todoist-sync/<version>``, the header value used when a client is not given one."""
    return f"{DISTRIBUTION}/{get_version()}"
