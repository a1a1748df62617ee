"""Version utilities for Qatch."""

from __future__ import annotations

from importlib import metadata

DISTRIBUTION_NAME = "qatch"
FALLBACK_VERSION = "1.0.0"


def load_version() -> str:
    """Installed distribution version, or the fallback when running from a checkout."""
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return FALLBACK_VERSION
