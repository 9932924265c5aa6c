"""
Version information for the storefront SDK.

Single source of truth: pyproject.toml
Runtime access via importlib.metadata with fallback.
"""

from __future__ import annotations

from functools import lru_cache

# Fallback version if package metadata unavailable (dev mode)
_FALLBACK_VERSION = "0.1.0"

PACKAGE_NAME = "storefront-sdk"


@lru_cache(maxsize=1)
def get_version() -> str:
    """Get the package version from metadata or fallback."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version(PACKAGE_NAME)
    except PackageNotFoundError:
        return _FALLBACK_VERSION


def user_agent() -> str:
    """User-Agent header sent with every storefront request."""
    return f"{PACKAGE_NAME}/{get_version()}"
