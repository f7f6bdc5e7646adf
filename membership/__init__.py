# =============================================================================
# Membership Main Package - Dynamic Version Loading
# =============================================================================
"""
Membership - account lifecycle and notification pipeline

Version is loaded from installed package metadata, with pyproject.toml as
the source of truth during development checkouts.
"""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path


def _get_version() -> str:
    """
    Get package version from installed metadata.

    Falls back to reading pyproject.toml when the package is not installed
    (e.g. running tests straight from a checkout).
    """
    try:
        return version("membership")
    except PackageNotFoundError:
        pass

    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    if pyproject_path.exists():
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
            return data["project"]["version"]

    return "0.0.0-unknown"


__version__: str = _get_version()
__description__: str = "Membership - account lifecycle with email notifications"

# =============================================================================
# EXPORTS
# =============================================================================
__all__ = [
    "__version__",
    "__description__",
]
