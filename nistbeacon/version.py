"""
Version helpers for the nistbeacon package.

This module tries, in order:
1) importlib.metadata (if the package is installed),
2) a static fallback BASE_VERSION with a local dev suffix.

All returned versions are PEP 440.
"""
from __future__ import annotations

import sys
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version as _pkg_version

# Bump this when making intentional, source-level releases.
BASE_VERSION = "0.1.0"

_PKG_NAME = "nistbeacon"


@lru_cache(maxsize=1)
def get_version() -> str:
    # 1) If installed, prefer the package registry version
    try:
        return _pkg_version(_PKG_NAME)
    except PackageNotFoundError:
        pass

    # 2) Fallback to a dev-suffixed base
    py = f".py{sys.version_info.major}{sys.version_info.minor}"
    return f"{BASE_VERSION}.post0+dev{py}"


__version__ = get_version()
__all__ = ["__version__", "get_version", "BASE_VERSION"]
