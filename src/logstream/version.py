"""Installed package version."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# Reported when running from a source checkout that was never installed
_FALLBACK_VERSION = "0.0.0+unknown"


def _detect_version() -> str:
    try:
        return version("logstream")
    except PackageNotFoundError:
        return _FALLBACK_VERSION


__version__ = _detect_version()
