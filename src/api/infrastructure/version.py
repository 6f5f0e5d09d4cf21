"""Pulse API version, as reported by ``/health`` and the OpenAPI schema."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "pulse-api"
UNKNOWN_VERSION = "0.0.0+unknown"

# src/api/infrastructure/version.py -> repository root
_PYPROJECT = Path(__file__).resolve().parents[3] / "pyproject.toml"


def get_version() -> str:
    """Return the installed distribution version.

    A source checkout that was never installed reads ``pyproject.toml``
    instead; a tree without one reports ``UNKNOWN_VERSION``.
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        pass

    try:
        with _PYPROJECT.open("rb") as f:
            return tomllib.load(f)["project"]["version"]
    except FileNotFoundError:
        return UNKNOWN_VERSION


__version__ = get_version()
