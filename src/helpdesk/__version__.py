"""Version information for Helpdesk.

The version is read from the installed distribution metadata so
pyproject.toml stays the single source of truth.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("helpdesk")
except PackageNotFoundError:
    # Package not installed, fallback for development
    __version__ = "0.0.0-dev"
