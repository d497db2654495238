"""Authenticated arithmetic HTTP service.

Exposes `__version__` for the app factory and the root endpoint.
"""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("math-api")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
