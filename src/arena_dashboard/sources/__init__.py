"""Sources module - read benchmark site data from disk or HTTP.

This module provides:
- DataSource: abstract base with parsing and artifact fan-out
- LocalSource: filesystem-backed source
- HttpSource: httpx-backed source
- open_source: pick a source for a directory path or URL
"""

from __future__ import annotations

from .base import DataSource, DataSourceError
from .http import HttpSource
from .local import LocalSource


def open_source(root: str, timeout: float = 10.0) -> DataSource:
    """Return an HttpSource for ``http(s)://`` roots, otherwise a LocalSource."""
    if root.startswith(("http://", "https://")):
        return HttpSource(root, timeout=timeout)
    return LocalSource(root, timeout=timeout)


__all__ = [
    "DataSource",
    "DataSourceError",
    "HttpSource",
    "LocalSource",
    "open_source",
]
