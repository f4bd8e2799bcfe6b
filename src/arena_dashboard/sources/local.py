"""Data source backed by a local copy of the benchmark site."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from arena_dashboard.sources.base import DataSource, DataSourceError

logger = logging.getLogger(__name__)


class LocalSource(DataSource):
    """Read benchmark files from a directory.

    Args:
        root: Site root directory (the one containing ``benchmarks/``).
        timeout: Timeout for a single artifact load (seconds).
    """

    def __init__(self, root: str | Path = ".", timeout: float = 10.0) -> None:
        self.root = Path(root)
        super().__init__(name=f"local:{self.root}", timeout=timeout)

    async def read_text(self, path: str) -> str:
        file_path = self.root / path
        if not file_path.is_file():
            raise DataSourceError(f"File not found: {file_path}")
        try:
            return await asyncio.to_thread(file_path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DataSourceError(f"Failed to read {file_path}: {exc}") from exc
