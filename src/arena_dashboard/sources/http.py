"""Data source that fetches the benchmark site over HTTP (httpx)."""

from __future__ import annotations

import logging

import httpx

from arena_dashboard.sources.base import DataSource, DataSourceError

logger = logging.getLogger(__name__)


class HttpSource(DataSource):
    """Fetch benchmark files from a web server.

    Args:
        base_url: Site root URL, e.g. ``https://example.org/arena``.
        timeout: Per-request timeout (seconds).
        transport: Optional httpx transport (used by tests).
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        super().__init__(name=f"http:{self.base_url}", timeout=timeout)
        self.client = httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    async def read_text(self, path: str) -> str:
        try:
            response = await self.client.get(path.lstrip("/"))
        except httpx.HTTPError as exc:
            raise DataSourceError(f"Request for {path} failed: {exc}") from exc

        if response.status_code >= 400:
            raise DataSourceError(f"Failed to load {path}: HTTP {response.status_code}")
        logger.debug(f"GET {path} -> HTTP {response.status_code}")
        return response.text

    async def close(self) -> None:
        await self.client.aclose()
        await super().close()
