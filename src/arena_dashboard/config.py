"""Dashboard configuration.

Values come from (lowest to highest precedence) defaults, an optional YAML or
JSON config file, environment variables, and CLI options.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
PAGE_SIZE_CHOICES = (10, 25, 50, 100)

_ENV_VARS = {
    "data_root": "ARENA_DASHBOARD_DATA_ROOT",
    "index_path": "ARENA_DASHBOARD_INDEX",
    "page_size": "ARENA_DASHBOARD_PAGE_SIZE",
    "top_n": "ARENA_DASHBOARD_TOP_N",
    "timeout": "ARENA_DASHBOARD_TIMEOUT",
}


def parse_page_size(value: Any) -> int:
    """Parse a page size, falling back to the default on bad input."""
    try:
        size = int(value)
    except (TypeError, ValueError):
        return DEFAULT_PAGE_SIZE
    return size if size > 0 else DEFAULT_PAGE_SIZE


@dataclass
class DashboardConfig:
    """Configuration for loading and presenting benchmark data.

    Attributes:
        data_root: Site root, either a directory or an ``http(s)://`` URL.
        index_path: Benchmark index relative to ``data_root``.
        page_size: Runs per page.
        top_n: Entries per ranked stats view.
        timeout: Per-request retrieval timeout (seconds).
    """

    data_root: str = "."
    index_path: str = "benchmarks/index.json"
    page_size: int = DEFAULT_PAGE_SIZE
    top_n: int = 3
    timeout: float = 10.0

    def __post_init__(self) -> None:
        self.page_size = parse_page_size(self.page_size)
        self.top_n = int(self.top_n)
        self.timeout = float(self.timeout)
        if self.top_n <= 0:
            raise ValueError(f"top_n must be positive, got {self.top_n}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    def with_overrides(self, **overrides: Any) -> DashboardConfig:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @classmethod
    def from_env(cls, base: DashboardConfig | None = None) -> DashboardConfig:
        """Apply ``ARENA_DASHBOARD_*`` environment variables on top of ``base``."""
        config = base or cls()
        values = {
            name: os.environ[var] for name, var in _ENV_VARS.items() if os.environ.get(var)
        }
        if values:
            logger.debug(f"Config from environment: {sorted(values)}")
        return config.with_overrides(**values)

    @classmethod
    def from_file(cls, path: str | Path) -> DashboardConfig:
        """Load configuration from a ``.yaml``/``.yml`` or ``.json`` file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the format is unsupported or the content invalid.
        """
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Config file not found: {p}")

        suffix = p.suffix.lower()
        if suffix in {".yaml", ".yml"}:
            import yaml

            data = yaml.safe_load(p.read_text(encoding="utf-8"))
        elif suffix == ".json":
            data = json.loads(p.read_text(encoding="utf-8"))
        else:
            raise ValueError(f"Unsupported config format: {suffix} (expected .yaml/.yml/.json)")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping in {p}, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown config keys in {p.name}: {sorted(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def load(cls, path: str | Path | None = None) -> DashboardConfig:
        """Defaults, then ``path`` (if given), then environment variables."""
        base = cls.from_file(path) if path else cls()
        return cls.from_env(base)
