"""Run list filtering and pagination."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from arena_dashboard.types import RunRecord


@dataclass
class RunPage:
    """One page of the (filtered) run list.

    Attributes:
        items: Runs on this page.
        page: 1-based page number after clamping.
        total_pages: Number of pages, at least 1.
        total: Number of runs across all pages.
    """

    items: list[RunRecord] = field(default_factory=list)
    page: int = 1
    total_pages: int = 1
    total: int = 0

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def filter_runs(runs: list[RunRecord], query: str | None) -> list[RunRecord]:
    """Keep runs where any participant's ``provider/model_name`` contains ``query``.

    Matching is case-insensitive; an empty query keeps every run.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(runs)
    return [run for run in runs if any(needle in p.search_key for p in run.participants)]


def total_pages(total: int, page_size: int) -> int:
    return max(1, math.ceil(total / page_size))


def paginate(runs: list[RunRecord], page: int, page_size: int) -> RunPage:
    """Slice ``runs`` to one page, clamping ``page`` into range."""
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    pages = total_pages(len(runs), page_size)
    page = min(max(page, 1), pages)
    start = (page - 1) * page_size
    return RunPage(
        items=runs[start : start + page_size],
        page=page,
        total_pages=pages,
        total=len(runs),
    )
