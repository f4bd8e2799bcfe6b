"""Dashboard session - view state plus versioned stats refresh.

The session owns everything that changes while a user browses: the selected
benchmark, the run-list page and search text, the active leaderboard set and
the latest computed stats. Stats requests are versioned by
StatsRequestTracker; when requests overlap only the most recent one is
applied and superseded results are discarded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from arena_dashboard.config import DashboardConfig, parse_page_size
from arena_dashboard.runs import RunPage, filter_runs, paginate
from arena_dashboard.sources import DataSourceError
from arena_dashboard.stats import compute_match_stats
from arena_dashboard.types import Match

if TYPE_CHECKING:
    from arena_dashboard.sources import DataSource
    from arena_dashboard.types import (
        BenchmarkBundle,
        BenchmarkInfo,
        LeaderboardSet,
        MatchStats,
    )

logger = logging.getLogger(__name__)


@dataclass
class DashboardState:
    """Explicit view state for one dashboard session."""

    benchmark_id: str | None = None
    page: int = 1
    page_size: int = 50
    search: str = ""
    leaderboard_set: str | None = None


class StatsRequestTracker:
    """Issue monotonically increasing tokens; only the latest is current."""

    def __init__(self) -> None:
        self._latest = 0

    @property
    def latest(self) -> int:
        return self._latest

    def issue(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest


class DashboardSession:
    """Browse benchmarks, runs and stats from one data source.

    Args:
        source: Data source to read from.
        config: Dashboard configuration (defaults if None).
    """

    def __init__(self, source: DataSource, config: DashboardConfig | None = None) -> None:
        self.source = source
        self.config = config or DashboardConfig()
        self.state = DashboardState(page_size=self.config.page_size)
        self.tracker = StatsRequestTracker()
        self.selection_tracker = StatsRequestTracker()
        self.benchmarks: list[BenchmarkInfo] = []
        self.bundle: BenchmarkBundle | None = None
        self.stats: MatchStats | None = None

    # ------------------------------------------------------------------
    # Benchmarks
    # ------------------------------------------------------------------

    async def load_benchmarks(self) -> list[BenchmarkInfo]:
        self.benchmarks = await self.source.load_index(self.config.index_path)
        return self.benchmarks

    def find_benchmark(self, benchmark_id: str) -> BenchmarkInfo:
        for info in self.benchmarks:
            if info.benchmark_id == benchmark_id:
                return info
        raise DataSourceError(f"Unknown benchmark: {benchmark_id}")

    async def select_benchmark(self, benchmark_id: str | None = None) -> BenchmarkBundle:
        """Load a benchmark (the first one if ``benchmark_id`` is None).

        Resets the page to 1, activates the first leaderboard set and
        invalidates any stats computation still in flight. If a later
        selection starts while this one is loading, the later one wins and
        this bundle is returned without being applied.
        """
        if not self.benchmarks:
            await self.load_benchmarks()
        if not self.benchmarks:
            raise DataSourceError("No benchmarks found.")

        info = self.find_benchmark(benchmark_id) if benchmark_id else self.benchmarks[0]
        selection = self.selection_tracker.issue()
        self.tracker.issue()
        self.stats = None

        bundle = await self.source.load_benchmark(info)
        if not self.selection_tracker.is_current(selection):
            logger.info(f"Discarding superseded selection of benchmark {info.benchmark_id}")
            return bundle

        # Stats requested while the bundle was loading belong to the old benchmark
        self.tracker.issue()
        self.stats = None
        self.bundle = bundle
        self.state.benchmark_id = info.benchmark_id
        self.state.page = 1
        sets = bundle.leaderboard_sets
        self.state.leaderboard_set = sets[0].id if sets else None
        return bundle

    def _require_bundle(self) -> BenchmarkBundle:
        if self.bundle is None:
            raise RuntimeError("No benchmark selected; call select_benchmark() first")
        return self.bundle

    # ------------------------------------------------------------------
    # Leaderboard
    # ------------------------------------------------------------------

    def set_leaderboard(self, set_id: str) -> None:
        self.state.leaderboard_set = set_id

    def active_leaderboard(self) -> LeaderboardSet | None:
        """The selected leaderboard set, falling back to the first one."""
        sets = self._require_bundle().leaderboard_sets
        for lb in sets:
            if lb.id == self.state.leaderboard_set:
                return lb
        return sets[0] if sets else None

    # ------------------------------------------------------------------
    # Runs
    # ------------------------------------------------------------------

    def set_search(self, text: str) -> None:
        self.state.search = text
        self.state.page = 1

    def set_page_size(self, value: int | str) -> None:
        self.state.page_size = parse_page_size(value)
        self.state.page = 1

    def set_page(self, page: int) -> None:
        self.state.page = page

    def next_page(self) -> None:
        self.state.page += 1

    def prev_page(self) -> None:
        if self.state.page > 1:
            self.state.page -= 1

    def current_page(self) -> RunPage:
        """Filtered, paginated runs; the clamped page is written back to state."""
        runs = filter_runs(self._require_bundle().runs, self.state.search)
        page = paginate(runs, self.state.page, self.state.page_size)
        self.state.page = page.page
        return page

    async def run_detail(self, artifact_ref: str) -> Match:
        bundle = self._require_bundle()
        artifact = await self.source.load_artifact(bundle.info.path, artifact_ref)
        return Match.from_artifact(artifact)

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    async def refresh_stats(self) -> MatchStats | None:
        """Recompute stats for the selected benchmark.

        Returns:
            The new MatchStats, or None if a newer request (or a benchmark
            change) superseded this one while artifacts were loading.
        """
        bundle = self._require_bundle()
        token = self.tracker.issue()

        matches = await self.source.load_matches(bundle.info.path, bundle.runs)
        stats = compute_match_stats(matches, top_n=self.config.top_n)

        if not self.tracker.is_current(token) or self.bundle is not bundle:
            logger.info(
                f"Discarding stale stats result (request {token}, latest {self.tracker.latest})"
            )
            return None

        self.stats = stats
        return stats
