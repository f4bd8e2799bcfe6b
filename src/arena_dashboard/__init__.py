"""arena-dashboard: leaderboards, run browsing and match stats for benchmark arenas."""

from __future__ import annotations

from arena_dashboard.config import DashboardConfig
from arena_dashboard.session import DashboardSession, DashboardState, StatsRequestTracker
from arena_dashboard.stats import MatchAggregator, compute_match_stats
from arena_dashboard.types import Match, MatchStats, ModelAccumulator, Participant, Round

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Config
    "DashboardConfig",
    # Session
    "DashboardSession",
    "DashboardState",
    "StatsRequestTracker",
    # Stats
    "MatchAggregator",
    "compute_match_stats",
    # Types
    "Match",
    "MatchStats",
    "ModelAccumulator",
    "Participant",
    "Round",
]
