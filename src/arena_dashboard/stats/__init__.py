"""Stats module - match aggregation and ranked leaderboards.

This module provides:
- MatchAggregator: per-model accumulation, comeback detection, derived metrics
- compute_match_stats: one-call aggregation producing all ranked views
"""

from __future__ import annotations

from .aggregator import Accumulation, MatchAggregator
from .ranking import MODEL_VIEWS, VIEW_ORDER, build_views, compute_match_stats

__all__ = [
    "Accumulation",
    "MODEL_VIEWS",
    "MatchAggregator",
    "VIEW_ORDER",
    "build_views",
    "compute_match_stats",
]
