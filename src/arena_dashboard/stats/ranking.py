"""Ranked top-N views over aggregated model statistics.

Each view filters the derived accumulators, orders them by one metric and
keeps the first ``top_n`` entries. Ties on the metric are broken by display
name (ascending), so the result does not depend on input order. The
longest-games view ranks matches rather than models and keeps input order
among equal round counts.

Usage::

    from arena_dashboard.stats import compute_match_stats

    stats = compute_match_stats(matches)
    for view in stats.views.values():
        print(view.title, [item.label for item in view.items])
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from arena_dashboard.formatting import (
    format_average,
    format_count,
    format_percent,
    format_rounds,
)
from arena_dashboard.stats.aggregator import MatchAggregator
from arena_dashboard.types import Match, MatchStats, ModelAccumulator, RankedItem, RankedView

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 3
LONGEST_GAMES = "longest_games"


@dataclass(frozen=True)
class ViewSpec:
    """Definition of a per-model ranked view.

    Attributes:
        id: Stable view identifier.
        title: Human-readable title.
        include: Inclusion filter applied before sorting.
        key: Metric to sort by.
        descending: Sort direction for ``key``.
        fmt: Formatter for the displayed value.
    """

    id: str
    title: str
    include: Callable[[ModelAccumulator], bool]
    key: Callable[[ModelAccumulator], float]
    descending: bool = True
    fmt: Callable[[float], str] = format_count


def _always(_: ModelAccumulator) -> bool:
    return True


MODEL_VIEWS: tuple[ViewSpec, ...] = (
    ViewSpec(
        "most_avg_rounds",
        "Most average rounds",
        lambda m: m.rounds_matches > 0,
        lambda m: m.avg_rounds,
        fmt=format_average,
    ),
    ViewSpec(
        "least_avg_rounds",
        "Least average rounds",
        lambda m: m.rounds_matches > 0,
        lambda m: m.avg_rounds,
        descending=False,
        fmt=format_average,
    ),
    ViewSpec("most_sweeps", "Most clean 2-0 sweeps", _always, lambda m: m.sweeps20),
    ViewSpec(
        "wins_2_0_share",
        "Wins that are 2-0",
        lambda m: m.wins > 0,
        lambda m: m.win_share20,
        fmt=format_percent,
    ),
    ViewSpec(
        "wins_2_1_share",
        "Wins that are 2-1",
        lambda m: m.wins > 0,
        lambda m: m.win_share21,
        fmt=format_percent,
    ),
    ViewSpec("most_comebacks", "Most comebacks", lambda m: m.comebacks > 0, lambda m: m.comebacks),
    ViewSpec(
        "best_win_rate",
        "Best win rate",
        lambda m: m.total_matches > 0,
        lambda m: m.win_rate,
        fmt=format_percent,
    ),
    ViewSpec(
        "worst_win_rate",
        "Worst win rate",
        lambda m: m.total_matches > 0,
        lambda m: m.win_rate,
        descending=False,
        fmt=format_percent,
    ),
    ViewSpec("most_matches", "Most matches played", _always, lambda m: m.total_matches),
)

# Display order of all ten views; the longest-games view sits third.
VIEW_ORDER: tuple[str, ...] = (
    "most_avg_rounds",
    "least_avg_rounds",
    LONGEST_GAMES,
    "most_sweeps",
    "wins_2_0_share",
    "wins_2_1_share",
    "most_comebacks",
    "best_win_rate",
    "worst_win_rate",
    "most_matches",
)


def rank_models(
    models: Iterable[ModelAccumulator], view_spec: ViewSpec, top_n: int = DEFAULT_TOP_N
) -> RankedView:
    """Build one per-model ranked view."""
    candidates = [m for m in models if view_spec.include(m)]
    sign = -1 if view_spec.descending else 1
    candidates.sort(key=lambda m: (sign * view_spec.key(m), m.display_name))
    items: list[RankedItem] = []
    for m in candidates[:top_n]:
        value = view_spec.key(m)
        items.append(RankedItem(label=m.display_name, value=value, display=view_spec.fmt(value)))
    return RankedView(id=view_spec.id, title=view_spec.title, items=items)


def rank_longest_games(round_matches: Iterable[Match], top_n: int = DEFAULT_TOP_N) -> RankedView:
    """Rank matches with round data by round count, longest first."""
    ordered = sorted(round_matches, key=lambda m: -len(m.rounds))
    items = [
        RankedItem(label=m.label, value=len(m.rounds), display=format_rounds(len(m.rounds)))
        for m in ordered[:top_n]
    ]
    return RankedView(id=LONGEST_GAMES, title="Longest games", items=items)


def build_views(
    models: dict[str, ModelAccumulator],
    round_matches: list[Match],
    top_n: int = DEFAULT_TOP_N,
) -> dict[str, RankedView]:
    """Build all ten ranked views, keyed by view id in display order."""
    built = {vs.id: rank_models(models.values(), vs, top_n) for vs in MODEL_VIEWS}
    built[LONGEST_GAMES] = rank_longest_games(round_matches, top_n)
    return {view_id: built[view_id] for view_id in VIEW_ORDER}


def compute_match_stats(matches: Iterable[Match], top_n: int = DEFAULT_TOP_N) -> MatchStats:
    """Aggregate ``matches`` and build every ranked view.

    Args:
        matches: Match records; malformed ones are skipped.
        top_n: Maximum entries per view.

    Returns:
        MatchStats with fresh accumulators. With no valid matches,
        ``total_matches`` is 0 and every view is empty.
    """
    acc = MatchAggregator.accumulate(matches)
    MatchAggregator.derive(acc.models)
    views = build_views(acc.models, acc.round_matches, top_n)
    logger.info(
        f"Aggregated {acc.total_matches} match(es) across {len(acc.models)} model(s)"
    )
    return MatchStats(total_matches=acc.total_matches, models=acc.models, views=views)
