"""Tests for ranked stats views."""

from __future__ import annotations

import pytest

from arena_dashboard.stats import VIEW_ORDER, compute_match_stats
from arena_dashboard.stats.ranking import MODEL_VIEWS, rank_longest_games, rank_models
from arena_dashboard.types import NO_DATA, Match, ModelAccumulator


def _labels(stats, view_id: str) -> list[str]:
    return [item.label for item in stats.views[view_id].items]


def test_example_views(example_matches: list[Match]) -> None:
    stats = compute_match_stats(example_matches)

    assert stats.total_matches == 2
    sweeps = stats.views["most_sweeps"].items
    assert sweeps[0].label == "A"
    assert sweeps[0].value == 1
    assert sweeps[0].display == "1"

    share21 = stats.views["wins_2_1_share"].items
    assert [i.label for i in share21] == ["A"]
    assert share21[0].value == pytest.approx(0.5)
    assert share21[0].display == "50.0%"


def test_all_ten_views_in_display_order(example_matches: list[Match]) -> None:
    stats = compute_match_stats(example_matches)
    assert tuple(stats.views) == VIEW_ORDER
    assert len(stats.views) == 10


def test_average_rounds_views(example_matches: list[Match]) -> None:
    stats = compute_match_stats(example_matches)
    assert _labels(stats, "most_avg_rounds") == ["C", "A", "B"]
    assert _labels(stats, "least_avg_rounds") == ["B", "A", "C"]
    assert stats.views["most_avg_rounds"].items[1].display == "2.50"


def test_longest_games_is_per_match(example_matches: list[Match]) -> None:
    stats = compute_match_stats(example_matches)
    items = stats.views["longest_games"].items
    assert [i.label for i in items] == ["A vs C", "A vs B"]
    assert items[0].value == 3
    assert items[0].display == "3 rounds"


def test_win_rate_views_break_ties_by_name(example_matches: list[Match]) -> None:
    stats = compute_match_stats(example_matches)
    assert _labels(stats, "best_win_rate") == ["A", "B", "C"]
    assert _labels(stats, "worst_win_rate") == ["B", "C", "A"]
    assert stats.views["worst_win_rate"].items[0].display == "0.0%"


def test_tie_break_does_not_depend_on_input_order(make_match) -> None:
    matches = [
        make_match("Zed", "Amy", winner="Zed", score=(2, 0)),
        make_match("Amy", "Bob", winner="Amy", score=(2, 0)),
        make_match("Bob", "Zed", winner="Bob", score=(2, 0)),
    ]
    forward = compute_match_stats(matches)
    backward = compute_match_stats(list(reversed(matches)))
    for view_id in VIEW_ORDER:
        if view_id == "longest_games":
            continue
        assert _labels(forward, view_id) == _labels(backward, view_id)
    assert _labels(forward, "most_sweeps") == ["Amy", "Bob", "Zed"]


def test_longest_games_keeps_input_order_on_ties(make_match) -> None:
    first = make_match("A", "B", rounds=("A", "B", "A"))
    second = make_match("C", "D", rounds=("C", "D", "C"))
    view = rank_longest_games([first, second])
    assert [i.label for i in view.items] == ["A vs B", "C vs D"]


def test_views_truncate_to_top_n(make_match) -> None:
    matches = [make_match(f"P{i}", "Q", winner=f"P{i}", score=(2, 0)) for i in range(5)]
    stats = compute_match_stats(matches)
    assert len(stats.views["most_matches"].items) == 3
    assert stats.views["most_matches"].items[0].label == "Q"

    top1 = compute_match_stats(matches, top_n=1)
    assert len(top1.views["best_win_rate"].items) == 1


def test_filters_exclude_models(make_match) -> None:
    # No rounds, no comebacks, only draws
    stats = compute_match_stats([make_match("A", "B", winner=None)])
    assert stats.views["most_avg_rounds"].empty
    assert stats.views["longest_games"].empty
    assert stats.views["wins_2_0_share"].empty
    assert stats.views["most_comebacks"].empty
    # Unfiltered views still list every model
    assert _labels(stats, "most_sweeps") == ["A", "B"]
    assert _labels(stats, "most_matches") == ["A", "B"]


def test_empty_input_reports_no_data() -> None:
    stats = compute_match_stats([])
    assert stats.total_matches == 0
    assert stats.models == {}
    assert len(stats.views) == 10
    for view in stats.views.values():
        assert view.empty
        assert view.placeholder == NO_DATA


def test_only_malformed_input_reports_no_data() -> None:
    stats = compute_match_stats([Match(player1=None, player2=None)])
    assert stats.total_matches == 0
    assert all(view.empty for view in stats.views.values())


def test_rank_models_ascending() -> None:
    view_spec = next(s for s in MODEL_VIEWS if s.id == "least_avg_rounds")
    models = [
        ModelAccumulator("x", total_matches=1, rounds_matches=1, avg_rounds=4.0),
        ModelAccumulator("y", total_matches=1, rounds_matches=1, avg_rounds=2.0),
        ModelAccumulator("z", total_matches=1, rounds_matches=0),
    ]
    view = rank_models(models, view_spec)
    assert [i.label for i in view.items] == ["y", "x"]
    assert view.placeholder is None
