"""Tests for JSON and table reporters."""

from __future__ import annotations

import json
from pathlib import Path

from rich.console import Console

from arena_dashboard.reporters import JSONReporter, TableReporter
from arena_dashboard.runs import paginate
from arena_dashboard.stats import compute_match_stats
from arena_dashboard.types import (
    BenchmarkMeta,
    LeaderboardRow,
    LeaderboardSet,
    Match,
    RunParticipant,
    RunRecord,
)


def _console() -> Console:
    return Console(record=True, width=120, force_terminal=False)


def test_json_report(example_matches: list[Match], tmp_path: Path) -> None:
    out = tmp_path / "stats.json"
    json_str = JSONReporter.generate(
        compute_match_stats(example_matches), output_path=out, benchmark_id="chess"
    )
    data = json.loads(json_str)

    assert out.read_text(encoding="utf-8") == json_str
    assert data["benchmark_id"] == "chess"
    assert data["total_matches"] == 2
    assert data["models"]["A"]["wins"] == 2
    assert data["views"]["most_sweeps"]["items"][0] == {"label": "A", "value": 1, "display": "1"}
    assert data["views"]["most_comebacks"]["empty"] is False


def test_json_report_empty() -> None:
    data = json.loads(JSONReporter.generate(compute_match_stats([])))
    assert data["total_matches"] == 0
    assert all(v["empty"] and v["placeholder"] == "No data" for v in data["views"].values())


def test_json_runs_page() -> None:
    runs = [RunRecord(run_id=str(i)) for i in range(3)]
    data = json.loads(JSONReporter.runs(paginate(runs, 1, 2)))
    assert data["total"] == 3
    assert data["total_pages"] == 2
    assert [r["run_id"] for r in data["runs"]] == ["0", "1"]


def test_table_stats(example_matches: list[Match]) -> None:
    console = _console()
    TableReporter.stats(compute_match_stats(example_matches), console)
    text = console.export_text()

    assert "Completed matches: 2" in text
    assert "Most clean 2-0 sweeps" in text
    assert "A vs C" in text
    assert "50.0%" in text


def test_table_stats_empty() -> None:
    console = _console()
    TableReporter.stats(compute_match_stats([]), console)
    text = console.export_text()
    assert "Completed matches: 0" in text
    assert text.count("No data") == 10


def test_table_leaderboard() -> None:
    lb = LeaderboardSet(
        id="overall",
        label="Overall",
        entries=[LeaderboardRow(rank=1, display_name="Alpha", rating=1532.456, win_rate=75)],
    )
    console = _console()
    TableReporter.leaderboard(lb, console)
    text = console.export_text()
    assert "Alpha" in text
    assert "1532.46" in text
    assert "75%" in text


def test_table_leaderboard_empty() -> None:
    console = _console()
    TableReporter.leaderboard(LeaderboardSet(id="x", label="X"), console)
    assert "No leaderboard entries available." in console.export_text()


def test_table_runs_and_meta() -> None:
    run = RunRecord(
        run_id="r1",
        participants=[RunParticipant("Alpha"), RunParticipant("Beta")],
        status="completed",
        match_type="bo3",
    )
    console = _console()
    TableReporter.benchmark_meta(BenchmarkMeta(name="Chess Arena", run_types=["bo3"]), console)
    TableReporter.runs(paginate([run], 1, 50), console)
    text = console.export_text()

    assert "Chess Arena" in text
    assert "1 runs  |  Page 1 of 1" in text
    assert "Alpha vs Beta" in text
    assert "BO3" in text


def test_table_run_detail_draw(make_match) -> None:
    console = _console()
    TableReporter.run_detail(make_match("A", "B", rounds=("A", "B"), score=(1, 1)), console)
    text = console.export_text()
    assert "Match: A vs B" in text
    assert "Winner: Draw" in text
    assert "Rounds: 2" in text


def test_table_stats_headings_are_not_wrapped(example_matches: list[Match]) -> None:
    console = _console()
    TableReporter.stats(compute_match_stats(example_matches), console)
    lines = [line.rstrip() for line in console.export_text().splitlines()]
    assert "Most average rounds" in lines
    assert "Most clean 2-0 sweeps" in lines


def test_table_output_prints_bracketed_names_literally(make_match) -> None:
    odd, styled = "acme/model[/beta]", "[bold]Shouty"
    match = make_match(odd, styled, rounds=(odd, odd), winner=odd, score=(2, 0))
    run = RunRecord(
        run_id="r1",
        participants=[RunParticipant(odd), RunParticipant(styled)],
        status="completed",
        artifacts_ref="runs/[x].json",
    )
    lb = LeaderboardSet(
        id="o", label="[red]Set", entries=[LeaderboardRow(rank=1, display_name=odd)]
    )

    console = _console()
    TableReporter.stats(compute_match_stats([match]), console)
    TableReporter.run_detail(match, console)
    TableReporter.runs(paginate([run], 1, 50), console)
    TableReporter.leaderboard(lb, console)
    TableReporter.benchmark_meta(BenchmarkMeta(name="[/bench]"), console)
    text = console.export_text()

    assert odd in text
    assert styled in text
    assert f"Winner: {odd}" in text
    assert "runs/[x].json" in text
    assert "[red]Set" in text
    assert "[/bench]" in text


def test_table_runs_page_navigation() -> None:
    runs = [RunRecord(run_id=str(i)) for i in range(3)]

    console = _console()
    TableReporter.runs(paginate(runs, 2, 1), console)
    text = console.export_text()
    assert "Prev: --page 1" in text
    assert "Next: --page 3" in text

    console = _console()
    TableReporter.runs(paginate(runs, 1, 50), console)
    text = console.export_text()
    assert "Prev:" not in text
    assert "Next:" not in text
