"""Common test fixtures for arena-dashboard."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from arena_dashboard.types import Match, Participant, Round


@pytest.fixture
def make_match():
    """Factory for Match records where each participant's id equals its name.

    ``rounds`` lists round winners in play order (None for a drawn round);
    ``score`` is (player1_score, player2_score).
    """

    def _make(
        p1: str = "A",
        p2: str = "B",
        rounds: tuple[str | None, ...] = (),
        winner: str | None = None,
        score: tuple[int, int] | None = None,
    ) -> Match:
        return Match(
            player1=Participant(id=p1, display_name=p1),
            player2=Participant(id=p2, display_name=p2),
            rounds=[Round(winner_id=w) for w in rounds],
            winner_id=winner,
            player1_score=score[0] if score else None,
            player2_score=score[1] if score else None,
            status="completed",
        )

    return _make


@pytest.fixture
def example_matches(make_match) -> list[Match]:
    """A beats B 2-0 in two rounds; A beats C 2-1 after losing round one."""
    return [
        make_match("A", "B", rounds=("A", "A"), winner="A", score=(2, 0)),
        make_match("A", "C", rounds=("C", "A", "A"), winner="A", score=(2, 1)),
    ]


def _artifact(p1: tuple[int, str], p2: tuple[int, str], rounds: list, winner: int | None,
              score: tuple[int, int]) -> dict:
    players = {p1[0]: p1[1], p2[0]: p2[1]}
    return {
        "match": {
            "player1": {"id": p1[0], "display_name": p1[1]},
            "player2": {"id": p2[0], "display_name": p2[1]},
            "winner": None if winner is None else {"id": winner, "display_name": players[winner]},
            "rounds": [{"winner_id": w} for w in rounds],
            "player1_score": score[0],
            "player2_score": score[1],
            "status": "completed",
            "created_at": "2026-01-10T10:00:00Z",
            "completed_at": "2026-01-10T10:30:00Z",
        }
    }


def _run(run_id: str, created_at: str, names: list[tuple[str, str, str]], status: str = "completed",
         artifact: str | None = None) -> dict:
    return {
        "run_id": run_id,
        "participants": [
            {"display_name": d, "provider": p, "model_name": m} for d, p, m in names
        ],
        "status": status,
        "match_type": "bo3",
        "created_at": created_at,
        "artifacts_ref": artifact,
    }


ALPHA = ("Alpha", "openai", "gpt-4o")
BETA = ("Beta", "anthropic", "claude-3")
GAMMA = ("Gamma", "mistral", "large")


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """Create a benchmark site with two benchmarks.

    ``chess`` has four runs: two completed runs with artifacts, one completed
    run whose artifact is missing, and one run still in progress. ``go`` has
    no runs at all.
    """
    bench = tmp_path / "benchmarks"
    chess = bench / "chess"
    go = bench / "go"
    (chess / "runs").mkdir(parents=True)
    go.mkdir(parents=True)

    (bench / "index.json").write_text(
        json.dumps(
            {
                "benchmarks": [
                    {"benchmark_id": "chess", "name": "Chess Arena", "path": "benchmarks/chess"},
                    {"benchmark_id": "go", "name": "Go Arena", "path": "benchmarks/go"},
                ]
            }
        ),
        encoding="utf-8",
    )

    (chess / "benchmark.json").write_text(
        json.dumps(
            {
                "name": "Chess Arena",
                "schema_version": 2,
                "generated_at": "2026-01-11T08:00:00Z",
                "run_types": ["bo3"],
                "description": "Best-of-three chess matches.",
            }
        ),
        encoding="utf-8",
    )
    (chess / "leaderboard.json").write_text(
        json.dumps(
            {
                "sets": [
                    {
                        "id": "overall",
                        "label": "Overall",
                        "entries": [
                            {"rank": 1, "display_name": "Alpha", "rating": 1532.456,
                             "games_played": 2, "wins": 2, "losses": 0, "draws": 0,
                             "win_rate": 100},
                            {"rank": 2, "display_name": "Beta", "rating": 1490.0,
                             "games_played": 1, "wins": 0, "losses": 1, "draws": 0,
                             "win_rate": 0},
                        ],
                    },
                    {"id": "bo3", "label": "Best of 3", "entries": []},
                ]
            }
        ),
        encoding="utf-8",
    )

    runs = [
        _run("r1", "2026-01-10T10:00:00Z", [ALPHA, BETA], artifact="runs/r1.json"),
        _run("r2", "2026-01-10T12:00:00Z", [ALPHA, GAMMA], artifact="runs/r2.json"),
        _run("r3", "2026-01-10T11:00:00Z", [BETA, GAMMA], artifact="runs/missing.json"),
        _run("r4", "2026-01-10T13:00:00Z", [BETA, ALPHA], status="running"),
    ]
    lines = [json.dumps(r) for r in runs]
    lines.insert(2, "")
    lines.insert(3, "{not json")
    (chess / "runs.jsonl").write_text("\n".join(lines) + "\n", encoding="utf-8")

    (chess / "runs" / "r1.json").write_text(
        json.dumps(_artifact((1, "Alpha"), (2, "Beta"), [1, 1], 1, (2, 0))), encoding="utf-8"
    )
    (chess / "runs" / "r2.json").write_text(
        json.dumps(_artifact((1, "Alpha"), (3, "Gamma"), [3, 1, 1], 1, (2, 1))), encoding="utf-8"
    )

    (go / "benchmark.json").write_text(json.dumps({"name": "Go Arena"}), encoding="utf-8")
    (go / "leaderboard.json").write_text(json.dumps({"sets": []}), encoding="utf-8")
    (go / "runs.jsonl").write_text("", encoding="utf-8")

    return tmp_path
