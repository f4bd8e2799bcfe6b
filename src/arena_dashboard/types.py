"""Shared data types for arena-dashboard.

This module defines the records exchanged between retrieval, aggregation and
reporting:
- Participant / Round / Match: one completed match, parsed from a run artifact
- RunRecord: one line of a benchmark's ``runs.jsonl``
- BenchmarkInfo / BenchmarkMeta: index entry and ``benchmark.json``
- LeaderboardRow / LeaderboardSet: ``leaderboard.json`` content
- ModelAccumulator / RankedItem / RankedView / MatchStats: aggregation output
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

NO_DATA = "No data"


def _opt_id(value: Any) -> str | None:
    """Normalize an id field; ids are compared as strings."""
    if value is None or value == "":
        return None
    return str(value)


@dataclass
class Participant:
    """One side of a match.

    Attributes:
        id: Identifier, unique within a benchmark (may be missing).
        display_name: Human label. Aggregation groups by this value, so two
            distinct participants sharing a name are merged.
    """

    id: str | None
    display_name: str

    @classmethod
    def from_dict(cls, data: Any) -> Participant | None:
        if not isinstance(data, dict):
            return None
        name = data.get("display_name") or data.get("name")
        pid = _opt_id(data.get("id"))
        if not name:
            # Fall back to the id so the participant can still be grouped
            if pid is None:
                return None
            name = pid
        return cls(id=pid, display_name=str(name))


@dataclass
class Round:
    """One sub-game within a match; ``winner_id`` is None for a drawn round."""

    winner_id: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Round:
        if not isinstance(data, dict):
            return cls()
        winner_id = data.get("winner_id")
        if winner_id is None and isinstance(data.get("winner"), dict):
            winner_id = data["winner"].get("id")
        return cls(winner_id=_opt_id(winner_id))


@dataclass
class Match:
    """A completed match between two participants.

    Attributes:
        player1: First participant (None when the record is malformed).
        player2: Second participant (None when the record is malformed).
        rounds: Rounds in play order.
        winner_id: Id of the overall winner; None means a draw.
        player1_score: Final tally for player1, independent of ``rounds``.
        player2_score: Final tally for player2, independent of ``rounds``.
        status: Match status string.
        winner_name: Winner display name when the artifact carries one.
        created_at: Creation timestamp (ISO string).
        completed_at: Completion timestamp (ISO string).
    """

    player1: Participant | None
    player2: Participant | None
    rounds: list[Round] = field(default_factory=list)
    winner_id: str | None = None
    player1_score: int | None = None
    player2_score: int | None = None
    status: str = "unknown"
    winner_name: str | None = None
    created_at: str | None = None
    completed_at: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.player1 is not None and self.player2 is not None

    @property
    def label(self) -> str:
        p1 = self.player1.display_name if self.player1 else "-"
        p2 = self.player2.display_name if self.player2 else "-"
        return f"{p1} vs {p2}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Match:
        """Build a Match from the ``match`` object of a run artifact."""
        winner = data.get("winner") if isinstance(data.get("winner"), dict) else None
        winner_id = data.get("winner_id")
        if winner_id is None and winner is not None:
            winner_id = winner.get("id")
        rounds = data.get("rounds") or []
        return cls(
            player1=Participant.from_dict(data.get("player1")),
            player2=Participant.from_dict(data.get("player2")),
            rounds=[Round.from_dict(r) for r in rounds] if isinstance(rounds, list) else [],
            winner_id=_opt_id(winner_id),
            player1_score=_opt_int(data.get("player1_score")),
            player2_score=_opt_int(data.get("player2_score")),
            status=str(data.get("status") or "unknown"),
            winner_name=winner.get("display_name") if winner else None,
            created_at=data.get("created_at"),
            completed_at=data.get("completed_at"),
        )

    @classmethod
    def from_artifact(cls, artifact: dict[str, Any]) -> Match:
        """Build a Match from a full run artifact (``{"match": {...}}``)."""
        match = artifact.get("match") if isinstance(artifact, dict) else None
        return cls.from_dict(match if isinstance(match, dict) else {})


def _opt_int(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


# ----------------------------------------------------------------------
# Benchmark site records
# ----------------------------------------------------------------------


@dataclass
class RunParticipant:
    display_name: str = ""
    provider: str = ""
    model_name: str = ""

    @property
    def search_key(self) -> str:
        return f"{self.provider}/{self.model_name}".lower()


@dataclass
class RunRecord:
    """One entry from ``runs.jsonl``.

    Attributes:
        run_id: Run identifier.
        participants: Participants as listed in the run index.
        status: Run status (``completed`` runs carry match artifacts).
        match_type: Match type tag, e.g. ``bo3``.
        created_at: Creation timestamp (ISO string).
        artifacts_ref: Artifact path relative to the benchmark directory.
        extra: Any additional fields from the JSON line.
    """

    run_id: str
    participants: list[RunParticipant] = field(default_factory=list)
    status: str = "unknown"
    match_type: str | None = None
    created_at: str = ""
    artifacts_ref: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def title(self) -> str:
        names = " vs ".join(p.display_name for p in self.participants if p.display_name)
        return names or f"Run {self.run_id}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunRecord:
        known = {"run_id", "participants", "status", "match_type", "created_at", "artifacts_ref"}
        participants = [
            RunParticipant(
                display_name=str(p.get("display_name") or ""),
                provider=str(p.get("provider") or ""),
                model_name=str(p.get("model_name") or ""),
            )
            for p in data.get("participants") or []
            if isinstance(p, dict)
        ]
        return cls(
            run_id=str(data.get("run_id", "")),
            participants=participants,
            status=str(data.get("status") or "unknown"),
            match_type=data.get("match_type"),
            created_at=str(data.get("created_at") or ""),
            artifacts_ref=data.get("artifacts_ref") or None,
            extra={k: v for k, v in data.items() if k not in known},
        )


@dataclass
class BenchmarkInfo:
    """Entry from ``benchmarks/index.json``."""

    benchmark_id: str
    name: str
    path: str


@dataclass
class BenchmarkMeta:
    """Content of ``benchmark.json``."""

    name: str
    schema_version: str | None = None
    generated_at: str | None = None
    run_types: list[str] = field(default_factory=list)
    description: str = ""


@dataclass
class LeaderboardRow:
    rank: int
    display_name: str
    rating: float | str
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    win_rate: float | str = 0


@dataclass
class LeaderboardSet:
    """One tab of the leaderboard (e.g. overall, per match type)."""

    id: str
    label: str
    entries: list[LeaderboardRow] = field(default_factory=list)


@dataclass
class BenchmarkBundle:
    """Everything loaded for one benchmark selection."""

    info: BenchmarkInfo
    meta: BenchmarkMeta
    leaderboard_sets: list[LeaderboardSet]
    runs: list[RunRecord]


# ----------------------------------------------------------------------
# Aggregation output
# ----------------------------------------------------------------------


@dataclass
class ModelAccumulator:
    """Running per-model aggregate, keyed by display name.

    Attributes:
        display_name: Aggregation key.
        total_matches: Matches played (``wins + losses + draws``).
        wins: Matches won.
        losses: Matches lost.
        draws: Matches drawn.
        total_rounds: Sum of round counts over matches with round data.
        rounds_matches: Matches that contributed round data.
        sweeps20: Wins with final score 2-0.
        wins20: Wins with final score 2-0.
        wins21: Wins with final score 2-1.
        comebacks: Wins where the model trailed at some point.
        avg_rounds: ``total_rounds / rounds_matches``.
        win_rate: ``wins / total_matches``.
        win_share20: ``wins20 / wins``.
        win_share21: ``wins21 / wins``.
    """

    display_name: str
    total_matches: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    total_rounds: int = 0
    rounds_matches: int = 0
    sweeps20: int = 0
    wins20: int = 0
    wins21: int = 0
    comebacks: int = 0
    # Derived metrics (second pass)
    avg_rounds: float = 0.0
    win_rate: float = 0.0
    win_share20: float = 0.0
    win_share21: float = 0.0


@dataclass
class RankedItem:
    """A row in a ranked view: ``value`` is raw, ``display`` is formatted."""

    label: str
    value: float
    display: str


@dataclass
class RankedView:
    id: str
    title: str
    items: list[RankedItem] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.items

    @property
    def placeholder(self) -> str | None:
        return NO_DATA if self.empty else None


@dataclass
class MatchStats:
    """Result of one aggregation call.

    Attributes:
        total_matches: Input matches that had both participants.
        models: Accumulators keyed by display name, in first-seen order.
        views: Ranked views keyed by view id, in display order.
    """

    total_matches: int = 0
    models: dict[str, ModelAccumulator] = field(default_factory=dict)
    views: dict[str, RankedView] = field(default_factory=dict)
