"""Abstract base class for benchmark data sources.

A data source reads the static benchmark site:

    benchmarks/index.json          list of benchmarks
    <path>/benchmark.json          benchmark metadata
    <path>/leaderboard.json        leaderboard sets
    <path>/runs.jsonl              one run per line
    <path>/<artifacts_ref>         run artifact with the full match record

Subclasses only implement ``read_text``; parsing and fan-out live here.
Per-artifact failures are logged and dropped so one bad run never blocks
aggregation of the others.
"""

from __future__ import annotations

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from arena_dashboard.types import (
    BenchmarkBundle,
    BenchmarkInfo,
    BenchmarkMeta,
    LeaderboardRow,
    LeaderboardSet,
    Match,
    RunRecord,
)

logger = logging.getLogger(__name__)

COMPLETED = "completed"


class DataSourceError(RuntimeError):
    """Raised when benchmark data cannot be retrieved or parsed."""


def join_path(base: str, ref: str) -> str:
    """Join a benchmark path and a relative reference with a single slash."""
    if not base:
        return ref.lstrip("/")
    return f"{base.rstrip('/')}/{ref.lstrip('/')}"


def parse_runs_jsonl(text: str, source: str = "runs.jsonl") -> list[RunRecord]:
    """Parse ``runs.jsonl`` content, newest run first.

    Blank lines are ignored. Lines that are not JSON objects are skipped
    with a warning.
    """
    runs: list[RunRecord] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        try:
            data = json.loads(line)
        except json.JSONDecodeError as exc:
            logger.warning(f"Skipping {source}:{lineno}: {exc}")
            continue
        if not isinstance(data, dict):
            logger.warning(f"Skipping {source}:{lineno}: expected an object")
            continue
        runs.append(RunRecord.from_dict(data))

    runs.sort(key=lambda r: r.created_at, reverse=True)
    return runs


def parse_meta(data: Any, fallback_name: str) -> BenchmarkMeta:
    if not isinstance(data, dict):
        data = {}
    run_types = data.get("run_types")
    schema_version = data.get("schema_version")
    return BenchmarkMeta(
        name=data.get("name") or fallback_name,
        schema_version=None if schema_version is None else str(schema_version),
        generated_at=data.get("generated_at"),
        run_types=[str(t) for t in run_types] if isinstance(run_types, list) else [],
        description=data.get("description") or "",
    )


def _as_int(value: Any, default: int = 0) -> int:
    """``int(value)``, or ``default`` when the value cannot be parsed."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def parse_leaderboard(data: Any) -> list[LeaderboardSet]:
    sets = data.get("sets") if isinstance(data, dict) else None
    if not isinstance(sets, list):
        return []

    parsed: list[LeaderboardSet] = []
    for raw in sets:
        if not isinstance(raw, dict) or "id" not in raw:
            continue
        rows = [
            LeaderboardRow(
                rank=_as_int(e.get("rank"), i + 1),
                display_name=str(e.get("display_name") or ""),
                rating=e.get("rating") or 0,
                games_played=_as_int(e.get("games_played")),
                wins=_as_int(e.get("wins")),
                losses=_as_int(e.get("losses")),
                draws=_as_int(e.get("draws")),
                win_rate=e.get("win_rate") or 0,
            )
            for i, e in enumerate(raw.get("entries") or [])
            if isinstance(e, dict)
        ]
        set_id = str(raw["id"])
        parsed.append(LeaderboardSet(id=set_id, label=raw.get("label") or set_id, entries=rows))
    return parsed


class DataSource(ABC):
    """Abstract base class for benchmark data sources.

    Attributes:
        name: Source name for logging.
        timeout: Timeout for a single artifact load (seconds).
    """

    def __init__(self, name: str = "base", timeout: float = 10.0) -> None:
        self.name = name
        self.timeout = timeout
        logger.info(f"Initialized {self.name} source (timeout={timeout}s)")

    @abstractmethod
    async def read_text(self, path: str) -> str:
        """Read a file relative to the site root.

        Raises:
            DataSourceError: If the file is missing or unreadable.
        """

    async def read_json(self, path: str) -> Any:
        text = await self.read_text(path)
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise DataSourceError(f"Invalid JSON in {path}: {exc}") from exc

    # ------------------------------------------------------------------
    # Benchmarks
    # ------------------------------------------------------------------

    async def load_index(self, index_path: str = "benchmarks/index.json") -> list[BenchmarkInfo]:
        """Load the benchmark index."""
        data = await self.read_json(index_path)
        entries = data.get("benchmarks") if isinstance(data, dict) else None
        benchmarks = [
            BenchmarkInfo(
                benchmark_id=str(b["benchmark_id"]),
                name=str(b.get("name") or b["benchmark_id"]),
                path=str(b.get("path") or ""),
            )
            for b in entries or []
            if isinstance(b, dict) and "benchmark_id" in b
        ]
        logger.info(f"Found {len(benchmarks)} benchmark(s) in {index_path}")
        return benchmarks

    async def load_benchmark(self, info: BenchmarkInfo) -> BenchmarkBundle:
        """Load metadata, leaderboard and runs for one benchmark concurrently.

        Raises:
            DataSourceError: If any of the three files fails to load.
        """
        meta, leaderboard, runs = await asyncio.gather(
            self.read_json(join_path(info.path, "benchmark.json")),
            self.read_json(join_path(info.path, "leaderboard.json")),
            self.load_runs(info.path),
        )
        bundle = BenchmarkBundle(
            info=info,
            meta=parse_meta(meta, info.name),
            leaderboard_sets=parse_leaderboard(leaderboard),
            runs=runs,
        )
        logger.info(
            f"Loaded benchmark {info.benchmark_id}: {len(bundle.leaderboard_sets)} "
            f"leaderboard set(s), {len(runs)} run(s)"
        )
        return bundle

    async def load_runs(self, benchmark_path: str) -> list[RunRecord]:
        path = join_path(benchmark_path, "runs.jsonl")
        return parse_runs_jsonl(await self.read_text(path), source=path)

    # ------------------------------------------------------------------
    # Artifacts
    # ------------------------------------------------------------------

    async def load_artifact(self, benchmark_path: str, artifact_ref: str) -> dict[str, Any]:
        data = await self.read_json(join_path(benchmark_path, artifact_ref))
        if not isinstance(data, dict):
            raise DataSourceError(f"Artifact {artifact_ref} is not a JSON object")
        return data

    async def load_match(self, benchmark_path: str, run: RunRecord) -> Match:
        if not run.artifacts_ref:
            raise DataSourceError(f"Run {run.run_id} has no artifact")
        artifact = await self.load_artifact(benchmark_path, run.artifacts_ref)
        return Match.from_artifact(artifact)

    async def load_matches(self, benchmark_path: str, runs: list[RunRecord]) -> list[Match]:
        """Load match records for every completed run concurrently.

        Returns:
            Matches in run order; failed loads are dropped.
        """
        completed = [r for r in runs if r.status == COMPLETED and r.artifacts_ref]
        if not completed:
            return []

        logger.info(f"Loading {len(completed)} match artifact(s) from {self.name}")
        loaded = await asyncio.gather(
            *(self._safe_load_match(benchmark_path, run) for run in completed)
        )
        matches = [m for m in loaded if m is not None]
        dropped = len(completed) - len(matches)
        if dropped:
            logger.warning(f"Dropped {dropped} of {len(completed)} artifact(s) that failed to load")
        return matches

    async def _safe_load_match(self, benchmark_path: str, run: RunRecord) -> Match | None:
        try:
            return await asyncio.wait_for(
                self.load_match(benchmark_path, run), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            logger.error(f"Artifact for run {run.run_id} timed out after {self.timeout}s")
        except DataSourceError as e:
            logger.error(f"Artifact for run {run.run_id} failed: {e}")
        return None

    async def close(self) -> None:
        """Release resources held by the source."""
        logger.debug(f"Closing {self.name} source")

    async def __aenter__(self) -> DataSource:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
