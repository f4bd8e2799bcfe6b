"""JSON report generator for match stats, leaderboards and run pages."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from arena_dashboard.runs import RunPage
    from arena_dashboard.types import LeaderboardSet, MatchStats


class JSONReporter:
    """JSON report generator.

    Stats output format:
    ```json
    {
      "total_matches": 2,
      "models": {"A": {"wins": 2, ...}},
      "views": {"most_sweeps": {"title": "...", "empty": false, "items": [...]}},
      "generated_at": "2026-01-17T10:30:00"
    }
    ```
    """

    @staticmethod
    def stats_to_dict(stats: MatchStats) -> dict[str, Any]:
        return {
            "total_matches": stats.total_matches,
            "models": {name: asdict(model) for name, model in stats.models.items()},
            "views": {
                view_id: {
                    "title": view.title,
                    "empty": view.empty,
                    "placeholder": view.placeholder,
                    "items": [asdict(item) for item in view.items],
                }
                for view_id, view in stats.views.items()
            },
        }

    @staticmethod
    def generate(
        stats: MatchStats,
        output_path: Path | str | None = None,
        **extra_fields: Any,
    ) -> str:
        """Generate a JSON stats report.

        Args:
            stats: Aggregated match stats.
            output_path: File to write (None to skip writing).
            **extra_fields: Extra top-level fields (benchmark id, timestamp, ...).

        Returns:
            JSON string.
        """
        report = JSONReporter.stats_to_dict(stats)
        report.update(extra_fields)
        return JSONReporter.dump(report, output_path)

    @staticmethod
    def leaderboard(lb: LeaderboardSet, output_path: Path | str | None = None) -> str:
        return JSONReporter.dump(asdict(lb), output_path)

    @staticmethod
    def runs(page: RunPage, output_path: Path | str | None = None) -> str:
        report = {
            "page": page.page,
            "total_pages": page.total_pages,
            "total": page.total,
            "runs": [asdict(run) for run in page.items],
        }
        return JSONReporter.dump(report, output_path)

    @staticmethod
    def dump(report: dict[str, Any], output_path: Path | str | None) -> str:
        json_str = json.dumps(report, indent=2, ensure_ascii=False)
        if output_path:
            Path(output_path).write_text(json_str, encoding="utf-8")
        return json_str
