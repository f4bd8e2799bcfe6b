"""Table report generator - terminal tables with Rich.

Every string taken from benchmark data is passed through ``escape`` so
bracketed names are printed literally instead of being read as Rich markup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from arena_dashboard.formatting import format_date, format_rating
from arena_dashboard.types import NO_DATA

if TYPE_CHECKING:
    from arena_dashboard.runs import RunPage
    from arena_dashboard.types import BenchmarkMeta, LeaderboardSet, Match, MatchStats


class TableReporter:
    """Terminal table reporter (Rich).

    Every method prints to ``console`` (a fresh Console when None).
    """

    @staticmethod
    def benchmark_meta(meta: BenchmarkMeta, console: Console | None = None) -> None:
        console = console or Console()
        run_types = ", ".join(meta.run_types) if meta.run_types else "-"
        console.print(f"[bold cyan]{escape(meta.name)}[/bold cyan]")
        console.print(f"Schema: {escape(meta.schema_version or '-')}")
        console.print(f"Generated: {escape(format_date(meta.generated_at))}")
        console.print(f"Run types: {escape(run_types)}")
        if meta.description:
            console.print(f"[dim]{escape(meta.description)}[/dim]")
        console.print()

    @staticmethod
    def leaderboard(lb: LeaderboardSet | None, console: Console | None = None) -> None:
        console = console or Console()
        if lb is None or not lb.entries:
            console.print("[yellow]No leaderboard entries available.[/yellow]")
            return

        table = Table(title=f"🏆 {escape(lb.label)}", show_header=True, header_style="bold")
        table.add_column("Rank", justify="right")
        table.add_column("Model", style="cyan")
        table.add_column("Rating", justify="right")
        table.add_column("Games", justify="right")
        table.add_column("Wins", justify="right", style="green")
        table.add_column("Losses", justify="right", style="red")
        table.add_column("Draws", justify="right")
        table.add_column("Win Rate", justify="right", style="magenta")

        for row in lb.entries:
            table.add_row(
                str(row.rank),
                escape(row.display_name),
                escape(format_rating(row.rating)),
                str(row.games_played),
                str(row.wins),
                str(row.losses),
                str(row.draws),
                escape(f"{row.win_rate}%"),
            )
        console.print(table)

    @staticmethod
    def runs(page: RunPage, console: Console | None = None) -> None:
        console = console or Console()
        console.print(f"{page.total} runs  |  Page {page.page} of {page.total_pages}")
        if not page.items:
            console.print("[yellow]No runs available.[/yellow]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Run", style="cyan")
        table.add_column("Type")
        table.add_column("Status")
        table.add_column("Created")
        table.add_column("Artifact", style="dim")

        for run in page.items:
            table.add_row(
                escape(run.title),
                escape(run.match_type.upper() if run.match_type else "RUN"),
                escape(run.status),
                escape(format_date(run.created_at)),
                escape(run.artifacts_ref or ""),
            )
        console.print(table)

        nav = []
        if page.has_prev:
            nav.append(f"Prev: --page {page.page - 1}")
        if page.has_next:
            nav.append(f"Next: --page {page.page + 1}")
        if nav:
            console.print(f"[dim]{'  |  '.join(nav)}[/dim]")

    @staticmethod
    def run_detail(match: Match, console: Console | None = None) -> None:
        console = console or Console()
        winner = match.winner_name or _winner_name(match) or "Draw"

        console.print("[bold cyan]Run Detail[/bold cyan]")
        console.print(f"Match: {escape(match.label)}")
        console.print(f"Status: {escape(match.status)}")
        console.print(f"Winner: {escape(winner)}")
        console.print(f"Rounds: {len(match.rounds)}")
        if match.player1_score is not None and match.player2_score is not None:
            console.print(f"Score: {match.player1_score}-{match.player2_score}")
        console.print(
            f"Created: {escape(format_date(match.created_at))}  "
            f"Completed: {escape(format_date(match.completed_at))}"
        )

    @staticmethod
    def stats(stats: MatchStats, console: Console | None = None) -> None:
        """Print the match count and one small table per ranked view."""
        console = console or Console()
        console.print(
            f"[bold cyan]Match Stats[/bold cyan]  Completed matches: {stats.total_matches}"
        )
        console.print()

        for view in stats.views.values():
            # Heading printed on its own line; a table title wraps to the column width
            console.print(f"[bold]{view.title}[/bold]")
            table = Table(show_header=False)
            table.add_column("#", justify="right", style="dim")
            table.add_column("Model", style="cyan")
            table.add_column("Value", justify="right", style="magenta")
            if view.empty:
                table.add_row("", f"[dim]{NO_DATA}[/dim]", "")
            for i, item in enumerate(view.items, start=1):
                table.add_row(str(i), escape(item.label), item.display)
            console.print(table)


def _winner_name(match: Match) -> str | None:
    for player in (match.player1, match.player2):
        if player is not None and match.winner_id is not None and player.id == match.winner_id:
            return player.display_name
    return None
