"""CLI for arena-dashboard."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from dataclasses import asdict
from datetime import datetime
from typing import TypeVar

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from arena_dashboard import __version__
from arena_dashboard.config import PAGE_SIZE_CHOICES, DashboardConfig
from arena_dashboard.reporters import JSONReporter, TableReporter
from arena_dashboard.session import DashboardSession
from arena_dashboard.sources import DataSourceError, open_source

console = Console()

T = TypeVar("T")


def _execute(coro: Awaitable[T]) -> T:
    """Run ``coro`` and turn data errors into a red message and exit code 1."""
    try:
        return asyncio.run(coro)
    except DataSourceError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)


async def _with_session(
    config: DashboardConfig,
    benchmark_id: str | None,
    action: Callable[[DashboardSession], Awaitable[T]],
) -> T:
    async with open_source(config.data_root, timeout=config.timeout) as source:
        session = DashboardSession(source, config)
        await session.select_benchmark(benchmark_id)
        return await action(session)


benchmark_option = click.option(
    "--benchmark",
    "-b",
    "benchmark_id",
    default=None,
    help="Benchmark id (defaults to the first benchmark in the index).",
)

format_option = click.option(
    "--format",
    "fmt",
    type=click.Choice(["table", "json"]),
    default="table",
    show_default=True,
    help="Output format.",
)


@click.group()
@click.version_option(version=__version__, prog_name="arena-dashboard")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML or JSON config file.",
)
@click.option(
    "--data",
    "data_root",
    default=None,
    help="Site root: a directory or http(s):// URL containing benchmarks/index.json.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, data_root: str | None, verbose: bool) -> None:
    """Arena Dashboard - benchmark match leaderboards, runs and stats."""
    if verbose:
        logging.basicConfig(level=logging.INFO)

    try:
        config = DashboardConfig.load(config_path).with_overrides(data_root=data_root)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] Invalid configuration: {escape(str(e))}")
        sys.exit(1)
    ctx.obj = config


@main.command()
@format_option
@click.pass_obj
def benchmarks(config: DashboardConfig, fmt: str) -> None:
    """List benchmarks from the index."""

    async def _load() -> list:
        async with open_source(config.data_root, timeout=config.timeout) as source:
            return await source.load_index(config.index_path)

    found = _execute(_load())
    if fmt == "json":
        click.echo(JSONReporter.dump({"benchmarks": [asdict(b) for b in found]}, None))
        return

    if not found:
        console.print("[yellow]No benchmarks found.[/yellow]")
        return

    table = Table(title="Benchmarks", show_header=True, header_style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Path", style="dim")
    for b in found:
        table.add_row(escape(b.benchmark_id), escape(b.name), escape(b.path))
    console.print(table)


@main.command()
@benchmark_option
@click.option("--set", "set_id", default=None, help="Leaderboard set id (defaults to the first).")
@format_option
@click.option("--output", "-o", default=None, help="Write JSON output to this file.")
@click.pass_obj
def leaderboard(
    config: DashboardConfig,
    benchmark_id: str | None,
    set_id: str | None,
    fmt: str,
    output: str | None,
) -> None:
    """Show a benchmark leaderboard."""

    async def _load(session: DashboardSession):
        if set_id:
            session.set_leaderboard(set_id)
        return session.bundle, session.active_leaderboard()

    bundle, lb = _execute(_with_session(config, benchmark_id, _load))

    if set_id and (lb is None or lb.id != set_id):
        console.print(
            f"[yellow]Leaderboard set '{escape(set_id)}' not found, showing default.[/yellow]"
        )

    if fmt == "json":
        if lb is None:
            click.echo(JSONReporter.dump({"sets": []}, output))
        else:
            click.echo(JSONReporter.leaderboard(lb, output_path=output))
        return

    TableReporter.benchmark_meta(bundle.meta, console)
    if len(bundle.leaderboard_sets) > 1:
        active = lb.id if lb is not None else None
        tabs = "  ".join(
            f"[reverse]{escape(s.label)}[/reverse]" if s.id == active else escape(s.label)
            for s in bundle.leaderboard_sets
        )
        console.print(tabs)
    TableReporter.leaderboard(lb, console)


@main.command()
@benchmark_option
@click.option("--search", "-s", default="", help="Filter by provider/model name.")
@click.option("--page", "-p", type=int, default=1, show_default=True, help="Page number.")
@click.option(
    "--page-size",
    type=click.Choice([str(n) for n in PAGE_SIZE_CHOICES]),
    default=None,
    help="Runs per page (default from config).",
)
@format_option
@click.pass_obj
def runs(
    config: DashboardConfig,
    benchmark_id: str | None,
    search: str,
    page: int,
    page_size: str | None,
    fmt: str,
) -> None:
    """List runs, newest first, with search and pagination."""

    async def _load(session: DashboardSession):
        if page_size is not None:
            session.set_page_size(page_size)
        session.set_search(search)
        session.set_page(page)
        return session.current_page()

    run_page = _execute(_with_session(config, benchmark_id, _load))

    if fmt == "json":
        click.echo(JSONReporter.runs(run_page))
        return
    TableReporter.runs(run_page, console)


@main.command("run-detail")
@benchmark_option
@click.argument("artifact_ref")
@click.pass_obj
def run_detail(config: DashboardConfig, benchmark_id: str | None, artifact_ref: str) -> None:
    """Show one run's match record (ARTIFACT_REF is relative to the benchmark)."""

    async def _load(session: DashboardSession):
        return await session.run_detail(artifact_ref)

    match = _execute(_with_session(config, benchmark_id, _load))
    TableReporter.run_detail(match, console)


@main.command()
@benchmark_option
@click.option("--top-n", type=int, default=None, help="Entries per ranked view (default 3).")
@format_option
@click.option("--output", "-o", default=None, help="Write JSON output to this file.")
@click.pass_obj
def stats(
    config: DashboardConfig,
    benchmark_id: str | None,
    top_n: int | None,
    fmt: str,
    output: str | None,
) -> None:
    """Aggregate completed matches into ranked model stats."""
    try:
        config = config.with_overrides(top_n=top_n)
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)

    async def _load(session: DashboardSession):
        return session.bundle, await session.refresh_stats()

    bundle, result = _execute(_with_session(config, benchmark_id, _load))

    if fmt == "json" or output:
        json_str = JSONReporter.generate(
            result,
            output_path=output,
            benchmark_id=bundle.info.benchmark_id,
            generated_at=datetime.now().isoformat(),
        )
        if fmt == "json":
            click.echo(json_str)
            return
        console.print(f"[dim]Saved stats: {escape(output)}[/dim]")

    TableReporter.stats(result, console)


if __name__ == "__main__":
    main()
