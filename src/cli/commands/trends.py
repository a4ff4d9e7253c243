"""Trend command: six months of demand for one skill."""

import click
from rich.console import Console
from rich.table import Table

from cli.utils import build_analyzer, run_analyzer
from errors import UnknownTrack

console = Console()


@click.command()
@click.argument("skill")
@click.argument("track")
@click.option("--offline", is_flag=True, help="Skip GitHub / Stack Overflow lookups")
@click.pass_context
def trend(ctx, skill: str, track: str, offline: bool):
    """Monthly GitHub / Stack Overflow demand for SKILL in TRACK."""
    analyzer = build_analyzer(ctx.obj["config"], offline=offline)

    try:
        with console.status("Fetching monthly demand..."):
            series = run_analyzer(analyzer, lambda a: a.get_skill_trend(skill, track))
    except UnknownTrack as e:
        console.print(f"[red]Error:[/] {e}")
        ctx.exit(1)

    table = Table(title=f"{series.skill} demand ({series.track})", show_header=True)
    table.add_column("Month")
    table.add_column("GitHub", justify="right")
    table.add_column("SO", justify="right")
    table.add_column("Combined", justify="right")

    peak = max((p.combined for p in series.monthly_data), default=0) or 1
    for point in series.monthly_data:
        bar = "#" * round(10 * point.combined / peak)
        table.add_row(
            point.label,
            f"{point.github:,}",
            f"{point.stackoverflow:,}",
            f"{point.combined:,.1f} {bar}",
        )
    console.print(table)
