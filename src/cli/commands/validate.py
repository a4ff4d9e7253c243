"""Validate command: gaps, demand evidence and learning path for a track."""

import json

import click
from rich.console import Console
from rich.table import Table

from cli.utils import build_analyzer, demand_style, parse_skill, run_analyzer
from errors import UnknownTrack
from shared_types import SortStrategy

console = Console()


def _print_result(result) -> None:
    console.print(
        f"\n[bold]{result.track}[/] roadmap {result.roadmap_version}: "
        f"{result.total_core_skills - result.gap_count}/{result.total_core_skills} core skills "
        f"([cyan]{result.coverage_percent}%[/] coverage)"
    )

    if result.gaps:
        table = Table(title=f"Gaps (sorted by {result.sorted_by})", show_header=True)
        table.add_column("Skill", max_width=30)
        if result.sections is not None:
            table.add_column("Section")
        table.add_column("Weight", justify="right")
        table.add_column("GitHub", justify="right")
        table.add_column("SO", justify="right")
        table.add_column("Demand", justify="center")

        for gap in result.gaps:
            ev = gap.evidence
            row = [gap.skill]
            if result.sections is not None:
                row.append(str(gap.section or ""))
            row += [
                str(gap.weight),
                "[red]err[/]" if ev.github.error else f"{ev.github.count:,}",
                "[red]err[/]" if ev.stackoverflow.error else f"{ev.stackoverflow.count:,}",
                demand_style(str(ev.demand_category)),
            ]
            table.add_row(*row)
        console.print(table)
    else:
        console.print("[green]No gaps - every core skill is covered.[/]")

    if result.keep_sharp:
        names = ", ".join(k.skill for k in result.keep_sharp)
        console.print(f"\n[bold]Keep sharp:[/] {names}")

    if result.learning_order:
        console.print("\n[bold]Learning order:[/]")
        for i, skill in enumerate(result.learning_order, 1):
            console.print(f"  {i}. {skill}")

    if result.suggested_next:
        console.print("\n[bold]Suggested next:[/]")
        for s in result.suggested_next:
            console.print(f"  [green]>[/] {s.skill} [dim]({s.reason})[/]")

    errors = {e for g in result.gaps for e in (g.evidence.github.error, g.evidence.stackoverflow.error) if e}
    for error in sorted(errors):
        console.print(f"[yellow]Warning:[/] {error}")


@click.command()
@click.argument("track")
@click.argument("skills", nargs=-1, required=True)
@click.option(
    "-s",
    "--sort",
    "sort_by",
    type=click.Choice([s.value for s in SortStrategy]),
    default=None,
    help="Gap ordering (default from config)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.option("--offline", is_flag=True, help="Skip GitHub / Stack Overflow lookups")
@click.pass_context
def validate(ctx, track: str, skills: tuple, sort_by: str, as_json: bool, offline: bool):
    """Compare SKILLS (name or name:proficiency) against TRACK's core skills."""
    config = ctx.obj["config"]
    user_skills = [parse_skill(s) for s in skills]
    sort_by = sort_by or config.analyzer.default_sort
    analyzer = build_analyzer(config, offline=offline)

    try:
        with console.status("Gathering demand evidence..."):
            result = run_analyzer(
                analyzer,
                lambda a: a.validate(track, user_skills, sort_strategy=sort_by),
            )
    except UnknownTrack as e:
        console.print(f"[red]Error:[/] {e}")
        ctx.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _print_result(result)
