"""Catalog commands: list core skills and order a skill set."""

import click
from rich.console import Console
from rich.table import Table

from errors import UnknownTrack
from roadmap.catalog import all_skills, track_info
from roadmap.prerequisites import get_learning_order, get_prerequisites
from shared_types import ROADMAP_SOURCE, ROADMAP_VERSION

console = Console()


@click.command()
@click.option("-t", "--track", help="Show one track's core skills with weights")
@click.pass_context
def skills(ctx, track: str):
    """List known skills, or a track's core skills."""
    if not track:
        names = all_skills()
        console.print(f"[bold]{len(names)} skills[/] across all tracks ({ROADMAP_SOURCE} {ROADMAP_VERSION})")
        console.print(", ".join(names))
        return

    try:
        roadmap = track_info(track)
    except UnknownTrack as e:
        console.print(f"[red]Error:[/] {e}")
        ctx.exit(1)

    table = Table(title=f"{roadmap.name}: {roadmap.description}", show_header=True)
    table.add_column("Skill", max_width=30)
    table.add_column("Weight", justify="right")
    table.add_column("Category")
    table.add_column("Requires", style="dim")
    for skill in roadmap.core_skills:
        table.add_row(
            skill.name,
            str(skill.weight),
            skill.category,
            ", ".join(get_prerequisites(track, skill.name)),
        )
    console.print(table)


@click.command()
@click.argument("track")
@click.argument("skill_names", nargs=-1, required=True)
@click.pass_context
def order(ctx, track: str, skill_names: tuple):
    """Put SKILL_NAMES in prerequisite order for TRACK."""
    try:
        track_info(track)
    except UnknownTrack as e:
        console.print(f"[red]Error:[/] {e}")
        ctx.exit(1)

    for i, skill in enumerate(get_learning_order(track, skill_names), 1):
        console.print(f"{i}. {skill}")
