"""Status command: provider rate limits and quotas."""

import click
from rich.console import Console
from rich.table import Table

from cli.utils import build_analyzer, run_analyzer

console = Console()


@click.command()
@click.pass_context
def status(ctx):
    """Show GitHub rate limit and Stack Exchange quota."""
    analyzer = build_analyzer(ctx.obj["config"])
    providers = run_analyzer(analyzer, lambda a: a.provider_status())

    table = Table(title="Provider Status", show_header=True)
    table.add_column("Provider")
    table.add_column("Remaining", justify="right")
    table.add_column("Limit", justify="right")
    table.add_column("Authenticated", justify="center")
    table.add_column("Resets")

    github = providers["github"]
    if github:
        table.add_row(
            "GitHub",
            str(github["remaining"]),
            str(github["limit"]),
            "yes" if github["authenticated"] else "no",
            github["reset"],
        )
    else:
        table.add_row("GitHub", "[red]unavailable[/]", "", "", "")

    so = providers["stackoverflow"]
    if so:
        table.add_row(
            "Stack Overflow",
            str(so["quota_remaining"]),
            str(so["quota_max"]),
            "yes" if so["authenticated"] else "no",
            "",
        )
    else:
        table.add_row("Stack Overflow", "[red]unavailable[/]", "", "", "")

    console.print(table)
