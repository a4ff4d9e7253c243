"""CLI entry point for skillgap."""

import sys
from pathlib import Path

import click
from rich.console import Console

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cli.commands import order, serve, skills, status, trend, validate
from cli.config import load_config_model
from cli.logging_config import setup_logging
from errors import ConfigurationError

console = Console()


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Config file (default: ./config.yaml or ~/.skillgap/config.yaml)",
)
@click.pass_context
def cli(ctx, verbose: bool, json_logs: bool, config_path: Path):
    """skillgap - check your skills against developer roadmaps."""
    try:
        config = load_config_model(config_path)
    except ConfigurationError as e:
        console.print(f"[red]Config error:[/] {e}")
        sys.exit(1)

    level = "DEBUG" if verbose else config.logging.level
    setup_logging(json_mode=json_logs or config.logging.json_mode, level=level)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


cli.add_command(validate)
cli.add_command(skills)
cli.add_command(order)
cli.add_command(trend)
cli.add_command(status)
cli.add_command(serve)


if __name__ == "__main__":
    cli()
