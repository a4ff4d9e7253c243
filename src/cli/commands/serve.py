"""Serve command: run the HTTP API."""

import click
from rich.console import Console

console = Console()


@click.command()
@click.option("--host", default=None, help="Bind address (default from config)")
@click.option("-p", "--port", default=None, type=int, help="Port (default from config / $PORT)")
@click.pass_context
def serve(ctx, host: str, port: int):
    """Start the validation API server."""
    import uvicorn

    config = ctx.obj["config"]
    host = host or config.server.host
    port = port or config.server.port
    console.print(f"[green]Serving[/] on http://{host}:{port}/api")
    uvicorn.run("web.app:app", host=host, port=port)
