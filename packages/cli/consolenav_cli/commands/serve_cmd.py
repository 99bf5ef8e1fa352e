from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from consolenav_cli.utils import ctx_obj, load

console = Console()


def serve(
    ctx: typer.Context,
    host: Annotated[str, typer.Option("--host", help="Interface to bind")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", "-p", help="Port to listen on")] = 8000,
    workers: Annotated[int | None, typer.Option("--workers", help="Worker processes")] = None,
) -> None:
    """Serve the catalog over GraphQL."""
    from consolenav_web.app import serve as run_server

    # Fail fast on a bad config before uvicorn spawns workers
    _, navigation = load(ctx)
    config = ctx_obj(ctx).get("config")
    console.print(f"[cyan]Serving {navigation.dc_name} on http://{host}:{port}/graphql[/cyan]")
    run_server(host=host, port=port, config=str(config) if config else None, workers=workers)
