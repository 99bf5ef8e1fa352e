from __future__ import annotations

import json
from typing import NoReturn

import typer
from consolenav.config import NavigationConfig
from consolenav.errors import ConfigurationError
from consolenav.logging_config import setup_logging
from consolenav.settings import Settings, load_config
from rich.console import Console
from rich.logging import RichHandler

_err_console = Console(stderr=True)


def ctx_obj(ctx: typer.Context) -> dict:
    """Resolve ctx.obj through the parent chain when invoked via a sub-app."""
    while ctx is not None:
        if ctx.obj:
            return ctx.obj
        ctx = ctx.parent
    return {}


def configure_logging(verbose: bool) -> None:
    setup_logging("DEBUG" if verbose else "WARNING", RichHandler(console=_err_console, show_path=False))


def load(ctx: typer.Context) -> tuple[Settings, NavigationConfig]:
    """Load settings and navigation from the --config file, exiting cleanly on error."""
    try:
        return load_config(ctx_obj(ctx).get("config"))
    except ConfigurationError as e:
        handle_error(ctx, e)


def handle_error(ctx: typer.Context, e: Exception) -> NoReturn:
    """Print a clean error message and exit 1."""
    obj = ctx_obj(ctx)
    verbose = obj.get("verbose", False)
    json_mode = obj.get("json", False)

    if isinstance(e, ConfigurationError):
        msg = f"Invalid configuration: {e}"
    elif isinstance(e, ValueError):
        msg = str(e)
    else:
        msg = f"Error: {e}"

    if json_mode:
        print(json.dumps({"error": msg}))
    else:
        _err_console.print(f"[red]Error:[/red] {msg}")

    if verbose:
        _err_console.print_exception()

    raise typer.Exit(1)


def print_json(data) -> None:
    print(json.dumps(data, default=str))
