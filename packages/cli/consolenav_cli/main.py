from pathlib import Path

import typer
from consolenav.settings import CONFIG_ENV, DEFAULT_CONFIG_PATH

from consolenav_cli import __version__
from consolenav_cli.commands.catalog_cmd import catalog_app
from consolenav_cli.commands.query_cmd import query
from consolenav_cli.commands.serve_cmd import serve
from consolenav_cli.commands.validate import validate
from consolenav_cli.utils import configure_logging


def _version_callback(value: bool) -> None:
    if value:
        print(f"consolenav {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="consolenav",
    help="Navigation and service catalog for the cloud console",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-V", help="Show version", callback=_version_callback, is_eager=True
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    config: Path = typer.Option(
        DEFAULT_CONFIG_PATH, "--config", "-c", envvar=CONFIG_ENV, help="Navigation configuration file"
    ),
) -> None:
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["json"] = json_output
    ctx.obj["config"] = config
    configure_logging(verbose)


app.command()(validate)
app.command()(query)
app.command()(serve)
app.add_typer(catalog_app, name="catalog")
