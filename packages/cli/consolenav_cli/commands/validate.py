from __future__ import annotations

import typer
from consolenav.errors import ConfigurationError
from consolenav.resolvers import build_schema
from rich.console import Console
from rich.table import Table

from consolenav_cli.utils import ctx_obj, handle_error, load, print_json

console = Console()


def validate(ctx: typer.Context) -> None:
    """Validate the navigation configuration and the schema's resolver table."""
    _, navigation = load(ctx)
    try:
        build_schema()
    except ConfigurationError as e:
        handle_error(ctx, e)

    summary = {
        "regions": len(navigation.regions),
        "datacenters": sum(len(r.datacenters) for r in navigation.regions),
        "categories": len(navigation.categories),
        "services": sum(len(c.services) for c in navigation.categories),
        "account_services": len(navigation.account_services),
        "datacenter": navigation.dc_name,
        "base_url": navigation.base_url,
    }

    if ctx_obj(ctx).get("json"):
        print_json({"valid": True, **summary})
        return

    table = Table(title="Navigation configuration", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key, value in summary.items():
        table.add_row(key.replace("_", " "), str(value))
    console.print(table)
    console.print("[green]Configuration is valid.[/green]")
