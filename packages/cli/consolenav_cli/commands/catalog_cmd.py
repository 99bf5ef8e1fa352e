from __future__ import annotations

from typing import Annotated

import typer
from consolenav.catalog import Catalog
from consolenav.errors import NotFoundError
from rich.console import Console
from rich.table import Table

from consolenav_cli.utils import ctx_obj, handle_error, load, print_json

console = Console()

catalog_app = typer.Typer(
    name="catalog",
    help="Browse the navigation catalog with resolved URLs.",
    no_args_is_help=True,
)


def _catalog(ctx: typer.Context) -> Catalog:
    _, navigation = load(ctx)
    return Catalog(navigation)


@catalog_app.command("categories")
def catalog_categories(ctx: typer.Context) -> None:
    """List categories and their services."""
    categories = _catalog(ctx).list_categories()

    if ctx_obj(ctx).get("json"):
        print_json({"categories": [c.model_dump() for c in categories]})
        return

    table = Table(title="Catalog")
    table.add_column("Category", style="cyan")
    table.add_column("Service")
    table.add_column("Slug", style="dim")
    table.add_column("URL")
    for category in categories:
        for i, svc in enumerate(category.services):
            table.add_row(category.name if i == 0 else "", svc.name, svc.slug, svc.url)
    console.print(table)


@catalog_app.command("regions")
def catalog_regions(ctx: typer.Context) -> None:
    """List regions and datacenters; the current datacenter is marked."""
    catalog = _catalog(ctx)
    current = catalog.current_datacenter().name

    if ctx_obj(ctx).get("json"):
        print_json({"regions": [r.model_dump() for r in catalog.list_regions()], "current": current})
        return

    table = Table(title="Regions")
    table.add_column("Region", style="cyan")
    table.add_column("Datacenter")
    table.add_column("URL")
    for region in catalog.list_regions():
        for i, dc in enumerate(region.datacenters):
            name = f"[bold green]{dc.name} *[/bold green]" if dc.name == current else dc.name
            table.add_row(region.name if i == 0 else "", name, dc.url)
    console.print(table)


@catalog_app.command("service")
def catalog_service(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Service slug")],
) -> None:
    """Show one service with its resolved URL."""
    try:
        svc = _catalog(ctx).find_service(slug)
    except NotFoundError as e:
        handle_error(ctx, e)

    if ctx_obj(ctx).get("json"):
        print_json(svc.model_dump())
        return
    console.print(f"[cyan]{svc.name}[/cyan] ({svc.slug})")
    console.print(svc.url)


@catalog_app.command("account-services")
def catalog_account_services(
    ctx: typer.Context,
    account_id: Annotated[str, typer.Option("--account-id", help="Account id substituted into templated URLs")],
) -> None:
    """List account services resolved for an account id."""
    services = _catalog(ctx).list_account_services(account_id)

    if ctx_obj(ctx).get("json"):
        print_json({"services": [s.model_dump() for s in services]})
        return

    table = Table(title=f"Account services for {account_id}")
    table.add_column("Service", style="cyan")
    table.add_column("Slug", style="dim")
    table.add_column("URL")
    for svc in services:
        table.add_row(svc.name, svc.slug, svc.url)
    console.print(table)
