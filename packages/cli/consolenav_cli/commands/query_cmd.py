"""Run a GraphQL query against the catalog without starting the server."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
from consolenav.account import AccountProvider, Identity
from consolenav.catalog import Catalog
from consolenav.cloudapi import AccountFetcher, CloudApiClient, StaticAccountFetcher
from consolenav.config import read_config_file
from consolenav.errors import ConfigurationError
from consolenav.query import execute_query, is_request_error, result_to_dict
from consolenav.resolvers import QueryContext, build_schema

from consolenav_cli.utils import handle_error, load, print_json


def query(
    ctx: typer.Context,
    document: Annotated[str, typer.Argument(metavar="QUERY", help="GraphQL query document")],
    account: Annotated[
        Path | None,
        typer.Option("--account", "-a", help="YAML/JSON account record to answer account fields from"),
    ] = None,
    login: Annotated[
        str | None,
        typer.Option("--login", help="Query the account service as this login"),
    ] = None,
    variables: Annotated[str | None, typer.Option("--variables", help="Query variables as a JSON object")] = None,
    operation_name: Annotated[str | None, typer.Option("--operation", help="Operation to run")] = None,
) -> None:
    """Execute a GraphQL query and print the JSON response."""
    settings, navigation = load(ctx)

    parsed_variables = None
    if variables:
        try:
            parsed_variables = json.loads(variables)
        except json.JSONDecodeError as e:
            handle_error(ctx, ValueError(f"--variables is not valid JSON: {e}"))
        if not isinstance(parsed_variables, dict):
            handle_error(ctx, ValueError("--variables must be a JSON object"))

    identity: Identity | None = None
    fetcher: AccountFetcher
    try:
        if account is not None:
            record = read_config_file(account)
            fetcher = StaticAccountFetcher(record)
            identity = Identity(login=str(record.get("login") or "local"))
        else:
            fetcher = CloudApiClient(settings.cloudapi.url, timeout=settings.cloudapi.timeout)
            name = login or settings.auth.dev_login
            if name:
                identity = Identity(login=name, token=settings.auth.dev_token)
        schema = build_schema()
    except ConfigurationError as e:
        handle_error(ctx, e)

    context = QueryContext(catalog=Catalog(navigation), accounts=AccountProvider(fetcher), identity=identity)
    result = asyncio.run(execute_query(schema, document, context, parsed_variables, operation_name))
    print_json(result_to_dict(result))
    if is_request_error(result):
        raise typer.Exit(1)
