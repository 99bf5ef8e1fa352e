"""Query resolvers and their binding onto the GraphQL schema.

Resolvers are listed in an explicit table keyed by type and field name. The
table is checked against the schema at startup so that every ``Query`` and
``Mutation`` field has exactly one resolver and no resolver is orphaned.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import graphql
from graphql import GraphQLObjectType, GraphQLResolveInfo, GraphQLSchema

from consolenav.account import Account, AccountProvider, Identity
from consolenav.catalog import Catalog
from consolenav.errors import ConfigurationError, MissingContextError, NotFoundError

log = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.graphql"

# Root types whose every field must have a resolver
ROOT_TYPES = ("Query", "Mutation")

Resolver = Callable[..., Any]


@dataclass
class QueryContext:
    """Per-request state handed to every resolver.

    The account is fetched at most once per query, however many account
    fields the query selects.
    """

    catalog: Catalog
    accounts: AccountProvider
    identity: Identity | None = None
    _account: asyncio.Future | None = field(default=None, init=False, repr=False)

    async def account(self) -> Account:
        if self._account is None:
            self._account = asyncio.ensure_future(self.accounts.current_account(self.identity))
        return await self._account


async def resolve_account(_root: Any, info: GraphQLResolveInfo) -> dict[str, Any]:
    account = await info.context.account()
    return account.to_dict()


def resolve_account_services(account: dict[str, Any], info: GraphQLResolveInfo) -> list[dict[str, Any]]:
    account_id = account.get("id") if account else None
    if not account_id:
        raise MissingContextError("Account services resolved without an account")
    return [svc.model_dump() for svc in info.context.catalog.list_account_services(account_id)]


def resolve_datacenter(_root: Any, info: GraphQLResolveInfo) -> dict[str, Any]:
    return info.context.catalog.current_datacenter().model_dump()


def resolve_regions(_root: Any, info: GraphQLResolveInfo) -> list[dict[str, Any]]:
    return [region.model_dump() for region in info.context.catalog.list_regions()]


def resolve_categories(_root: Any, info: GraphQLResolveInfo) -> list[dict[str, Any]]:
    return [category.model_dump() for category in info.context.catalog.list_categories()]


def resolve_service(_root: Any, info: GraphQLResolveInfo, slug: str) -> dict[str, Any] | None:
    try:
        return info.context.catalog.find_service(slug).model_dump()
    except NotFoundError:
        log.debug("No service with slug %r", slug)
        return None


RESOLVERS: dict[str, dict[str, Resolver]] = {
    "Query": {
        "account": resolve_account,
        "datacenter": resolve_datacenter,
        "regions": resolve_regions,
        "categories": resolve_categories,
        "service": resolve_service,
    },
    "Account": {
        "services": resolve_account_services,
    },
}


def check_resolvers(schema: GraphQLSchema, resolvers: dict[str, dict[str, Resolver]]) -> None:
    """Raise ConfigurationError unless schema fields and resolvers match."""
    problems: list[str] = []

    for type_name in ROOT_TYPES:
        gql_type = schema.get_type(type_name)
        if gql_type is None:
            continue
        registered = resolvers.get(type_name, {})
        for field_name in gql_type.fields:
            if field_name not in registered:
                problems.append(f"{type_name}.{field_name} has no resolver")

    for type_name, fields in resolvers.items():
        gql_type = schema.get_type(type_name)
        if not isinstance(gql_type, GraphQLObjectType):
            problems.append(f"resolvers registered for unknown type {type_name}")
            continue
        for field_name in fields:
            if field_name not in gql_type.fields:
                problems.append(f"resolver registered for unknown field {type_name}.{field_name}")

    if problems:
        raise ConfigurationError("Schema and resolvers disagree: " + "; ".join(problems))


def build_schema(
    sdl: str | None = None,
    resolvers: dict[str, dict[str, Resolver]] | None = None,
) -> GraphQLSchema:
    """Build the executable schema: parse the SDL, check and bind the resolvers."""
    if sdl is None:
        sdl = SCHEMA_PATH.read_text()
    if resolvers is None:
        resolvers = RESOLVERS

    try:
        schema = graphql.build_schema(sdl)
    except (graphql.GraphQLError, TypeError) as e:
        raise ConfigurationError(f"Invalid schema: {e}") from e

    check_resolvers(schema, resolvers)
    for type_name, fields in resolvers.items():
        gql_type = schema.get_type(type_name)
        for field_name, fn in fields.items():
            gql_type.fields[field_name].resolve = fn
    return schema
