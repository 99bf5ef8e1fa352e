"""Query execution and response serialization."""

from __future__ import annotations

import logging
from typing import Any

import graphql
from graphql import ExecutionResult, GraphQLError, GraphQLSchema

from consolenav.errors import NavigationError
from consolenav.resolvers import QueryContext

log = logging.getLogger(__name__)

# Code for errors raised by the GraphQL layer itself (syntax, validation)
INVALID_QUERY = "GRAPHQL_VALIDATION_FAILED"
INTERNAL_ERROR = "INTERNAL_SERVER_ERROR"


async def execute_query(
    schema: GraphQLSchema,
    query: str,
    context: QueryContext,
    variables: dict[str, Any] | None = None,
    operation_name: str | None = None,
) -> ExecutionResult:
    return await graphql.graphql(
        schema,
        query,
        context_value=context,
        variable_values=variables,
        operation_name=operation_name,
    )


def is_request_error(result: ExecutionResult) -> bool:
    """True when the query never executed (parse or validation failure)."""
    return result.data is None and bool(result.errors)


def format_error(error: GraphQLError) -> dict[str, Any]:
    """Serialize a GraphQL error, tagging it with an ``extensions.code``."""
    formatted = dict(error.formatted)
    original = error.original_error
    if original is None:
        code = INVALID_QUERY
    elif isinstance(original, NavigationError):
        code = original.code
    else:
        log.error("Unhandled error resolving %s", ".".join(str(p) for p in error.path or []), exc_info=original)
        code = INTERNAL_ERROR
        formatted["message"] = "Internal server error"
    formatted["extensions"] = {**(formatted.get("extensions") or {}), "code": code}
    return formatted


def result_to_dict(result: ExecutionResult) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    if not is_request_error(result):
        payload["data"] = result.data
    if result.errors:
        payload["errors"] = [format_error(e) for e in result.errors]
    return payload
