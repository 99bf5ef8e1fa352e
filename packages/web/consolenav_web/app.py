"""FastAPI backend serving the navigation catalog over GraphQL."""

from __future__ import annotations

import json
import logging
import multiprocessing
import os
from typing import Any

from consolenav import __version__
from consolenav.account import AccountProvider, Identity
from consolenav.catalog import Catalog
from consolenav.cloudapi import AccountFetcher, CloudApiClient
from consolenav.config import NavigationConfig
from consolenav.logging_config import setup_logging
from consolenav.query import execute_query, is_request_error, result_to_dict
from consolenav.resolvers import QueryContext, build_schema
from consolenav.settings import CONFIG_ENV, Settings, load_config
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from consolenav_web.auth import AuthenticationRequired, authenticate, challenge

log = logging.getLogger(__name__)

router = APIRouter()


# --- Request models ---


class GraphQLRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(..., min_length=1)
    variables: dict[str, Any] | None = None
    operation_name: str | None = Field(default=None, alias="operationName")


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"errors": [{"message": message, "extensions": {"code": "BAD_REQUEST"}}]},
    )


async def _execute(
    request: Request,
    identity: Identity | None,
    query: str,
    variables: dict[str, Any] | None,
    operation_name: str | None,
) -> JSONResponse:
    state = request.app.state
    context = QueryContext(catalog=state.catalog, accounts=state.accounts, identity=identity)
    result = await execute_query(state.schema, query, context, variables, operation_name)
    status_code = 400 if is_request_error(result) else 200
    return JSONResponse(status_code=status_code, content=result_to_dict(result))


# --- Endpoints ---


@router.get("/api/health")
def health(request: Request):
    catalog: Catalog = request.app.state.catalog
    return {
        "status": "ok",
        "datacenter": catalog.current_datacenter().name,
        "services": len(catalog.config.services()),
    }


@router.post("/graphql")
async def graphql_post(req: GraphQLRequest, request: Request, identity: Identity | None = Depends(authenticate)):
    return await _execute(request, identity, req.query, req.variables, req.operation_name)


@router.get("/graphql")
async def graphql_get(
    request: Request,
    query: str,
    variables: str | None = None,
    operationName: str | None = None,  # noqa: N803
    identity: Identity | None = Depends(authenticate),
):
    parsed: dict[str, Any] | None = None
    if variables:
        try:
            parsed = json.loads(variables)
        except json.JSONDecodeError:
            return _bad_request("variables must be a JSON object")
        if not isinstance(parsed, dict):
            return _bad_request("variables must be a JSON object")
    return await _execute(request, identity, query, parsed, operationName)


# --- App factory ---


def create_app(
    settings: Settings | None = None,
    navigation: NavigationConfig | None = None,
    fetcher: AccountFetcher | None = None,
) -> FastAPI:
    """Build the app for one deployment.

    Missing settings or navigation are loaded from the file named by
    ``CONSOLENAV_CONFIG``. Raises ConfigurationError on invalid configuration
    or when the schema and resolvers disagree.
    """
    if settings is None or navigation is None:
        loaded_settings, loaded_navigation = load_config()
        settings = settings or loaded_settings
        navigation = navigation or loaded_navigation

    setup_logging(settings.log_level)

    catalog = Catalog(navigation)
    schema = build_schema()
    if fetcher is None:
        fetcher = CloudApiClient(settings.cloudapi.url, timeout=settings.cloudapi.timeout)

    app = FastAPI(title="consolenav", version=__version__, description="Navigation catalog for the cloud console")
    app.state.settings = settings
    app.state.catalog = catalog
    app.state.schema = schema
    app.state.accounts = AccountProvider(fetcher)

    @app.exception_handler(AuthenticationRequired)
    async def _auth_required(request: Request, exc: AuthenticationRequired):
        return challenge(request, request.app.state.settings.auth)

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(request: Request, exc: RequestValidationError):
        messages = [f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in exc.errors()]
        return _bad_request("; ".join(messages) or "Invalid request")

    app.include_router(router)
    log.info("consolenav serving datacenter %s at %s", navigation.dc_name, navigation.base_url)
    return app


def serve(host: str = "127.0.0.1", port: int = 8000, config: str | None = None, workers: int | None = None):
    """Start the consolenav web server."""
    import uvicorn

    if config:
        os.environ[CONFIG_ENV] = str(config)
    workers = workers or min(multiprocessing.cpu_count(), 4)
    uvicorn.run("consolenav_web.app:create_app", factory=True, host=host, port=port, workers=workers)
