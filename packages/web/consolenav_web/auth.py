"""Auth boundary: identity from the SSO proxy's forwarded headers.

Authentication itself happens upstream. This module only reads the identity
the SSO layer forwards, falls back to the configured dev login, and builds the
challenge sent when a deployment requires a session and none is present.
"""

from __future__ import annotations

import logging
from urllib.parse import urlencode

from consolenav.account import Identity
from consolenav.settings import AuthSettings
from fastapi import Request
from fastapi.responses import JSONResponse, RedirectResponse, Response

log = logging.getLogger(__name__)


class AuthenticationRequired(Exception):
    """No identity on a request to an endpoint that requires one."""


def get_identity(request: Request, auth: AuthSettings) -> Identity | None:
    login = request.headers.get(auth.identity_header)
    if login:
        return Identity(login=login, token=request.headers.get(auth.token_header))
    if auth.dev_login:
        return Identity(login=auth.dev_login, token=auth.dev_token)
    return None


async def authenticate(request: Request) -> Identity | None:
    """FastAPI dependency: the request's identity, or a challenge when required."""
    auth: AuthSettings = request.app.state.settings.auth
    identity = get_identity(request, auth)
    if identity is None and auth.required:
        raise AuthenticationRequired()
    return identity


def challenge(request: Request, auth: AuthSettings) -> Response:
    """Redirect to the SSO login when one is configured, else 401."""
    if auth.sso_url:
        sep = "&" if "?" in auth.sso_url else "?"
        location = f"{auth.sso_url}{sep}{urlencode({'returnto': str(request.url)})}"
        log.debug("Redirecting unauthenticated request for %s to login", request.url.path)
        return RedirectResponse(location, status_code=302)
    return JSONResponse(
        status_code=401,
        content={"errors": [{"message": "Authentication required", "extensions": {"code": "UNAUTHENTICATED"}}]},
        headers={"WWW-Authenticate": "Bearer"},
    )
