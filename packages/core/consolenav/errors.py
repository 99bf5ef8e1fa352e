"""Navigation errors.

Domain exceptions raised by the resolution engine. They carry no transport
semantics; the web layer and the CLI decide how each one is surfaced.
"""

from __future__ import annotations


class NavigationError(Exception):
    """Base exception for navigation operations."""

    code = "INTERNAL_SERVER_ERROR"


class ConfigurationError(NavigationError):
    """Raised at startup when the navigation configuration is invalid."""

    code = "BAD_CONFIGURATION"


class NotFoundError(NavigationError):
    """Raised when no service has the requested slug."""

    code = "NOT_FOUND"

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Unknown service: {slug}")


class MissingContextError(NavigationError):
    """Raised when an account-scoped URL is resolved without an account id."""

    code = "MISSING_CONTEXT"


class UnauthenticatedError(NavigationError):
    """Raised when an account-scoped field is requested without an identity."""

    code = "UNAUTHENTICATED"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class UpstreamError(NavigationError):
    """Raised when the remote account service cannot provide the account."""

    code = "UPSTREAM_ERROR"
