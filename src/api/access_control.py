"""
Origin access control and CORS response headers.

The origin check runs as middleware, ahead of routing, so requests from
disallowed origins never reach method dispatch.
"""

import logging
from collections.abc import Callable, Iterable

from fastapi import Request, status
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ("PUT", "HEAD", "OPTIONS")

ACCESS_CONTROL_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": ", ".join(ALLOWED_METHODS),
    "Access-Control-Allow-Headers": "*",
}


def has_allowed_origin(origin: str | None, allowed_origins: Iterable[str] | None) -> bool:
    """
    Check a request Origin against the allow-list.

    No allow-list means any origin. Requests without an Origin header
    (non-browser clients) are allowed.
    """
    if allowed_origins is None or origin is None:
        return True
    return origin.rstrip("/") in {o.rstrip("/") for o in allowed_origins}


def forbidden_origin_response() -> PlainTextResponse:
    return PlainTextResponse(
        "Forbidden origin.",
        status_code=status.HTTP_403_FORBIDDEN,
        headers=ACCESS_CONTROL_HEADERS,
    )


def unsupported_method_response(api_name: str, method: str) -> PlainTextResponse:
    """Response for HTTP methods an endpoint does not implement."""
    return PlainTextResponse(
        f"The '{api_name}' API endpoint does not support the '{method}' method.",
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        headers={**ACCESS_CONTROL_HEADERS, "Allow": ", ".join(ALLOWED_METHODS)},
    )


class OriginAccessControlMiddleware(BaseHTTPMiddleware):
    """
    Reject requests whose Origin header is not on the allow-list.

    Pass either a fixed ``allowed_origins`` list or an ``origins_provider``
    called on every request (e.g. reading the current settings).
    """

    def __init__(
        self,
        app: ASGIApp,
        allowed_origins: Iterable[str] | None = None,
        origins_provider: Callable[[], Iterable[str] | None] | None = None,
    ) -> None:
        super().__init__(app)
        self.allowed_origins = list(allowed_origins) if allowed_origins is not None else None
        self.origins_provider = origins_provider

    def current_allowed_origins(self) -> Iterable[str] | None:
        if self.origins_provider is not None:
            return self.origins_provider()
        return self.allowed_origins

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        origin = request.headers.get("origin")
        if not has_allowed_origin(origin, self.current_allowed_origins()):
            logger.warning("Rejected request from origin %s", origin)
            return forbidden_origin_response()
        return await call_next(request)
