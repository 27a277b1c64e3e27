"""
Generic HTTP middleware.

``apply_middleware`` installs, from outermost to innermost:

* security headers added to every response,
* CORS handling (FastAPI's ``CORSMiddleware``),
* a rate limit placeholder which currently lets every request through,
* request logging at DEBUG level,
* in development only, pretty printing of JSON bodies for requests
  carrying a ``pretty`` query parameter (``/health?pretty``),
* the error envelope for unexpected exceptions.

The error envelope sits innermost so that 500 responses still receive
the CORS and security headers.
"""

import json
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send

from .config import Settings
from .errors import unhandled_error_response

access_logger = logging.getLogger("users_api.access")

SECURITY_HEADERS = {
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization", "X-Requested-With"]


class ErrorEnvelopeMiddleware(BaseHTTPMiddleware):
    """Render exceptions escaping the routes as a 500 envelope."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return unhandled_error_response(request, exc)


class PrettyJSONMiddleware(BaseHTTPMiddleware):
    """Indent JSON bodies when the request asks for ``?pretty``."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        content_type = response.headers.get("content-type", "")
        if "pretty" not in request.query_params or not content_type.startswith("application/json"):
            return response

        body = b"".join([chunk async for chunk in response.body_iterator])
        pretty = json.dumps(json.loads(body), ensure_ascii=False, indent=2).encode("utf-8")
        headers = {
            name: value
            for name, value in response.headers.items()
            if name.lower() != "content-length"
        }
        return Response(
            content=pretty,
            status_code=response.status_code,
            headers=headers,
            media_type=content_type,
        )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add ``SECURITY_HEADERS`` to responses that do not set them already."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class RateLimitMiddleware:
    """Placeholder for request rate limiting.

    The configured window and maximum are kept so that a real limiter
    can be dropped in later; for now every request is passed through.
    """

    def __init__(self, app: ASGIApp, window_ms: int, max_requests: int) -> None:
        self.app = app
        self.window_ms = window_ms
        self.max_requests = max_requests

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.app(scope, receive, send)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        access_logger.debug(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


def apply_middleware(app: FastAPI, settings: Settings) -> None:
    """Apply all middleware to the app.

    Starlette wraps the app in reverse order of registration, so the
    innermost middleware is added first.
    """
    app.add_middleware(ErrorEnvelopeMiddleware)
    if settings.is_development:
        app.add_middleware(PrettyJSONMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        window_ms=settings.rate_limit_window,
        max_requests=settings.rate_limit_max,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        allow_credentials=True,
    )
    app.add_middleware(SecurityHeadersMiddleware)
