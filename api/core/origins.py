"""
Origin allow-list enforcement.

Starlette's CORSMiddleware only decorates responses; a disallowed browser
origin still reaches the route. This gate turns such requests away before
routing, as plain text rather than a JSON error body.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from starlette.datastructures import Headers
from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)


def rejection_message(origin: str) -> str:
    return (
        "The CORS policy for this site does not allow access from the specified "
        f"Origin: {origin}"
    )


class OriginGateMiddleware:
    def __init__(self, app: ASGIApp, allowed_origins: Iterable[str]) -> None:
        self.app = app
        self.allowed_origins = frozenset(allowed_origins)

    def is_allowed(self, origin: str | None) -> bool:
        # Non-browser callers (curl, server-to-server) send no Origin.
        if not origin:
            return True
        return origin in self.allowed_origins

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        origin = Headers(scope=scope).get("origin")
        if self.is_allowed(origin):
            await self.app(scope, receive, send)
            return

        logger.warning("origin_rejected origin=%s path=%s", origin, scope.get("path"))
        response = PlainTextResponse(rejection_message(origin or ""), status_code=403)
        await response(scope, receive, send)
