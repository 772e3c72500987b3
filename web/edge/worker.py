"""Edge-function entry point for the banwatch moderation service.

``fetch`` mirrors a Workers-style fetch handler: it receives one request plus
the deployment's environment bindings and returns one response.  Settings are
read from *env* on every request, never from module state.
``create_worker_app`` wraps it as an ASGI app for platforms that host ASGI.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from banwatch.config import Settings
from banwatch.errors import ModerationError, RequestValidationFailed
from banwatch.moderation.checker import BannedContentChecker
from web.backend.app.models.api import parse_moderation_request

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _json(content: Any, status_code: int) -> JSONResponse:
    return JSONResponse(content, status_code=status_code, headers=CORS_HEADERS)


def _preflight() -> Response:
    return Response(status_code=204, headers=CORS_HEADERS)


async def _handle_check(request: Request, settings: Settings, transport: Any) -> Response:
    try:
        payload = await request.json()
    except ValueError:
        failed = RequestValidationFailed([{"path": [], "message": "body must be valid JSON"}])
        return _json(failed.to_dict(), 400)

    try:
        req = parse_moderation_request(payload)
    except RequestValidationFailed as exc:
        return _json(exc.to_dict(), 400)

    checker = BannedContentChecker(settings=settings, transport=transport)
    try:
        result = await checker.acheck(req.text, req.customBanned)
    except ModerationError as exc:
        logger.error("Moderation check failed: %s", exc)
        return _json({"message": str(exc)}, 500)
    except Exception as exc:
        logger.exception("Unexpected error during moderation check")
        return _json({"message": str(exc)}, 500)

    return _json(result.to_dict(), 200)


def _health(settings: Settings) -> Response:
    return _json(
        {
            "status": "ok",
            "service": settings.service_name,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
        200,
    )


async def fetch(request: Request, env: Mapping[str, str], transport: Any = None) -> Response:
    """Dispatch one request on method and path."""
    method = request.method.upper()
    path = request.url.path

    if method == "OPTIONS":
        return _preflight()

    settings = Settings.from_env(env)

    if method == "POST" and path == "/moderation/check":
        return await _handle_check(request, settings, transport)

    if method == "GET" and path == "/health":
        return _health(settings)

    return _json({"message": "Not Found"}, 404)


def create_worker_app(
    env: Optional[Mapping[str, str]] = None, transport: Any = None
) -> Starlette:
    """Wrap :func:`fetch` as an ASGI app; *env* defaults to ``os.environ``."""
    bindings = os.environ if env is None else env

    async def endpoint(request: Request) -> Response:
        return await fetch(request, bindings, transport)

    return Starlette(routes=[Route("/{path:path}", endpoint, methods=_ALL_METHODS)])


app = create_worker_app()
