"""FastAPI application for the banwatch moderation service.

Standalone deployment shell: exposes ``POST /moderation/check`` and
``GET /health`` and maps library errors to HTTP status codes.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from dotenv import find_dotenv, load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from banwatch import __version__
from banwatch.config import Settings
from banwatch.errors import ModerationError, RequestValidationFailed
from banwatch.moderation.checker import BannedContentChecker
from web.backend.app.models.api import HealthResponse, issues_from_errors
from web.backend.app.routers import moderation

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    failed = RequestValidationFailed(issues_from_errors(exc.errors()))
    return JSONResponse(status_code=400, content=failed.to_dict())


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    # Unknown routes and wrong methods both answer 404.
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"message": "Not Found"})
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})


async def _moderation_error_handler(request: Request, exc: ModerationError):
    logger.error("Moderation check failed: %s", exc)
    return JSONResponse(status_code=500, content={"message": str(exc)})


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def create_app(settings: Optional[Settings] = None, transport: Any = None) -> FastAPI:
    """Build the app.  *transport* is passed through to httpx (tests only)."""
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="banwatch API",
        description="Classifies user-submitted text as containing banned content.",
        version=__version__,
    )
    app.state.settings = settings
    app.state.checker = BannedContentChecker(settings=settings, transport=transport)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(ModerationError, _moderation_error_handler)

    app.include_router(moderation.router)

    @app.get("/health", tags=["meta"], response_model=HealthResponse)
    async def health_check():
        """Liveness probe."""
        return HealthResponse(
            status="ok",
            service=settings.service_name,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    return app


load_dotenv(find_dotenv(usecwd=True))
app = create_app()
