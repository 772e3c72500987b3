"""Moderation router.

``POST /moderation/check`` runs one banned-content check.  Validation and
pipeline errors are turned into responses by the handlers registered in
:mod:`web.backend.app.main`; anything else still answers 500 ``{message}``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from banwatch.errors import ModerationError
from banwatch.moderation.checker import BannedContentChecker
from web.backend.app.models.api import (
    ErrorResponse,
    ModerationRequest,
    ModerationResultResponse,
    ValidationErrorResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["moderation"])


def get_checker(request: Request) -> BannedContentChecker:
    """Return the checker built by ``create_app``."""
    return request.app.state.checker


@router.post(
    "/moderation/check",
    response_model=ModerationResultResponse,
    responses={400: {"model": ValidationErrorResponse}, 500: {"model": ErrorResponse}},
)
async def check_text(
    req: ModerationRequest,
    checker: BannedContentChecker = Depends(get_checker),
):
    """Classify the submitted text as containing banned content or not."""
    try:
        result = await checker.acheck(req.text, req.customBanned)
    except ModerationError:
        raise
    except Exception as exc:
        logger.exception("Unexpected error during moderation check")
        return JSONResponse(status_code=500, content={"message": str(exc)})
    return ModerationResultResponse(**result.to_dict())
