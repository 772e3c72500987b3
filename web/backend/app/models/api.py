"""Pydantic models for API request/response serialization.

``ModerationRequest`` is the single validation point for inbound bodies and
is shared by the standalone app and the edge handler.
"""

from __future__ import annotations

from typing import Annotated, Any, Iterable

from pydantic import BaseModel, Field, ValidationError, field_validator

from banwatch.errors import RequestValidationFailed


# ---------------------------------------------------------------------------
# Moderation models
# ---------------------------------------------------------------------------


class ModerationRequest(BaseModel):
    """Body of ``POST /moderation/check``."""

    text: str
    # Absent means no terms; an explicit null is rejected.
    customBanned: list[Annotated[str, Field(min_length=1)]] = Field(default=None)

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("text must not be empty")
        return v


class ModerationResultResponse(BaseModel):
    """Mirrors banwatch.moderation.models.ModerationResult."""

    hasViolation: bool
    matchedTerms: list[str] = Field(default_factory=list)
    reasoning: str = ""


# ---------------------------------------------------------------------------
# Error / meta models
# ---------------------------------------------------------------------------


class ValidationIssue(BaseModel):
    path: list[Any] = Field(default_factory=list)
    message: str


class ValidationErrorResponse(BaseModel):
    message: str
    issues: list[ValidationIssue] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str
    timestamp: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def issues_from_errors(errors: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Flatten pydantic/FastAPI error dicts into ``{path, message}`` issues."""
    issues = []
    for err in errors:
        loc = list(err.get("loc", ()))
        if loc and loc[0] == "body":
            loc = loc[1:]
        message = str(err.get("msg", ""))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        issues.append({"path": loc, "message": message})
    return issues


def parse_moderation_request(payload: Any) -> ModerationRequest:
    """Validate a decoded JSON body or raise :class:`RequestValidationFailed`."""
    try:
        return ModerationRequest.model_validate(payload)
    except ValidationError as exc:
        raise RequestValidationFailed(issues_from_errors(exc.errors())) from exc
