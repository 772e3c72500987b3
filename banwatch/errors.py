"""Error types raised by the banwatch pipeline.

Request-level failures derive from :class:`ModerationError` and are mapped to
HTTP 500 by the transport adapters.  Input problems raise
:class:`RequestValidationFailed` (HTTP 400).  A model reply that cannot be
parsed is not an error at all; see :mod:`banwatch.moderation.parser`.
"""

from __future__ import annotations

from typing import Any


class ModerationError(Exception):
    """Base class for failures that prevent a verdict from being produced."""


class ConfigurationError(ModerationError):
    """A required setting (the API key) is missing."""


class UpstreamError(ModerationError):
    """The chat-completion endpoint answered with a non-success reply."""

    def __init__(self, message: str, status_code: int = 0, detail: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class TransportError(ModerationError):
    """The chat-completion endpoint could not be reached."""


class RequestValidationFailed(ValueError):
    """Caller input failed shape or non-emptiness checks."""

    message = "Request validation failed"

    def __init__(self, issues: list[dict[str, Any]]) -> None:
        super().__init__(self.message)
        self.issues = issues

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "issues": self.issues}
