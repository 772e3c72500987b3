"""Banned-content check pipeline: prompt, one model call, parse.

Configuration, upstream and transport failures propagate as
:class:`~banwatch.errors.ModerationError` subclasses.  An unparseable reply
does not; it becomes the parser's safe default.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from banwatch.config import Settings
from banwatch.llm.client import ChatCompletionClient, CompletionResponse
from banwatch.llm.prompts import build_messages
from banwatch.moderation.models import ModerationResult
from banwatch.moderation.parser import parse_reply

logger = logging.getLogger(__name__)


class BannedContentChecker:
    """Runs the check against a :class:`ChatCompletionClient`."""

    def __init__(
        self,
        client: Optional[ChatCompletionClient] = None,
        settings: Optional[Settings] = None,
        transport: Any = None,
    ) -> None:
        self.client = client or ChatCompletionClient(settings=settings, transport=transport)

    def _finish(self, text: str, response: CompletionResponse) -> ModerationResult:
        result = parse_reply(response.content)
        logger.info(
            "Checked %d chars: violation=%s terms=%d latency=%dms",
            len(text),
            result.has_violation,
            len(result.matched_terms),
            response.latency_ms,
        )
        return result

    def check(self, text: str, custom_banned: Optional[Sequence[str]] = None) -> ModerationResult:
        """Classify *text*; *custom_banned* terms are forwarded to the model as hints."""
        response = self.client.complete(build_messages(text, custom_banned))
        return self._finish(text, response)

    async def acheck(
        self, text: str, custom_banned: Optional[Sequence[str]] = None
    ) -> ModerationResult:
        """Async counterpart of :meth:`check`."""
        response = await self.client.acomplete(build_messages(text, custom_banned))
        return self._finish(text, response)


def check_for_banned(
    text: str,
    custom_banned: Optional[Sequence[str]] = None,
    settings: Optional[Settings] = None,
) -> ModerationResult:
    """One-shot check using settings from the environment unless given."""
    return BannedContentChecker(settings=settings).check(text, custom_banned)


async def acheck_for_banned(
    text: str,
    custom_banned: Optional[Sequence[str]] = None,
    settings: Optional[Settings] = None,
) -> ModerationResult:
    """Async counterpart of :func:`check_for_banned`."""
    return await BannedContentChecker(settings=settings).acheck(text, custom_banned)
