"""Turn a free-text model reply into a :class:`ModerationResult`.

The model is asked for a bare JSON object but nothing guarantees it.  The
parser takes the span from the first ``{`` to a ``}`` that closes the text,
decodes it and coerces each field.  Anything that does not decode to an
object yields :data:`SAFE_DEFAULT`: no violation, with a fixed diagnostic in
``reasoning``.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from banwatch.moderation.models import MAX_MATCHED_TERMS, ModerationResult

logger = logging.getLogger(__name__)

SAFE_DEFAULT_REASONING = "模型未返回有效 JSON，已安全降级为未命中。"

SAFE_DEFAULT = ModerationResult(
    has_violation=False,
    matched_terms=(),
    reasoning=SAFE_DEFAULT_REASONING,
)

# Greedy: first "{" up to the "}" that ends the reply.
_JSON_OBJECT_RE = re.compile(r"\{.*\}(?=\s*\Z)", re.DOTALL)


def extract_json_text(content: str) -> str:
    """Return the embedded JSON object text, or *content* itself if none."""
    match = _JSON_OBJECT_RE.search(content)
    return match.group(0) if match else content


def _coerce_terms(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    terms: list[str] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (str, int, float)):
            continue
        term = str(item).strip()
        if term and term not in terms:
            terms.append(term)
        if len(terms) >= MAX_MATCHED_TERMS:
            break
    return tuple(terms)


def coerce_result(parsed: dict[str, Any]) -> ModerationResult:
    """Build a result from a decoded object, tolerating wrong field types."""
    reasoning = parsed.get("reasoning")
    return ModerationResult(
        has_violation=bool(parsed.get("hasViolation")),
        matched_terms=_coerce_terms(parsed.get("matchedTerms")),
        reasoning=reasoning if isinstance(reasoning, str) else "",
    )


def parse_reply(content: str) -> ModerationResult:
    """Parse the model's reply; never raises."""
    candidate = extract_json_text(content or "")
    try:
        parsed = json.loads(candidate)
    except ValueError:
        logger.warning("Model reply is not valid JSON; falling back to safe default")
        return SAFE_DEFAULT

    if not isinstance(parsed, dict):
        logger.warning("Model reply decoded to %s, not an object; falling back to safe default",
                       type(parsed).__name__)
        return SAFE_DEFAULT

    return coerce_result(parsed)
