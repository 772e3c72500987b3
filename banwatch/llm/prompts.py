"""Prompt templates for the banned-content check.

The system prompt is fixed; only the user message varies per request.  It is
sent together with ``temperature=0`` so identical input yields identical
requests.
"""

from __future__ import annotations

import json
from typing import Optional, Sequence

# ---------------------------------------------------------------------------
# System prompt
# ---------------------------------------------------------------------------

SYSTEM_PROMPT = """\
你将收到一个待审核文本和一组可选违禁词。严格按照以下要求输出：
- 仅输出一个 JSON 对象，不要任何额外文本或解释
- 结构：{ hasViolation: boolean, matchedTerms: string[], reasoning: string }
- 检测范围：辱骂、脏话、歧视、色情、暴力及其他违禁内容，以及 customBanned 中给出的词条
- 规则：
  1) hasViolation 为 true 当文本直接或变体匹配到违禁，或语义上包含违禁含义
  2) matchedTerms 为命中的违禁词或其变体（去重，最多 10 个）
  3) reasoning 用简洁中文说明关键依据，避免复述原文"""


# ---------------------------------------------------------------------------
# Message assembly
# ---------------------------------------------------------------------------


def build_user_prompt(text: str, custom_banned: Optional[Sequence[str]] = None) -> str:
    """Serialize the request payload the model is asked to judge."""
    payload = {"text": text, "customBanned": list(custom_banned or [])}
    return json.dumps(payload, ensure_ascii=False)


def build_messages(
    text: str, custom_banned: Optional[Sequence[str]] = None
) -> list[dict[str, str]]:
    """Return the system + user message pair for one check."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_user_prompt(text, custom_banned)},
    ]
