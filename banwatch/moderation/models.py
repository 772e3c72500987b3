"""Data models for the banned-content check."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

MAX_MATCHED_TERMS = 10


@dataclass(frozen=True)
class ModerationResult:
    """Verdict for one checked text."""

    has_violation: bool
    matched_terms: tuple[str, ...] = field(default_factory=tuple)
    reasoning: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the wire shape (camelCase keys)."""
        return {
            "hasViolation": self.has_violation,
            "matchedTerms": list(self.matched_terms),
            "reasoning": self.reasoning,
        }
