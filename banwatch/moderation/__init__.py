from banwatch.moderation.checker import BannedContentChecker, acheck_for_banned, check_for_banned
from banwatch.moderation.models import ModerationResult
from banwatch.moderation.parser import SAFE_DEFAULT, SAFE_DEFAULT_REASONING, parse_reply

__all__ = [
    "BannedContentChecker",
    "ModerationResult",
    "SAFE_DEFAULT",
    "SAFE_DEFAULT_REASONING",
    "acheck_for_banned",
    "check_for_banned",
    "parse_reply",
]
