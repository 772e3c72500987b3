"""banwatch LLM integration module.

Provides the chat-completion client and the fixed prompt used for
banned-content checks.
"""

from banwatch.llm.client import ChatCompletionClient, CompletionResponse
from banwatch.llm.prompts import SYSTEM_PROMPT, build_messages

__all__ = [
    "ChatCompletionClient",
    "CompletionResponse",
    "SYSTEM_PROMPT",
    "build_messages",
]
