"""Chat-completion client for banwatch.

Talks to an OpenAI-compatible ``/chat/completions`` endpoint (DeepSeek by
default) over plain REST with httpx.  Each call makes exactly one request;
there are no retries.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from banwatch.config import Settings
from banwatch.errors import ConfigurationError, TransportError, UpstreamError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Fixed request parameters
# ---------------------------------------------------------------------------

TEMPERATURE = 0
MAX_TOKENS = 300
RESPONSE_FORMAT = {"type": "json_object"}

_NOT_CONFIGURED_MSG = "DEEPSEEK_API_KEY is not configured. Set it in the environment or in .env."
_INVALID_URL_MSG = "DEEPSEEK_BASE_URL is not a valid URL"


# ---------------------------------------------------------------------------
# Response dataclass
# ---------------------------------------------------------------------------


@dataclass
class CompletionResponse:
    """Structured response from a chat-completion call."""

    content: str
    model: str = ""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    latency_ms: int = 0


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class ChatCompletionClient:
    """Thin wrapper around the chat-completion REST endpoint.

    Parameters
    ----------
    settings : Settings | None
        Endpoint, credential and model.  Read from the environment when
        *None*.
    transport : httpx.BaseTransport | httpx.AsyncBaseTransport | None
        Optional transport handed to the underlying httpx client; tests pass
        an :class:`httpx.MockTransport` here.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Any = None,
    ) -> None:
        self.settings = settings or Settings.from_env()
        self._transport = transport

    # -- properties ----------------------------------------------------------

    @property
    def configured(self) -> bool:
        """Return *True* if an API key is available."""
        return self.settings.configured

    @property
    def url(self) -> str:
        return f"{self.settings.base_url}/chat/completions"

    # -- request helpers -----------------------------------------------------

    def _require_configured(self) -> None:
        if not self.configured:
            raise ConfigurationError(_NOT_CONFIGURED_MSG)

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.api_key}",
        }

    def _payload(self, messages: list[dict[str, str]]) -> dict[str, Any]:
        return {
            "model": self.settings.model_id,
            "messages": messages,
            "temperature": TEMPERATURE,
            "response_format": RESPONSE_FORMAT,
            "max_tokens": MAX_TOKENS,
        }

    def _build_response(self, resp: httpx.Response, started: float) -> CompletionResponse:
        latency_ms = int((time.monotonic() - started) * 1000)

        if resp.is_error:
            detail = resp.text
            logger.warning(
                "Chat completion failed with HTTP %s after %dms", resp.status_code, latency_ms
            )
            raise UpstreamError(
                f"Chat completion request failed ({resp.status_code}): {detail}",
                status_code=resp.status_code,
                detail=detail,
            )

        try:
            data = resp.json()
        except ValueError:
            raise UpstreamError(
                f"Chat completion returned a non-JSON body: {resp.text[:200]}",
                status_code=resp.status_code,
                detail=resp.text,
            )

        content = _extract_content(data)
        usage = data.get("usage") if isinstance(data, dict) else None
        usage = usage if isinstance(usage, dict) else {}

        response = CompletionResponse(
            content=content,
            model=(data.get("model") if isinstance(data, dict) else None) or self.settings.model_id,
            prompt_tokens=_token_count(usage.get("prompt_tokens")),
            completion_tokens=_token_count(usage.get("completion_tokens")),
            total_tokens=_token_count(usage.get("total_tokens")),
            latency_ms=latency_ms,
        )
        logger.debug(
            "Chat completion ok: model=%s latency=%dms tokens=%d",
            response.model,
            response.latency_ms,
            response.total_tokens,
        )
        return response

    # -- synchronous completion ----------------------------------------------

    def complete(self, messages: list[dict[str, str]]) -> CompletionResponse:
        """Send one completion request and return a :class:`CompletionResponse`.

        Raises :class:`ConfigurationError` before any I/O when no API key is
        set, :class:`UpstreamError` on a non-2xx reply and
        :class:`TransportError` when the endpoint cannot be reached.
        """
        self._require_configured()

        start = time.monotonic()
        try:
            with httpx.Client(timeout=self.settings.timeout, transport=self._transport) as client:
                resp = client.post(self.url, headers=self._headers(), json=self._payload(messages))
        except httpx.InvalidURL as exc:
            raise ConfigurationError(f"{_INVALID_URL_MSG}: {exc}") from exc
        except httpx.RequestError as exc:
            raise TransportError(f"Failed to reach chat completion endpoint: {exc}") from exc

        return self._build_response(resp, start)

    # -- async completion ----------------------------------------------------

    async def acomplete(self, messages: list[dict[str, str]]) -> CompletionResponse:
        """Async counterpart of :meth:`complete`."""
        self._require_configured()

        start = time.monotonic()
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.timeout, transport=self._transport
            ) as client:
                resp = await client.post(
                    self.url, headers=self._headers(), json=self._payload(messages)
                )
        except httpx.InvalidURL as exc:
            raise ConfigurationError(f"{_INVALID_URL_MSG}: {exc}") from exc
        except httpx.RequestError as exc:
            raise TransportError(f"Failed to reach chat completion endpoint: {exc}") from exc

        return self._build_response(resp, start)


def _extract_content(data: Any) -> str:
    """Return ``choices[0].message.content`` or ``""`` when absent."""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0] if isinstance(choices[0], dict) else {}
    message = first.get("message")
    content = message.get("content") if isinstance(message, dict) else None
    return content if isinstance(content, str) else ""


def _token_count(value: Any) -> int:
    """Usage counts are informational; anything non-numeric counts as 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    try:
        return int(value)
    except (ValueError, OverflowError):
        return 0
