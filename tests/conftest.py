"""Shared fakes for the chat-completion endpoint."""

import json

import httpx
import pytest

from banwatch.config import Settings

TEST_SETTINGS = Settings(
    api_key="test-key",
    base_url="https://llm.test",
    model_id="test-model",
    service_name="banwatch-test",
)


class FakeCompletionEndpoint:
    """Records requests and answers like ``/chat/completions``."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._status = 200
        self._body: str = ""
        self._error: Exception | None = None
        self.reply('{"hasViolation":false,"matchedTerms":[],"reasoning":"ok"}')

    def reply(self, content: str, usage: dict | None = None) -> None:
        self._status = 200
        self._error = None
        self._body = json.dumps(
            {
                "model": "test-model",
                "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
                "usage": usage or {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
            }
        )

    def fail(self, status: int, body: str) -> None:
        self._status = status
        self._body = body
        self._error = None

    def raw(self, body: str) -> None:
        self._status = 200
        self._body = body
        self._error = None

    def unreachable(self) -> None:
        self._error = httpx.ConnectError("connection refused")

    def crash(self) -> None:
        self._error = RuntimeError("handler crashed")

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        return httpx.Response(self._status, text=self._body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def endpoint() -> FakeCompletionEndpoint:
    return FakeCompletionEndpoint()


@pytest.fixture
def settings() -> Settings:
    return TEST_SETTINGS
