"""Tests for prompt assembly."""

import json

from banwatch.llm.prompts import SYSTEM_PROMPT, build_messages


def test_two_messages_system_then_user():
    messages = build_messages("hello")
    assert [m["role"] for m in messages] == ["system", "user"]
    assert messages[0]["content"] == SYSTEM_PROMPT


def test_user_message_carries_text_and_terms():
    messages = build_messages("你好", ["违禁词A", "敏感词B"])
    payload = json.loads(messages[1]["content"])
    assert payload == {"text": "你好", "customBanned": ["违禁词A", "敏感词B"]}
    assert "你好" in messages[1]["content"]


def test_missing_terms_serialized_as_empty_list():
    payload = json.loads(build_messages("x")[1]["content"])
    assert payload["customBanned"] == []


def test_deterministic():
    assert build_messages("same", ["a"]) == build_messages("same", ["a"])


def test_system_prompt_describes_output_shape():
    for key in ("hasViolation", "matchedTerms", "reasoning"):
        assert key in SYSTEM_PROMPT
