"""Tests for parsing model replies into moderation results."""

from banwatch.moderation.models import MAX_MATCHED_TERMS, ModerationResult
from banwatch.moderation.parser import (
    SAFE_DEFAULT,
    SAFE_DEFAULT_REASONING,
    extract_json_text,
    parse_reply,
)


# --- Well-formed replies ---


def test_plain_json_object():
    result = parse_reply('{"hasViolation":true,"matchedTerms":["x"],"reasoning":"r"}')
    assert result.to_dict() == {"hasViolation": True, "matchedTerms": ["x"], "reasoning": "r"}


def test_json_embedded_in_prose():
    content = 'Sure, here is the result: {"hasViolation":false,"matchedTerms":[],"reasoning":"ok"}'
    result = parse_reply(content)
    assert result == ModerationResult(has_violation=False, matched_terms=(), reasoning="ok")


def test_trailing_whitespace_after_object():
    result = parse_reply('{"hasViolation":true,"matchedTerms":["a"],"reasoning":"r"}\n\n')
    assert result.has_violation
    assert result.matched_terms == ("a",)


def test_multiline_object_with_nested_braces():
    content = 'Result:\n{\n  "hasViolation": true,\n  "matchedTerms": ["a"],\n  "reasoning": "r",\n  "extra": {"k": 1}\n}'
    result = parse_reply(content)
    assert result.has_violation
    assert result.reasoning == "r"


def test_extract_spans_first_to_last_brace():
    assert extract_json_text('x {"a": {"b": 1}}') == '{"a": {"b": 1}}'
    assert extract_json_text("no braces here") == "no braces here"


# --- Coercion ---


def test_has_violation_is_coerced_to_bool():
    assert parse_reply('{"hasViolation": 1}').has_violation is True
    assert parse_reply('{"hasViolation": 0}').has_violation is False
    assert parse_reply('{"hasViolation": null}').has_violation is False
    assert parse_reply("{}").has_violation is False


def test_matched_terms_wrong_type_becomes_empty():
    result = parse_reply('{"hasViolation":true,"matchedTerms":"x","reasoning":"r"}')
    assert result.matched_terms == ()


def test_matched_terms_deduplicated_and_capped():
    terms = ", ".join(f'"t{i}"' for i in range(15))
    result = parse_reply('{"hasViolation":true,"matchedTerms":["t0", ' + terms + "]}")
    assert len(result.matched_terms) == MAX_MATCHED_TERMS
    assert len(set(result.matched_terms)) == len(result.matched_terms)
    assert result.matched_terms[0] == "t0"


def test_matched_terms_drops_non_strings_and_blanks():
    result = parse_reply('{"matchedTerms":["a", null, {"x": 1}, "", "  ", 7, true]}')
    assert result.matched_terms == ("a", "7")


def test_reasoning_wrong_type_becomes_empty():
    result = parse_reply('{"hasViolation":false,"reasoning":42}')
    assert result.reasoning == ""


def test_extra_fields_ignored():
    result = parse_reply('{"hasViolation":false,"matchedTerms":[],"reasoning":"ok","score":0.1}')
    assert result.to_dict() == {"hasViolation": False, "matchedTerms": [], "reasoning": "ok"}


# --- Safe default ---


def test_prose_without_json_degrades():
    result = parse_reply("I cannot help with that.")
    assert result == SAFE_DEFAULT
    assert result.to_dict() == {
        "hasViolation": False,
        "matchedTerms": [],
        "reasoning": "模型未返回有效 JSON，已安全降级为未命中。",
    }


def test_empty_reply_degrades():
    assert parse_reply("") == SAFE_DEFAULT


def test_truncated_json_degrades():
    assert parse_reply('{"hasViolation": true, "matchedTerms": ["a"') == SAFE_DEFAULT


def test_object_followed_by_prose_degrades():
    assert parse_reply('{"hasViolation": true} hope this helps').reasoning == SAFE_DEFAULT_REASONING


def test_non_object_json_degrades():
    assert parse_reply("[1, 2, 3]") == SAFE_DEFAULT
    assert parse_reply("null") == SAFE_DEFAULT
