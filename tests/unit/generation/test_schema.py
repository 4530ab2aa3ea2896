# tests/unit/generation/test_schema.py — v1
"""Tests for generation/schema.py: tagged payload validation."""

from __future__ import annotations

import json

from toolcompare.generation.schema import (
    ParseFailure,
    ParseSuccess,
    try_parse_json,
    validate_json_payload,
    validate_markdown_payload,
)


class TestTryParseJson:
    def test_plain(self):
        assert try_parse_json('{"a": 1}') == {"a": 1}

    def test_code_fence(self):
        assert try_parse_json('```json\n{"a": 1}\n```') == {"a": 1}

    def test_surrounding_prose(self):
        assert try_parse_json('Here you go: {"a": 1} Hope it helps') == {"a": 1}

    def test_garbage(self):
        assert try_parse_json("not json") is None
        assert try_parse_json("") is None


class TestValidateJsonPayload:
    def test_valid(self, valid_comparison):
        result = validate_json_payload(json.dumps(valid_comparison))
        assert isinstance(result, ParseSuccess)
        assert result.content["tldr"] == valid_comparison["tldr"]
        assert result.content["dimensions"][0]["verdicts"][0]["score"] == 4

    def test_extra_keys_dropped(self, valid_comparison):
        valid_comparison["chatter"] = "ignored"
        result = validate_json_payload(json.dumps(valid_comparison))
        assert isinstance(result, ParseSuccess)
        assert "chatter" not in result.content

    def test_optional_sections_default(self):
        minimal = {"tldr": ["x"], "dimensions": [], "pros_cons": []}
        result = validate_json_payload(json.dumps(minimal))
        assert isinstance(result, ParseSuccess)
        assert result.content["caveats"] == []

    def test_not_json(self):
        result = validate_json_payload("I cannot do that")
        assert isinstance(result, ParseFailure)
        assert "not valid JSON" in result.reason

    def test_not_an_object(self):
        result = validate_json_payload("[1, 2]")
        assert isinstance(result, ParseFailure)
        assert "list" in result.reason

    def test_missing_required_section(self, valid_comparison):
        del valid_comparison["pros_cons"]
        result = validate_json_payload(json.dumps(valid_comparison))
        assert isinstance(result, ParseFailure)
        assert "pros_cons" in result.reason

    def test_empty_tldr_rejected(self, valid_comparison):
        valid_comparison["tldr"] = []
        assert isinstance(validate_json_payload(json.dumps(valid_comparison)), ParseFailure)

    def test_score_out_of_range(self, valid_comparison):
        valid_comparison["dimensions"][0]["verdicts"][0]["score"] = 9
        result = validate_json_payload(json.dumps(valid_comparison))
        assert isinstance(result, ParseFailure)
        assert "dimensions.0.verdicts.0.score" in result.reason


class TestValidateMarkdownPayload:
    def test_strips_whitespace(self):
        assert validate_markdown_payload("  ## TL;DR\n") == ParseSuccess("## TL;DR")

    def test_empty_is_failure(self):
        assert isinstance(validate_markdown_payload("   "), ParseFailure)
        assert isinstance(validate_markdown_payload(""), ParseFailure)
