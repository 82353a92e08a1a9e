"""
Tests for JSON extraction from free-form LLM replies.
"""

import json

import pytest

from melodymind.utils.json_utils import extract_json_object, parse_json_object, strip_markdown_fences


class TestStripMarkdownFences:

    def test_fenced_block(self):
        assert strip_markdown_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_plain_text_untouched(self):
        assert strip_markdown_fences('  {"a": 1}  ') == '{"a": 1}'


class TestExtractJsonObject:

    def test_first_balanced_object(self):
        text = 'Sure! {"a": {"b": 2}} and also {"c": 3}'
        assert extract_json_object(text) == '{"a": {"b": 2}}'

    def test_braces_inside_strings(self):
        text = '{"reasoning": "a } tricky { value", "x": "\\"}"}'
        assert json.loads(extract_json_object(text))["reasoning"] == "a } tricky { value"

    def test_no_object(self):
        with pytest.raises(ValueError, match="No JSON object"):
            extract_json_object("no json here")

    def test_unbalanced(self):
        with pytest.raises(ValueError, match="Unmatched"):
            extract_json_object('{"a": {"b": 1}')


class TestParseJsonObject:

    def test_parses_fenced_reply(self):
        reply = '```json\n{"overallMood": "happy", "confidence": 0.8}\n```'
        assert parse_json_object(reply) == {"overallMood": "happy", "confidence": 0.8}

    def test_invalid_json_raises_value_error(self):
        with pytest.raises(ValueError):
            parse_json_object("{overallMood: happy}")
