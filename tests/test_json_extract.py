"""Tests for JSON extraction from model output."""

import json
from claude_init.analyzer.json_extract import extract_json


def test_extract_plain_object():
    """A bare object is returned as-is."""
    assert extract_json('{"a":1}') == '{"a":1}'


def test_extract_from_surrounding_prose():
    """Text before and after the object is ignored."""
    text = 'Here it is:\n{"a": 1}\nThanks'
    assert json.loads(extract_json(text)) == {"a": 1}


def test_extract_from_json_fence():
    """A json-tagged fence is unwrapped."""
    text = '```json\n{"agents": ["architect"]}\n```'
    assert json.loads(extract_json(text)) == {"agents": ["architect"]}


def test_extract_from_fence_when_braces_span_is_invalid():
    """Prose braces before the fence fall back to the fenced block."""
    text = 'Using {placeholders} here.\n```json\n{"a": 2}\n```\nSee {notes}.'
    assert json.loads(extract_json(text)) == {"a": 2}


def test_extract_nothing():
    """No object yields an empty string."""
    assert extract_json("no json here") == ""
    assert extract_json("") == ""


def test_extract_invalid_object():
    """Malformed JSON is rejected."""
    assert extract_json("{not: valid,}") == ""


def test_extract_from_inline_prose():
    """An object embedded mid-sentence is found."""
    assert extract_json('prefix {"k":"v"} suffix') == '{"k":"v"}'


def test_extract_unterminated_object():
    """An object without its closing brace is not returned."""
    assert extract_json('{"k":"v"') == ""
