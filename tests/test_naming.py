"""Tests for artifact name normalization."""

import re
from claude_init.generator.naming import merge_unique, sanitize


def test_sanitize_splits_camel_case():
    """Lower-to-upper boundaries become hyphens."""
    assert sanitize("CodeReviewer") == "code-reviewer"
    assert sanitize("api2Docs") == "api2-docs"


def test_sanitize_replaces_invalid_characters():
    """Punctuation and spaces collapse into single hyphens."""
    assert sanitize("  Foo!!Bar  ") == "foo-bar"
    assert sanitize("Node.js") == "node-js"
    assert sanitize("bug fix") == "bug-fix"


def test_sanitize_keeps_underscores():
    """Underscores are valid filename characters and survive."""
    assert sanitize("snake_case_name") == "snake_case_name"


def test_sanitize_empty_result_is_unnamed():
    """Names with nothing usable left become 'unnamed'."""
    assert sanitize("") == "unnamed"
    assert sanitize("!!!") == "unnamed"
    assert sanitize("---") == "unnamed"


def test_sanitize_output_shape():
    """Output is lowercase, has no leading/trailing or doubled hyphens."""
    samples = ["HTTPServer", "--weird--Name--", "MixedCASE_and-dash", "a  b  c", "Ünïcode Name"]
    for sample in samples:
        result = sanitize(sample)
        assert re.fullmatch(r"[a-z0-9_-]+", result)
        assert not result.startswith("-")
        assert not result.endswith("-")
        assert "--" not in result


def test_sanitize_is_idempotent():
    """Sanitizing a sanitized name changes nothing."""
    for sample in ["CodeReviewer", "  Foo!!Bar  ", "api2Docs", "Go", "Express.js"]:
        once = sanitize(sample)
        assert sanitize(once) == once


def test_merge_unique_puts_base_first():
    """Base items come first, then new recommended items in order."""
    merged = merge_unique(["developer", "architect", "tester"], ["architect", "writer"])
    assert merged == ["architect", "writer", "developer", "tester"]


def test_merge_unique_removes_duplicates():
    """Duplicates within either list appear once."""
    merged = merge_unique(["a", "b", "a"], ["b", "b"])
    assert merged == ["b", "a"]
    assert len(merged) == len(set(merged))


def test_merge_unique_empty_inputs():
    """Merging with nothing returns the other list."""
    assert merge_unique([], ["x"]) == ["x"]
    assert merge_unique(["y"], []) == ["y"]
    assert merge_unique([], []) == []


def test_sanitize_documented_cases():
    """Already-clean names are unchanged; stray hyphens are trimmed."""
    assert sanitize("@#$!") == "unnamed"
    assert sanitize("code-reviewer") == "code-reviewer"
    assert sanitize("-a--b-") == "a-b"
