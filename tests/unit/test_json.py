"""Tests for JSON extraction and encoding."""

import pytest

from sketchui.core.json import (
    JSONParseError,
    extract_json,
    extract_json_array,
    safe_json_dumps,
    strip_code_fences,
)


@pytest.mark.unit
def test_extract_plain_object():
    assert extract_json('{"a": 1}') == {"a": 1}


@pytest.mark.unit
def test_extract_from_markdown_fence():
    text = 'Here you go:\n```json\n{"root": {"id": "root"}}\n```\nThanks'
    assert extract_json(text) == {"root": {"id": "root"}}


@pytest.mark.unit
def test_extract_with_surrounding_prose():
    text = 'Sure! {"title": "Bakery"} Let me know if you need more.'
    assert extract_json(text) == {"title": "Bakery"}


@pytest.mark.unit
def test_extract_repairs_trailing_comma():
    assert extract_json('{"a": 1, "b": [1, 2,],}') == {"a": 1, "b": [1, 2]}


@pytest.mark.unit
def test_extract_without_repair_raises():
    with pytest.raises(JSONParseError):
        extract_json('{"a": 1,}', repair=False)


@pytest.mark.unit
def test_extract_no_object_raises():
    with pytest.raises(JSONParseError, match="No JSON object"):
        extract_json("no braces here")


@pytest.mark.unit
def test_extract_array():
    assert extract_json_array('```\n[{"type": "add_feature"}]\n```') == [{"type": "add_feature"}]


@pytest.mark.unit
def test_extract_array_missing_raises():
    with pytest.raises(JSONParseError, match="No JSON array"):
        extract_json_array('{"actions": 1}')


@pytest.mark.unit
def test_strip_code_fences_without_fence_is_identity():
    assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'


@pytest.mark.unit
def test_safe_json_dumps_compact_and_indented():
    assert safe_json_dumps({"a": [1, 2]}) == '{"a":[1,2]}'
    assert safe_json_dumps({"a": 1}, indent=2) == '{\n  "a": 1\n}'
