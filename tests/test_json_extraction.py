from __future__ import annotations

from app.utils.json_extraction import Extracted, NotFound, extract_json_array, extract_json_object


def test_array_surrounded_by_prose() -> None:
    text = 'Sure! Here are the characters:\n[\n  {"name": "Rowan"},\n  {"name": "Leira"}\n]\nHope this helps.'
    result = extract_json_array(text)
    assert isinstance(result, Extracted)
    assert [item["name"] for item in result.value] == ["Rowan", "Leira"]


def test_array_inside_markdown_fence() -> None:
    text = '```json\n[{"title": "Arrival", "timePosition": 0}]\n```'
    result = extract_json_array(text)
    assert isinstance(result, Extracted)
    assert result.value == [{"title": "Arrival", "timePosition": 0}]


def test_plain_prose_has_no_array() -> None:
    result = extract_json_array("The story has a scribe and a merchant.")
    assert isinstance(result, NotFound)
    assert "no JSON array" in result.reason


def test_empty_array_does_not_match() -> None:
    assert isinstance(extract_json_array("[]"), NotFound)


def test_empty_response() -> None:
    assert isinstance(extract_json_array(""), NotFound)
    assert isinstance(extract_json_object("   "), NotFound)


def test_object_extraction_ignores_prose() -> None:
    result = extract_json_object('Profile follows {"background": "A scribe", "biases": []} end')
    assert isinstance(result, Extracted)
    assert result.value["background"] == "A scribe"


def test_greedy_match_across_two_objects_is_not_json() -> None:
    # Greedy matching spans from the first "{" to the last "}"
    result = extract_json_object('{"a": 1} and then {"b": 2}')
    assert isinstance(result, NotFound)
    assert "invalid JSON object" in result.reason


def test_refusal_has_no_object() -> None:
    assert isinstance(extract_json_object("Sorry, I cannot comply"), NotFound)


def test_nested_object_is_kept_whole() -> None:
    result = extract_json_object('{"emotion": {"primary": "joy", "intensity": 3}}')
    assert isinstance(result, Extracted)
    assert result.value["emotion"]["primary"] == "joy"
