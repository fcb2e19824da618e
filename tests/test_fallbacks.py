from __future__ import annotations

import asyncio

import pytest
from pydantic import BaseModel, field_validator

from app.schemas.story_analysis import EmotionType, StoryEvent
from app.utils.exceptions import ParseError, RequestError
from app.utils.fallbacks import (
    ParseFailure,
    RequestFailure,
    attempt_or_default,
    parse_failure_perspective,
    parse_failure_profile,
    perspective_fallback,
    profile_fallback,
    request_failure_perspective,
    request_failure_profile,
)
from app.utils.story_analysis_utils import validate_model


@pytest.fixture
def event() -> StoryEvent:
    return StoryEvent(id="event-0", title="Arrival", description="Rowan arrives.", time_position=0)


def test_parse_failure_perspective(event: StoryEvent) -> None:
    perspective = parse_failure_perspective(event)
    assert perspective.first_person_narrative == "I witnessed the event unfold before me. Rowan arrives."
    assert perspective.emotion.primary == EmotionType.NEUTRAL
    assert perspective.emotion.intensity == 5
    assert perspective.thoughts_about_others == {}
    assert perspective.perception_accuracy == 70


def test_request_failure_perspective(event: StoryEvent) -> None:
    perspective = request_failure_perspective(event)
    assert perspective.first_person_narrative == (
        "From my perspective, I observed the following: Rowan arrives."
    )
    assert perspective.perception_accuracy == 65


def test_profiles_differ_by_cause_but_share_baseline() -> None:
    parsed = parse_failure_profile()
    requested = request_failure_profile()
    assert parsed.personality != requested.personality
    for profile in (parsed, requested):
        assert profile.emotional_baseline.primary == EmotionType.NEUTRAL
        assert profile.emotional_baseline.intensity == 5
        assert profile.relationships == {}


def test_dispatch_on_failure_kind(event: StoryEvent) -> None:
    assert profile_fallback(ParseFailure("bad")) == parse_failure_profile()
    assert profile_fallback(RequestFailure(RequestError("down"))) == request_failure_profile()
    assert perspective_fallback(event, ParseFailure("bad")).perception_accuracy == 70
    assert perspective_fallback(event, RequestFailure(RequestError("down"))).perception_accuracy == 65


def _run(request, parse):
    failures = []

    def default(failure):
        failures.append(failure)
        return "fallback"

    value = asyncio.run(attempt_or_default(request, parse, default))
    return value, failures


def test_attempt_or_default_success() -> None:
    async def request():
        return "42"

    value, failures = _run(request, int)
    assert value == 42
    assert failures == []


def test_attempt_or_default_request_failure() -> None:
    async def request():
        raise RequestError("timeout")

    value, failures = _run(request, int)
    assert value == "fallback"
    assert isinstance(failures[0], RequestFailure)
    assert failures[0].cause == "request"


def test_attempt_or_default_parse_failure() -> None:
    async def request():
        return "not a number"

    def parse(text):
        raise ParseError("no number")

    value, failures = _run(request, parse)
    assert value == "fallback"
    assert isinstance(failures[0], ParseFailure)
    assert failures[0].reason == "no number"


def test_attempt_or_default_propagates_unexpected_errors() -> None:
    async def request():
        raise KeyError("bug")

    with pytest.raises(KeyError):
        _run(request, int)


class _Score(BaseModel):
    value: int

    @field_validator("value", mode="before")
    @classmethod
    def to_int(cls, value):
        return int(value)


def test_arithmetic_error_during_validation_becomes_parse_failure() -> None:
    async def request():
        return "inf"

    value, failures = _run(request, lambda text: validate_model(_Score, {"value": float(text)}, "score"))
    assert value == "fallback"
    assert isinstance(failures[0], ParseFailure)
    assert "score" in failures[0].reason
