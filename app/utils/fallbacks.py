"""Substitute values for stages that absorb per-item failures.

Profiles and perspectives have two fallback flavours: one used when the model
replied but the reply could not be parsed, and one used when the request
itself failed. Both guarantee an entry exists for the item.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar, Union

from app.schemas.story_analysis import (
    CharacterPerspective,
    CharacterProfile,
    EmotionData,
    EmotionType,
    StoryEvent,
)
from app.utils.exceptions import ParseError, RequestError

logger = logging.getLogger(__name__)

T = TypeVar("T")

PARSE_FAILURE_ACCURACY = 70
REQUEST_FAILURE_ACCURACY = 65


@dataclass(frozen=True)
class ParseFailure:
    reason: str

    cause = "parse"


@dataclass(frozen=True)
class RequestFailure:
    error: Exception

    cause = "request"


Failure = Union[ParseFailure, RequestFailure]


def neutral_emotion() -> EmotionData:
    return EmotionData(primary=EmotionType.NEUTRAL, intensity=5)


def parse_failure_profile() -> CharacterProfile:
    return CharacterProfile(
        personality=["Determined", "Practical", "Reserved"],
        motivations=["Seeking answers", "Personal growth"],
        background="Background details not available",
        biases=["Cautious of strangers", "Values experience over theory"],
        relationships={},
        emotional_baseline=neutral_emotion(),
    )


def request_failure_profile() -> CharacterProfile:
    return CharacterProfile(
        personality=["Adaptable", "Resourceful", "Thoughtful"],
        motivations=["Finding purpose", "Overcoming obstacles"],
        background="Background information unavailable due to processing error",
        biases=["Favors familiar paths", "Skeptical of easy solutions"],
        relationships={},
        emotional_baseline=neutral_emotion(),
    )


def parse_failure_perspective(event: StoryEvent) -> CharacterPerspective:
    return CharacterPerspective(
        first_person_narrative=f"I witnessed the event unfold before me. {event.description}",
        emotion=neutral_emotion(),
        thoughts_about_others={},
        perception_accuracy=PARSE_FAILURE_ACCURACY,
    )


def request_failure_perspective(event: StoryEvent) -> CharacterPerspective:
    return CharacterPerspective(
        first_person_narrative=(
            f"From my perspective, I observed the following: {event.description}"
        ),
        emotion=neutral_emotion(),
        thoughts_about_others={},
        perception_accuracy=REQUEST_FAILURE_ACCURACY,
    )


def profile_fallback(failure: Failure) -> CharacterProfile:
    if isinstance(failure, RequestFailure):
        return request_failure_profile()
    return parse_failure_profile()


def perspective_fallback(event: StoryEvent, failure: Failure) -> CharacterPerspective:
    if isinstance(failure, RequestFailure):
        return request_failure_perspective(event)
    return parse_failure_perspective(event)


async def attempt_or_default(
    request: Callable[[], Awaitable[str]],
    parse: Callable[[str], T],
    default: Callable[[Failure], T],
    label: str = "item",
) -> T:
    """Request a reply and parse it, substituting ``default(failure)`` on either failure."""
    try:
        text = await request()
    except RequestError as e:
        logger.error(f"Request failed for {label}, using fallback: {str(e)}")
        return default(RequestFailure(e))

    try:
        return parse(text)
    except ParseError as e:
        logger.error(f"Failed to parse reply for {label}, using fallback: {str(e)}")
        return default(ParseFailure(str(e)))
