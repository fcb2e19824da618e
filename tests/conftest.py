from __future__ import annotations

import json
from typing import Callable

import pytest

from app.utils.model_settings import ModelSettings

IDENTIFY_MARKER = "identify all characters"
PROFILE_MARKER = "Analyze the character"
EVENTS_MARKER = "extract 5-10 key events"
PERSPECTIVE_MARKER = "Rewrite this event from the first-person perspective of"

ROWAN = {"name": "Rowan", "role": "major", "confidenceScore": 90, "summary": "A scribe."}
LEIRA = {"name": "Leira", "role": "minor", "confidenceScore": 70, "summary": "A merchant."}

SAMPLE_STORY = (
    "The ancient clock tower stood like a sentinel above the town square. Rowan, a scribe "
    "obsessed with the arcane relic beneath the clock tower, had dedicated his life to "
    "studying its mysteries. Leira sold lanterns at the foot of the tower."
)


def profile_reply(**overrides) -> str:
    profile = {
        "personality": ["Curious", "Stubborn"],
        "motivations": ["Uncover the relic"],
        "background": "Grew up in the town archives.",
        "biases": ["Distrusts merchants"],
        "emotionalBaseline": {"primary": "fear", "intensity": 6},
        "relationships": {},
    }
    profile.update(overrides)
    return "Here is the profile:\n```json\n" + json.dumps(profile) + "\n```"


def events_reply(events: list[dict]) -> str:
    return "Key events:\n" + json.dumps(events, indent=2)


def perspective_reply(name: str, event_title: str) -> str:
    return json.dumps(
        {
            "firstPersonNarrative": f"I am {name} and I saw {event_title}.",
            "emotion": {"primary": "joy", "secondary": "surprise", "intensity": 7},
            "thoughtsAboutOthers": {},
            "perceptionAccuracy": 88,
        }
    )


class FakeModelClient:
    """Stands in for StoryModelClient; replies come from a callable keyed on the prompt."""

    def __init__(self, responder: Callable[[str], object]):
        self.responder = responder
        self.prompts: list[str] = []
        self.calls: list[tuple[str, float]] = []

    async def generate(self, prompt: str, model: str = "test-model", temperature: float = 0.5) -> str:
        self.prompts.append(prompt)
        self.calls.append((model, temperature))
        reply = self.responder(prompt)
        if isinstance(reply, BaseException):
            raise reply
        return reply

    def count(self, marker: str) -> int:
        return sum(1 for prompt in self.prompts if marker in prompt)


def scripted_responder(
    characters: list[dict] | None = None,
    events: list[dict] | None = None,
    profile: Callable[[str], object] | None = None,
    perspective: Callable[[str], object] | None = None,
    events_text: str | None = None,
    characters_text: str | None = None,
) -> Callable[[str], object]:
    characters = [ROWAN, LEIRA] if characters is None else characters
    events = (
        [
            {"title": "Arrival", "description": "Rowan arrives at the tower.", "timePosition": 10},
            {"title": "Discovery", "description": "The relic glows.", "timePosition": 60},
        ]
        if events is None
        else events
    )

    def respond(prompt: str):
        if IDENTIFY_MARKER in prompt:
            return characters_text if characters_text is not None else json.dumps(characters)
        if PROFILE_MARKER in prompt:
            return profile(prompt) if profile else profile_reply()
        if EVENTS_MARKER in prompt:
            return events_text if events_text is not None else events_reply(events)
        if PERSPECTIVE_MARKER in prompt:
            if perspective:
                return perspective(prompt)
            name = prompt.split(PERSPECTIVE_MARKER, 1)[1].split(".", 1)[0].strip()
            return perspective_reply(name, "the event")
        raise AssertionError(f"Unexpected prompt: {prompt[:80]}")

    return respond


@pytest.fixture
def model_settings() -> ModelSettings:
    return ModelSettings(environ={})


@pytest.fixture
def fake_client():
    return FakeModelClient(scripted_responder())
