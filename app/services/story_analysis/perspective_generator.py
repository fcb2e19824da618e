import logging
from typing import List, Optional

from app.prompts import format_prompt
from app.prompts.story_analysis_prompts import PERSPECTIVE_GENERATION_PROMPT_TEMPLATE
from app.schemas.story_analysis import Character, CharacterPerspective, StoryEvent
from app.utils.constants import AnalysisStage
from app.utils.exceptions import ParseError
from app.utils.fallbacks import Failure, attempt_or_default, perspective_fallback
from app.utils.json_extraction import NotFound, extract_json_object
from app.utils.model_settings import ModelSettings
from app.utils.story_analysis_utils import (
    EMOTION_CHOICES,
    format_character_context,
    record_fallback,
    run_in_order,
    validate_model,
)

logger = logging.getLogger(__name__)


def parse_perspective(text: str) -> CharacterPerspective:
    extraction = extract_json_object(text)
    if isinstance(extraction, NotFound):
        raise ParseError(f"Failed to parse perspective data: {extraction.reason}")
    return validate_model(CharacterPerspective, extraction.value, "character perspective")


def build_perspective_prompt(
    story_text: str, event: StoryEvent, character: Character, characters: List[Character]
) -> str:
    others = [other.name for other in characters if other.name != character.name]
    return format_prompt(
        PERSPECTIVE_GENERATION_PROMPT_TEMPLATE,
        event_title=event.title,
        event_description=event.description,
        character_name=character.name,
        character_context=format_character_context(character),
        emotions=EMOTION_CHOICES,
        other_characters=", ".join(others) or "none",
        story_text=story_text,
    )


async def generate_perspective(
    story_text: str,
    event: StoryEvent,
    character: Character,
    characters: List[Character],
    client,
    model: str,
    temperature: float,
) -> CharacterPerspective:
    prompt = build_perspective_prompt(story_text, event, character, characters)

    def fallback(failure: Failure) -> CharacterPerspective:
        record_fallback(AnalysisStage.PERSPECTIVE_GENERATION.value, failure.cause)
        return perspective_fallback(event, failure)

    return await attempt_or_default(
        lambda: client.generate(prompt, model=model, temperature=temperature),
        parse_perspective,
        fallback,
        label=f"perspective of {character.name} on '{event.title}'",
    )


async def generate_perspectives(
    story_text: str,
    characters: List[Character],
    events: List[StoryEvent],
    client,
    model_settings: Optional[ModelSettings] = None,
    max_concurrency: int = 1,
) -> List[StoryEvent]:
    """Fill every event's perspective map with one entry per character.

    Requests are issued per (event, character) pair, events outer and
    characters inner. A failed pair gets a fallback perspective, so each map
    covers the whole character set afterwards.
    """
    model_settings = model_settings or ModelSettings()
    model, temperature = model_settings.perspective_generation()

    updated_events = [event.model_copy(deep=True) for event in events]
    pairs = [(event, character) for event in updated_events for character in characters]
    logger.info(
        f"Generating {len(pairs)} perspectives for {len(updated_events)} events "
        f"and {len(characters)} characters"
    )

    def perspective_task(event: StoryEvent, character: Character):
        async def run():
            return await generate_perspective(
                story_text, event, character, characters, client, model, temperature
            )

        return run

    perspectives = await run_in_order(
        [perspective_task(event, character) for event, character in pairs], max_concurrency
    )

    # Written back in pair order so map ordering matches the sequential run
    for (event, character), perspective in zip(pairs, perspectives):
        event.character_perspectives[character.name] = perspective

    return updated_events
