import logging
import math
from typing import Any, List, Optional

from app.prompts import format_prompt
from app.prompts.story_analysis_prompts import EVENT_EXTRACTION_PROMPT_TEMPLATE
from app.schemas.story_analysis import Character, StoryEvent
from app.utils.exceptions import ParseError
from app.utils.json_extraction import NotFound, extract_json_array
from app.utils.model_settings import ModelSettings

logger = logging.getLogger(__name__)


def _time_position(raw: Any, index: int, count: int) -> float:
    default = index * (100 / count)
    # Missing, zero and empty values all fall back to even spacing
    if not raw:
        return default
    try:
        position = float(raw)
    except (TypeError, ValueError):
        return default
    if math.isnan(position):
        return default
    return max(0.0, min(100.0, position))


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def build_events(items: List[Any]) -> List[StoryEvent]:
    """Turn the model's raw event list into StoryEvents, preserving its order."""
    count = len(items)
    events = []
    for index, item in enumerate(items):
        data = item if isinstance(item, dict) else {}
        raw_position = data.get("timePosition", data.get("time_position"))
        events.append(
            StoryEvent(
                id=f"event-{index}",
                title=_text(data.get("title")) or f"Event {index + 1}",
                description=_text(data.get("description")),
                time_position=_time_position(raw_position, index, count),
                character_perspectives={},
            )
        )
    return events


def parse_events(text: str) -> List[StoryEvent]:
    extraction = extract_json_array(text)
    if isinstance(extraction, NotFound):
        logger.error(f"Failed to parse event data from response: {extraction.reason}")
        raise ParseError(f"Failed to parse event data from model response: {extraction.reason}")
    return build_events(extraction.value)


async def extract_story_events(
    story_text: str,
    characters: Optional[List[Character]],
    client,
    model_settings: Optional[ModelSettings] = None,
) -> List[StoryEvent]:
    """Ask the model for the story's key events. Has no fallback: every failure propagates."""
    model_settings = model_settings or ModelSettings()
    model, temperature = model_settings.event_extraction()

    character_names = ", ".join(character.name for character in characters or []) or "unknown"
    prompt = format_prompt(
        EVENT_EXTRACTION_PROMPT_TEMPLATE, character_names=character_names, story_text=story_text
    )
    text = await client.generate(prompt, model=model, temperature=temperature)
    logger.debug(f"Event extraction response: {text}")

    events = parse_events(text)
    logger.info(f"Extracted {len(events)} events")
    return events
