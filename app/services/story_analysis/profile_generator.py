import logging
from typing import List, Optional

from app.prompts import format_prompt
from app.prompts.story_analysis_prompts import PROFILE_GENERATION_PROMPT_TEMPLATE
from app.schemas.story_analysis import Character, CharacterProfile
from app.utils.constants import AnalysisStage
from app.utils.exceptions import ParseError
from app.utils.fallbacks import Failure, attempt_or_default, profile_fallback
from app.utils.json_extraction import NotFound, extract_json_object
from app.utils.model_settings import ModelSettings
from app.utils.story_analysis_utils import (
    EMOTION_CHOICES,
    record_fallback,
    run_in_order,
    validate_model,
)

logger = logging.getLogger(__name__)


def parse_profile(text: str) -> CharacterProfile:
    extraction = extract_json_object(text)
    if isinstance(extraction, NotFound):
        raise ParseError(f"Failed to parse profile data: {extraction.reason}")
    return validate_model(CharacterProfile, extraction.value, "character profile")


def _fallback_profile(failure: Failure) -> CharacterProfile:
    record_fallback(AnalysisStage.PROFILE_GENERATION.value, failure.cause)
    return profile_fallback(failure)


async def generate_profile(
    story_text: str, character: Character, client, model: str, temperature: float
) -> Character:
    prompt = format_prompt(
        PROFILE_GENERATION_PROMPT_TEMPLATE,
        character_name=character.name,
        emotions=EMOTION_CHOICES,
        story_text=story_text,
    )

    profile = await attempt_or_default(
        lambda: client.generate(prompt, model=model, temperature=temperature),
        parse_profile,
        _fallback_profile,
        label=f"profile of {character.name}",
    )
    return character.model_copy(update={"profile": profile})


async def generate_character_profiles(
    story_text: str,
    characters: List[Character],
    client,
    model_settings: Optional[ModelSettings] = None,
    max_concurrency: int = 1,
) -> List[Character]:
    """Attach a profile to every character, in input order.

    A failed request or an unparseable reply for one character gives that
    character a fallback profile; the rest of the batch is unaffected.
    """
    model_settings = model_settings or ModelSettings()
    model, temperature = model_settings.profile_generation()

    def profile_task(character: Character):
        async def run():
            logger.info(f"Generating profile for {character.name}")
            return await generate_profile(story_text, character, client, model, temperature)

        return run

    updated_characters = await run_in_order(
        [profile_task(character) for character in characters], max_concurrency
    )
    logger.info(f"Generated profiles for {len(updated_characters)} characters")
    return updated_characters
