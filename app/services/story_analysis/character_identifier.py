import logging
from typing import List, Optional

from app.prompts import format_prompt
from app.prompts.story_analysis_prompts import CHARACTER_IDENTIFICATION_PROMPT_TEMPLATE
from app.schemas.story_analysis import Character
from app.utils.exceptions import ParseError
from app.utils.json_extraction import NotFound, extract_json_array
from app.utils.model_settings import ModelSettings
from app.utils.story_analysis_utils import validate_model

logger = logging.getLogger(__name__)


def parse_characters(text: str) -> List[Character]:
    """Parse the identification reply. Raises ParseError when no usable array is present."""
    extraction = extract_json_array(text)
    if isinstance(extraction, NotFound):
        logger.error(f"Failed to parse character data from response: {extraction.reason}")
        raise ParseError(f"Failed to parse character data from model response: {extraction.reason}")

    characters: List[Character] = []
    seen = set()
    for index, item in enumerate(extraction.value):
        if not isinstance(item, dict):
            raise ParseError(f"Character entry {index} is not a JSON object")
        character = validate_model(Character, item, f"character entry {index}")
        # Names are the key for profiles, perspectives and graph edges
        if character.name in seen:
            logger.warning(f"Dropping duplicate character '{character.name}'")
            continue
        seen.add(character.name)
        characters.append(character)

    return characters


async def identify_characters(
    story_text: str, client, model_settings: Optional[ModelSettings] = None
) -> List[Character]:
    """Ask the model for the story's characters. Has no fallback: every failure propagates."""
    model_settings = model_settings or ModelSettings()
    model, temperature = model_settings.character_identification()

    prompt = format_prompt(CHARACTER_IDENTIFICATION_PROMPT_TEMPLATE, story_text=story_text)
    text = await client.generate(prompt, model=model, temperature=temperature)
    logger.debug(f"Character identification response: {text}")

    characters = parse_characters(text)
    logger.info(f"Identified {len(characters)} characters")
    return characters
