import asyncio
import logging
import time
from contextlib import contextmanager
from typing import Awaitable, Callable, List, Sequence, TypeVar

from pydantic import BaseModel, ValidationError

from app.config import MAX_STORY_WORDS, MIN_STORY_WORDS
from app.constants.metrics import Constants
from app.metrics.statsd_client import statsd
from app.schemas.story_analysis import Character, EmotionType
from app.utils.exceptions import ParseError

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

EMOTION_CHOICES = ", ".join(emotion.value for emotion in EmotionType)


async def run_in_order(
    factories: Sequence[Callable[[], Awaitable[T]]], max_concurrency: int = 1
) -> List[T]:
    """Await each factory's coroutine and return results in input order.

    With ``max_concurrency`` of 1 the coroutines run strictly one after another.
    Above 1 they fan out behind a semaphore; results still come back by index.
    """
    if max_concurrency <= 1:
        results = []
        for factory in factories:
            results.append(await factory())
        return results

    semaphore = asyncio.Semaphore(max_concurrency)

    async def run_with_semaphore(factory):
        async with semaphore:
            return await factory()

    return list(await asyncio.gather(*(run_with_semaphore(factory) for factory in factories)))


def validate_model(model_cls: type[M], data: dict, label: str) -> M:
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise ParseError(f"Invalid {label}: {e.error_count()} validation error(s)") from e
    except ArithmeticError as e:
        raise ParseError(f"Invalid {label}: {str(e)}") from e


def count_words(story_text: str) -> int:
    return len(story_text.split())


def check_story_length(story_text: str) -> int:
    """Log a warning when the story is outside the recommended length. Never rejects."""
    words = count_words(story_text)
    if words < MIN_STORY_WORDS or words > MAX_STORY_WORDS:
        logger.warning(
            f"Story has {words} words; recommended length is {MIN_STORY_WORDS}-{MAX_STORY_WORDS}"
        )
    return words


def format_character_context(character: Character) -> str:
    if not character.profile:
        return f"About {character.name}: {character.summary}"

    profile = character.profile
    lines = [f"About {character.name}: {character.summary}"]
    if profile.personality:
        lines.append(f"Personality: {', '.join(profile.personality)}")
    if profile.motivations:
        lines.append(f"Motivations: {', '.join(profile.motivations)}")
    if profile.biases:
        lines.append(f"Biases: {', '.join(profile.biases)}")
    return "\n".join(lines)


def record_fallback(stage: str, cause: str):
    statsd.increment(
        Constants.Metric.FALLBACK_COUNT,
        tags={Constants.Tag.STAGE: stage, Constants.Tag.CAUSE: cause},
    )


@contextmanager
def stage_timer(stage: str):
    start_time = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        statsd.timing(Constants.Metric.STAGE_LATENCY, elapsed_ms, tags={Constants.Tag.STAGE: stage})
