import logging
from typing import Awaitable, Optional, TypeVar

from app.config import get_max_concurrency
from app.schemas.story_analysis import StoryAnalysisResult
from app.services.ai_service import StoryModelClient
from app.services.story_analysis.character_identifier import identify_characters
from app.services.story_analysis.event_extractor import extract_story_events
from app.services.story_analysis.perspective_generator import generate_perspectives
from app.services.story_analysis.profile_generator import generate_character_profiles
from app.services.story_analysis.relationship_graph import build_relationship_graph
from app.utils.constants import AnalysisStage
from app.utils.exceptions import OrchestrationError
from app.utils.model_settings import ModelSettings
from app.utils.story_analysis_utils import check_story_length, stage_timer

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoryAnalyzer:
    def __init__(
        self,
        client=None,
        model_settings: Optional[ModelSettings] = None,
        max_concurrency: Optional[int] = None,
    ):
        """Raises ConfigurationError here, before any request, when no API key is set."""
        self.client = client or StoryModelClient()
        self.model_settings = model_settings or ModelSettings()
        self.max_concurrency = max_concurrency or get_max_concurrency()

    async def _run_stage(self, stage: AnalysisStage, step: Awaitable[T]) -> T:
        logger.info(f"Starting stage: {stage.value}")
        try:
            with stage_timer(stage.value):
                result = await step
        except Exception as e:
            logger.error(f"Stage {stage.value} failed: {str(e)}", exc_info=True)
            raise OrchestrationError(stage.value, e) from e
        logger.info(f"Completed stage: {stage.value}")
        return result

    async def analyze(self, story_text: str) -> StoryAnalysisResult:
        """Run the four stages in order and assemble the result.

        Raises OrchestrationError if a stage without a fallback fails; no
        partial result is returned.
        """
        words = check_story_length(story_text)
        logger.info(f"Starting story analysis ({words} words)")

        characters = await self._run_stage(
            AnalysisStage.CHARACTER_IDENTIFICATION,
            identify_characters(story_text, self.client, self.model_settings),
        )
        characters = await self._run_stage(
            AnalysisStage.PROFILE_GENERATION,
            generate_character_profiles(
                story_text, characters, self.client, self.model_settings, self.max_concurrency
            ),
        )
        events = await self._run_stage(
            AnalysisStage.EVENT_EXTRACTION,
            extract_story_events(story_text, characters, self.client, self.model_settings),
        )
        events = await self._run_stage(
            AnalysisStage.PERSPECTIVE_GENERATION,
            generate_perspectives(
                story_text,
                characters,
                events,
                self.client,
                self.model_settings,
                self.max_concurrency,
            ),
        )

        relationship_graph = build_relationship_graph(characters)
        logger.info(
            f"Analysis complete: {len(characters)} characters, {len(events)} events, "
            f"{len(relationship_graph.edges)} relationships"
        )
        return StoryAnalysisResult(
            characters=characters, events=events, relationship_graph=relationship_graph
        )


async def analyze_story(story_text: str, analyzer: Optional[StoryAnalyzer] = None) -> StoryAnalysisResult:
    analyzer = analyzer or StoryAnalyzer()
    return await analyzer.analyze(story_text)
