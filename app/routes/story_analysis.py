import logging

from fastapi import Depends

from app.metrics.router import MetricsRouter
from app.schemas.story_analysis import (
    StoryAnalysisRequest,
    StoryAnalysisResult,
    TimelineView,
    TimelineViewRequest,
)
from app.services.story_analysis import StoryAnalyzer, build_timeline_view
from app.utils.exceptions import (
    ConfigurationError,
    ModelConfigurationException,
    OrchestrationError,
    StoryAnalysisFailedException,
)

logger = logging.getLogger(__name__)

router = MetricsRouter(tags=["story-analysis"])


def get_story_analyzer() -> StoryAnalyzer:
    try:
        return StoryAnalyzer()
    except ConfigurationError as e:
        logger.error(f"Story analysis is not configured: {str(e)}")
        raise ModelConfigurationException(str(e))


@router.post("/story-analysis", response_model=StoryAnalysisResult)
async def analyze_story(
    request: StoryAnalysisRequest, analyzer: StoryAnalyzer = Depends(get_story_analyzer)
):
    try:
        return await analyzer.analyze(request.story_text)
    except OrchestrationError as e:
        raise StoryAnalysisFailedException(e.stage, str(e))


@router.post("/story-analysis/timeline", response_model=TimelineView)
def get_timeline_view(request: TimelineViewRequest):
    return build_timeline_view(request.result, request.selected_character)
