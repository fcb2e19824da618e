# Main router that includes all the individual routers
from app.metrics.router import MetricsRouter

from .story_analysis import router as story_analysis_router

router = MetricsRouter()

router.include_router(story_analysis_router)
