import logging

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.logging_config import configure_logging
from app.metrics.router import MetricsRouter
from app.routes import router as api_router
from app.services.ai_service import StoryModelClient
from app.utils.exceptions import (
    ConfigurationError,
    ModelCheckFailedException,
    ModelConfigurationException,
    RequestError,
)

VERSION = "1.0.0"

app = FastAPI(
    title="Story Perspectives API",
    description="Analyzes a short story into characters, key events and per-character perspectives",
    version=VERSION,
    on_startup=[configure_logging],
)
utils_router = MetricsRouter()
logger = logging.getLogger(__name__)

app.add_middleware(CorrelationIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, replace with specific origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["public"])
async def root():
    return {
        "message": "Welcome to Story Perspectives API",
        "version": VERSION,
        "docs_url": "/docs",
        "redoc_url": "/redoc",
    }


@utils_router.get("/health", tags=["public"])
async def health_check():
    return {"status": "healthy", "api": "Story Perspectives API", "version": VERSION}


@utils_router.get("/model-check", tags=["public"])
async def model_check():
    try:
        client = StoryModelClient()
        text = await client.ping()
    except ConfigurationError as e:
        raise ModelConfigurationException(str(e))
    except RequestError as e:
        logger.error(f"Model check failed: {str(e)}")
        raise ModelCheckFailedException(str(e))

    return {"success": True, "message": "Model API is working correctly", "response": text}


app.include_router(api_router, prefix="/story-perspectives/api/v1")
app.include_router(utils_router, prefix="/story-perspectives/utils")
