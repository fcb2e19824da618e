from typing import Optional

from fastapi import HTTPException

TROUBLESHOOTING_TIPS = [
    "Make sure OPENAI_API_KEY is correctly set in the environment or the .env file",
    "Check if your internet connection is stable",
    "Try with a shorter text sample first",
    "Check the service logs for more detailed error information",
]


class StoryAnalysisException(Exception):
    """Base class for errors raised by the story analysis pipeline."""


class ConfigurationError(StoryAnalysisException):
    """The model credential is missing or invalid."""


class ParseError(StoryAnalysisException):
    """The model reply did not contain the expected JSON shape."""


class RequestError(StoryAnalysisException):
    """The model call itself failed."""


class OrchestrationError(StoryAnalysisException):
    """A stage failed without a fallback; wraps the stage error."""

    def __init__(self, stage: str, cause: Optional[BaseException] = None):
        self.stage = stage
        self.cause = cause
        detail = str(cause) if cause else "Unknown error"
        super().__init__(f"Failed to analyze story: {detail}")


class StoryAnalysisFailedException(HTTPException):
    def __init__(self, stage: str, message: str):
        super().__init__(
            status_code=502,
            detail={
                "type": "STORY_ANALYSIS_FAILED",
                "stage": stage,
                "message": message,
                "troubleshooting": TROUBLESHOOTING_TIPS,
            },
        )


class ModelConfigurationException(HTTPException):
    def __init__(self, message: str):
        super().__init__(
            status_code=500, detail={"type": "CONFIGURATION_ERROR", "message": message}
        )


class ModelCheckFailedException(HTTPException):
    def __init__(self, message: str):
        super().__init__(
            status_code=500,
            detail={"type": "MODEL_CHECK_FAILED", "message": f"Failed to reach the model: {message}"},
        )


class CharacterNotFoundException(HTTPException):
    def __init__(self, name: str):
        super().__init__(
            status_code=404,
            detail={"type": "CHARACTER_NOT_FOUND", "message": f"Character not found: {name}"},
        )
