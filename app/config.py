import logging
import os

from dotenv import load_dotenv

from app.utils.exceptions import ConfigurationError

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

ENV = os.getenv("ENV", "local")

# Constants
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
PORTKEY_API_KEY = os.getenv("PORTKEY_API_KEY")

DEFAULT_TEMPERATURE = 0.5

# Advisory story length, in words
MIN_STORY_WORDS = 100
MAX_STORY_WORDS = 3000


def get_max_concurrency() -> int:
    value = os.getenv("ANALYSIS_MAX_CONCURRENCY", "1")
    try:
        return max(1, int(value))
    except ValueError:
        logger.warning(f"Invalid ANALYSIS_MAX_CONCURRENCY {value!r}, running sequentially")
        return 1


def require_api_key() -> str:
    """Return the OpenAI API key or fail before any request is attempted."""
    api_key = os.getenv("OPENAI_API_KEY", "").strip()
    if not api_key:
        raise ConfigurationError(
            "OPENAI_API_KEY is not configured. Set it in the environment or the .env file."
        )
    return api_key


class STATSD:
    HOST = os.getenv("STATSD_HOST", "localhost")
    PORT = os.getenv("STATSD_PORT", 8125)
