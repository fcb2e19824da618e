import asyncio
import logging
from typing import Dict, Optional

from openai import OpenAI
from portkey_ai import PORTKEY_GATEWAY_URL, createHeaders

from app.config import ENV, OPENAI_MODEL, PORTKEY_API_KEY, require_api_key
from app.constants.metrics import Constants
from app.metrics.statsd_client import statsd
from app.prompts.story_analysis_prompts import MODEL_CHECK_PROMPT, STORY_ANALYSIS_SYSTEM_PROMPT
from app.utils.exceptions import RequestError

logger = logging.getLogger(__name__)


def get_headers(api_key: str) -> Dict[str, str]:
    return createHeaders(
        api_key=PORTKEY_API_KEY,
        virtual_key=api_key,
        metadata={"env": ENV, "service": "story_perspectives"},
    )


def get_openai_client() -> OpenAI:
    """Build an OpenAI client, routed through the Portkey gateway when it is configured.

    Raises ConfigurationError before any network call when the API key is missing.
    """
    api_key = require_api_key()
    if PORTKEY_API_KEY:
        return OpenAI(
            api_key=api_key, base_url=PORTKEY_GATEWAY_URL, default_headers=get_headers(api_key)
        )
    return OpenAI(api_key=api_key)


class StoryModelClient:
    """Prompt in, free text out. Every failure of the call surfaces as RequestError."""

    def __init__(self, client: Optional[OpenAI] = None):
        self.client = client or get_openai_client()

    async def generate(
        self, prompt: str, model: str = OPENAI_MODEL, temperature: float = 0.5
    ) -> str:
        statsd.increment(Constants.Metric.MODEL_REQUEST_COUNT, tags={"model": model})
        try:
            # Run the blocking SDK call in a thread to avoid blocking the event loop
            response = await asyncio.to_thread(
                self.client.chat.completions.create,
                model=model,
                messages=[
                    {"role": "system", "content": STORY_ANALYSIS_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=temperature,
            )
            content = response.choices[0].message.content
        except Exception as e:
            raise RequestError(f"Model request failed: {str(e)}") from e

        if not content or not content.strip():
            raise RequestError("Model returned an empty response")
        return content

    async def ping(self) -> str:
        return await self.generate(MODEL_CHECK_PROMPT)
