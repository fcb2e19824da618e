import logging
import os
from typing import Tuple

from app.config import DEFAULT_TEMPERATURE, OPENAI_MODEL
from app.utils.constants import SettingKeys

logger = logging.getLogger(__name__)


class ModelSettings:
    """Per-stage model and temperature, read from ``<SETTING_KEY>`` environment variables."""

    def __init__(self, environ=None):
        self.environ = os.environ if environ is None else environ

    def get_model_and_temperature(
        self,
        setting_key_pair: Tuple[SettingKeys, SettingKeys],
        default_model: str = OPENAI_MODEL,
        default_temperature: float = DEFAULT_TEMPERATURE,
    ) -> Tuple[str, float]:
        model_key, temp_key = (key.value.upper() for key in setting_key_pair)

        model = self.environ.get(model_key, "").strip() or default_model

        temp_value = self.environ.get(temp_key)
        if temp_value is None:
            return model, default_temperature
        try:
            temperature = float(temp_value)
        except ValueError:
            logger.warning(f"Could not parse temperature setting {temp_key}={temp_value!r}, using default")
            temperature = default_temperature

        return model, temperature

    def character_identification(self) -> Tuple[str, float]:
        return self.get_model_and_temperature(
            (
                SettingKeys.CHARACTER_IDENTIFICATION_MODEL,
                SettingKeys.CHARACTER_IDENTIFICATION_TEMPERATURE,
            ),
            default_temperature=0.2,
        )

    def profile_generation(self) -> Tuple[str, float]:
        return self.get_model_and_temperature(
            (SettingKeys.PROFILE_GENERATION_MODEL, SettingKeys.PROFILE_GENERATION_TEMPERATURE)
        )

    def event_extraction(self) -> Tuple[str, float]:
        return self.get_model_and_temperature(
            (SettingKeys.EVENT_EXTRACTION_MODEL, SettingKeys.EVENT_EXTRACTION_TEMPERATURE),
            default_temperature=0.2,
        )

    def perspective_generation(self) -> Tuple[str, float]:
        return self.get_model_and_temperature(
            (
                SettingKeys.PERSPECTIVE_GENERATION_MODEL,
                SettingKeys.PERSPECTIVE_GENERATION_TEMPERATURE,
            ),
            default_temperature=0.7,
        )
