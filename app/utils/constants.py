from enum import Enum


class SettingKeys(Enum):
    CHARACTER_IDENTIFICATION_MODEL = "character_identification_model"
    CHARACTER_IDENTIFICATION_TEMPERATURE = "character_identification_temperature"

    PROFILE_GENERATION_MODEL = "profile_generation_model"
    PROFILE_GENERATION_TEMPERATURE = "profile_generation_temperature"

    EVENT_EXTRACTION_MODEL = "event_extraction_model"
    EVENT_EXTRACTION_TEMPERATURE = "event_extraction_temperature"

    PERSPECTIVE_GENERATION_MODEL = "perspective_generation_model"
    PERSPECTIVE_GENERATION_TEMPERATURE = "perspective_generation_temperature"


class AnalysisStage(str, Enum):
    CHARACTER_IDENTIFICATION = "character_identification"
    PROFILE_GENERATION = "profile_generation"
    EVENT_EXTRACTION = "event_extraction"
    PERSPECTIVE_GENERATION = "perspective_generation"
    RELATIONSHIP_GRAPH = "relationship_graph"
