import math
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def clamp_int(value: Any, low: int, high: int, default: int) -> int:
    """Coerce a loosely typed model value into an int within [low, high]."""
    if isinstance(value, bool) or value is None:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    # json.loads yields inf/nan for 1e999, Infinity and NaN
    if not math.isfinite(number):
        return default
    return max(low, min(high, int(round(number))))


def _as_text_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None]
    return [str(value)]


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase keys and serializes with camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EmotionType(str, Enum):
    ANGER = "anger"
    JOY = "joy"
    FEAR = "fear"
    SADNESS = "sadness"
    SURPRISE = "surprise"
    DISGUST = "disgust"
    NEUTRAL = "neutral"

    @classmethod
    def parse(cls, value: Any) -> Optional["EmotionType"]:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class CharacterRole(str, Enum):
    MAJOR = "major"
    MINOR = "minor"


class EmotionData(CamelModel):
    primary: EmotionType = EmotionType.NEUTRAL
    secondary: Optional[EmotionType] = None
    intensity: int = 5

    @field_validator("primary", mode="before")
    @classmethod
    def coerce_primary(cls, value):
        return EmotionType.parse(value) or EmotionType.NEUTRAL

    @field_validator("secondary", mode="before")
    @classmethod
    def coerce_secondary(cls, value):
        return EmotionType.parse(value)

    @field_validator("intensity", mode="before")
    @classmethod
    def clamp_intensity(cls, value):
        return clamp_int(value, 1, 10, default=5)


class Relationship(CamelModel):
    type: str = ""
    description: str = ""
    strength: int = 5

    @field_validator("type", "description", mode="before")
    @classmethod
    def coerce_text(cls, value):
        return "" if value is None else str(value)

    @field_validator("strength", mode="before")
    @classmethod
    def clamp_strength(cls, value):
        return clamp_int(value, 1, 10, default=5)


class CharacterProfile(CamelModel):
    personality: List[str] = Field(default_factory=list)
    motivations: List[str] = Field(default_factory=list)
    background: str = ""
    biases: List[str] = Field(default_factory=list)
    relationships: Dict[str, Relationship] = Field(default_factory=dict)
    emotional_baseline: EmotionData = Field(default_factory=EmotionData)

    @field_validator("personality", "motivations", "biases", mode="before")
    @classmethod
    def coerce_lists(cls, value):
        return _as_text_list(value)

    @field_validator("background", mode="before")
    @classmethod
    def coerce_background(cls, value):
        return "" if value is None else str(value)

    @field_validator("relationships", mode="before")
    @classmethod
    def drop_malformed_relationships(cls, value):
        if not isinstance(value, dict):
            return {}
        return {str(name): rel for name, rel in value.items() if isinstance(rel, dict)}

    @field_validator("emotional_baseline", mode="before")
    @classmethod
    def coerce_baseline(cls, value):
        return value if isinstance(value, (dict, EmotionData)) else {}


class Character(CamelModel):
    name: str = Field(min_length=1)
    role: CharacterRole = CharacterRole.MINOR
    confidence_score: int = 50
    summary: str = ""
    profile: Optional[CharacterProfile] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("role", mode="before")
    @classmethod
    def coerce_role(cls, value):
        if isinstance(value, str) and value.strip().lower() == CharacterRole.MAJOR.value:
            return CharacterRole.MAJOR
        return CharacterRole.MINOR

    @field_validator("confidence_score", mode="before")
    @classmethod
    def clamp_confidence(cls, value):
        return clamp_int(value, 0, 100, default=50)

    @field_validator("summary", mode="before")
    @classmethod
    def coerce_summary(cls, value):
        return "" if value is None else str(value)


class CharacterPerspective(CamelModel):
    first_person_narrative: str = Field(min_length=1)
    emotion: EmotionData = Field(default_factory=EmotionData)
    thoughts_about_others: Dict[str, str] = Field(default_factory=dict)
    perception_accuracy: int = 50

    @field_validator("emotion", mode="before")
    @classmethod
    def coerce_emotion(cls, value):
        return value if isinstance(value, (dict, EmotionData)) else {}

    @field_validator("thoughts_about_others", mode="before")
    @classmethod
    def coerce_thoughts(cls, value):
        if not isinstance(value, dict):
            return {}
        return {str(name): str(thought) for name, thought in value.items() if thought is not None}

    @field_validator("perception_accuracy", mode="before")
    @classmethod
    def clamp_accuracy(cls, value):
        return clamp_int(value, 0, 100, default=50)


class StoryEvent(CamelModel):
    id: str
    title: str
    description: str = ""
    time_position: float = Field(ge=0, le=100)
    character_perspectives: Dict[str, CharacterPerspective] = Field(default_factory=dict)


class RelationshipEdge(CamelModel):
    source: str
    target: str
    type: str
    strength: int


class RelationshipGraph(CamelModel):
    nodes: List[Character] = Field(default_factory=list)
    edges: List[RelationshipEdge] = Field(default_factory=list)


class StoryAnalysisResult(CamelModel):
    characters: List[Character]
    events: List[StoryEvent]
    relationship_graph: RelationshipGraph


# Request / response schemas
class StoryAnalysisRequest(BaseModel):
    story_text: str = Field(min_length=1)

    @field_validator("story_text")
    @classmethod
    def reject_blank(cls, value):
        if not value.strip():
            raise ValueError("story_text must not be blank")
        return value


class TimelineViewRequest(BaseModel):
    result: StoryAnalysisResult
    selected_character: Optional[str] = None


class TimelineEvent(CamelModel):
    event: StoryEvent
    marker_position: float


class TimelineView(CamelModel):
    characters: List[Character]
    events: List[TimelineEvent]
    emotion_colors: Dict[str, str]
    emotion_text_colors: Dict[str, str]
    selected_character: Optional[str] = None
