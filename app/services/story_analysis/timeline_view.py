"""Ordering and presentation rules for displaying an analysis result."""

from typing import List, Optional

from app.schemas.story_analysis import (
    Character,
    CharacterRole,
    EmotionType,
    StoryAnalysisResult,
    StoryEvent,
    TimelineEvent,
    TimelineView,
)
from app.utils.exceptions import CharacterNotFoundException

EMOTION_COLORS = {
    EmotionType.ANGER.value: "bg-red-500",
    EmotionType.JOY.value: "bg-yellow-400",
    EmotionType.FEAR.value: "bg-purple-500",
    EmotionType.SADNESS.value: "bg-blue-500",
    EmotionType.SURPRISE.value: "bg-orange-500",
    EmotionType.DISGUST.value: "bg-green-500",
    EmotionType.NEUTRAL.value: "bg-gray-400",
}

EMOTION_TEXT_COLORS = {
    EmotionType.ANGER.value: "text-red-700",
    EmotionType.JOY.value: "text-yellow-700",
    EmotionType.FEAR.value: "text-purple-700",
    EmotionType.SADNESS.value: "text-blue-700",
    EmotionType.SURPRISE.value: "text-orange-700",
    EmotionType.DISGUST.value: "text-green-700",
    EmotionType.NEUTRAL.value: "text-gray-700",
}


def sort_events_for_timeline(events: List[StoryEvent]) -> List[StoryEvent]:
    # Stable, so tied positions keep extraction order
    return sorted(events, key=lambda event: event.time_position)


def sort_characters_for_listing(characters: List[Character]) -> List[Character]:
    return sorted(
        characters,
        key=lambda character: (character.role != CharacterRole.MAJOR, character.name),
    )


def marker_position(event: StoryEvent, index: int, count: int) -> float:
    if event.time_position > 0:
        return event.time_position
    return index / max(count - 1, 1) * 100


def build_timeline_view(
    result: StoryAnalysisResult, selected_character: Optional[str] = None
) -> TimelineView:
    """Sorted characters and events; with a selection, each event keeps only that character's view."""
    if selected_character is not None and selected_character not in {
        character.name for character in result.characters
    }:
        raise CharacterNotFoundException(selected_character)

    events = sort_events_for_timeline(result.events)
    timeline_events = []
    for index, event in enumerate(events):
        if selected_character is not None:
            perspective = event.character_perspectives.get(selected_character)
            perspectives = {selected_character: perspective} if perspective else {}
            event = event.model_copy(update={"character_perspectives": perspectives})
        timeline_events.append(
            TimelineEvent(event=event, marker_position=marker_position(event, index, len(events)))
        )

    return TimelineView(
        characters=sort_characters_for_listing(result.characters),
        events=timeline_events,
        emotion_colors=EMOTION_COLORS,
        emotion_text_colors=EMOTION_TEXT_COLORS,
        selected_character=selected_character,
    )
