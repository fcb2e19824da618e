from app.services.story_analysis.character_identifier import identify_characters
from app.services.story_analysis.event_extractor import extract_story_events
from app.services.story_analysis.perspective_generator import generate_perspectives
from app.services.story_analysis.profile_generator import generate_character_profiles
from app.services.story_analysis.relationship_graph import build_relationship_graph
from app.services.story_analysis.story_analyzer import StoryAnalyzer, analyze_story
from app.services.story_analysis.timeline_view import build_timeline_view

__all__ = [
    "StoryAnalyzer",
    "analyze_story",
    "build_relationship_graph",
    "build_timeline_view",
    "extract_story_events",
    "generate_character_profiles",
    "generate_perspectives",
    "identify_characters",
]
