# Prompts for the story analysis pipeline.
# Each stage sends one user prompt; replies are expected to contain JSON.

STORY_ANALYSIS_SYSTEM_PROMPT = (
    "You are a literary analysis assistant. You read short stories closely and answer "
    "only with the JSON structure you are asked for, without commentary."
)

MODEL_CHECK_PROMPT = "Write a single sentence about storytelling."

CHARACTER_IDENTIFICATION_PROMPT_TEMPLATE = """
Analyze the following story and identify all characters. For each character, provide:
1. Name
2. Role (major or minor)
3. Confidence score (0-100) that this is a distinct character in the story
4. Brief summary of their role in the story

Format your response as a JSON array of character objects with this structure:
[
  {
    "name": "Character name",
    "role": "major",
    "confidenceScore": 90,
    "summary": "One or two sentences about their role"
  }
]

Story:
{{story_text}}
"""

PROFILE_GENERATION_PROMPT_TEMPLATE = """
Analyze the character "{{character_name}}" in the following story. Create a detailed profile including:

1. Personality traits (list of 3-5 strings)
2. Core motivations (list of 2-4 strings)
3. Background and history (paragraph)
4. Biases and worldview (list of 2-4 strings)
5. Emotional baseline (primary emotion from: {{emotions}}; optional secondary emotion, intensity 1-10)

You MUST format your response as a valid JSON object with the following structure:
{
  "personality": ["trait1", "trait2"],
  "motivations": ["motivation1", "motivation2"],
  "background": "Character's background story...",
  "biases": ["bias1", "bias2"],
  "emotionalBaseline": {
    "primary": "emotion",
    "secondary": "emotion",
    "intensity": 5
  },
  "relationships": {}
}

Leave "relationships" empty. Do not include any explanations, only return the JSON object.

Story:
{{story_text}}
"""

EVENT_EXTRACTION_PROMPT_TEMPLATE = """
Analyze the following story and extract 5-10 key events in chronological order. For each event, provide:

1. A brief title
2. A description of what happens
3. A relative time position (0-100, where 0 is the start and 100 is the end)

The story features these characters: {{character_names}}

Format your response as a JSON array of event objects with this structure:
[
  {
    "title": "Event title",
    "description": "What happens",
    "timePosition": 0
  }
]

Story:
{{story_text}}
"""

PERSPECTIVE_GENERATION_PROMPT_TEMPLATE = """
Event: "{{event_title}}" - {{event_description}}

Rewrite this event from the first-person perspective of {{character_name}}. Consider their personality traits, motivations, and biases.

{{character_context}}

You MUST format your response as a valid JSON object with this exact structure:
{
  "firstPersonNarrative": "Detailed first-person account...",
  "emotion": {
    "primary": "emotion",
    "secondary": "emotion",
    "intensity": 5
  },
  "thoughtsAboutOthers": {
    "Character1": "Thoughts about Character1"
  },
  "perceptionAccuracy": 80
}

"primary" and "secondary" must be one of: {{emotions}}. "secondary" is optional.
"intensity" is 1-10. "perceptionAccuracy" (0-100) is how accurately {{character_name}} perceives what is really happening.
Only include these other characters in "thoughtsAboutOthers": {{other_characters}}

Do not include any explanations, only return the JSON object.

Story context:
{{story_text}}
"""
