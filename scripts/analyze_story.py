#!/usr/bin/env python3
import argparse
import asyncio
import json
import logging
import os
import sys

# Add the parent directory to the path so we can import from the app
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.logging_config import configure_logging
from app.services.story_analysis import StoryAnalyzer, build_timeline_view
from app.utils.exceptions import (
    CharacterNotFoundException,
    ConfigurationError,
    OrchestrationError,
)

logger = logging.getLogger("analyze_story")


def run(story_text: str, timeline: bool = False, character: str | None = None) -> dict:
    analyzer = StoryAnalyzer()
    result = asyncio.run(analyzer.analyze(story_text))
    if timeline or character:
        view = build_timeline_view(result, character)
        return view.model_dump(mode="json", by_alias=True)
    return result.model_dump(mode="json", by_alias=True)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Analyze a short story into characters, events and perspectives")
    parser.add_argument("story_file", help="Path to a UTF-8 text file containing the story")
    parser.add_argument("--timeline", action="store_true",
                        help="Print the sorted timeline view instead of the raw analysis result")
    parser.add_argument("--character", default=None,
                        help="Limit the timeline view to one character's perspectives")
    parser.add_argument("--output", default=None, help="Write JSON to this file instead of stdout")

    args = parser.parse_args(argv)
    configure_logging()

    with open(args.story_file, encoding="utf-8") as f:
        story_text = f.read()

    try:
        payload = run(story_text, timeline=args.timeline, character=args.character)
    except ConfigurationError as e:
        logger.error(str(e))
        return 2
    except OrchestrationError as e:
        logger.error(str(e))
        return 1
    except CharacterNotFoundException as e:
        logger.error(e.detail["message"])
        return 1

    output = json.dumps(payload, indent=2, ensure_ascii=False)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
        print(f"Analysis saved to: {args.output}")
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
