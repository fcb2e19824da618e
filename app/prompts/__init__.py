"""
Prompt templates for the story analysis stages.

Templates use ``{{name}}`` placeholders so that literal JSON braces in the
instructions need no escaping.
"""

import re

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")


def format_prompt(template: str, **kwargs) -> str:
    """
    Fill every ``{{name}}`` placeholder in a template in a single pass.

    Substituted values are never rescanned, so story text that happens to
    contain ``{{...}}`` is inserted verbatim.

    Raises:
        KeyError: if the template names a placeholder that was not supplied.

    Example:
        >>> format_prompt("Analyze {{name}}.", name="Rowan")
        'Analyze Rowan.'
    """

    def substitute(match: re.Match) -> str:
        key = match.group(1)
        if key not in kwargs:
            raise KeyError(f"Missing value for prompt placeholder '{key}'")
        return str(kwargs[key])

    return PLACEHOLDER_PATTERN.sub(substitute, template)
