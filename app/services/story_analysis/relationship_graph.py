from typing import List

from app.schemas.story_analysis import Character, RelationshipEdge, RelationshipGraph


def build_relationship_graph(characters: List[Character]) -> RelationshipGraph:
    """One directed edge per declared relationship. No dedup, no symmetry."""
    edges = []
    for character in characters:
        if not character.profile:
            continue
        for target, relationship in character.profile.relationships.items():
            edges.append(
                RelationshipEdge(
                    source=character.name,
                    target=target,
                    type=relationship.type,
                    strength=relationship.strength,
                )
            )
    return RelationshipGraph(nodes=list(characters), edges=edges)
