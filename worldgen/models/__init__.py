"""Pydantic models for worldgen"""

from worldgen.models.generation import (
    Difficulty,
    GenerationKind,
    GenerationRequest,
    Relationship,
)
from worldgen.models.world import (
    AttributeSuggestion,
    GeneratedAttribute,
    GeneratedSkill,
    GeneratedWorld,
    SkillSuggestion,
    SuggestionSet,
    WorldSettings,
)

__all__ = [
    # Request models
    "GenerationRequest",
    "GenerationKind",
    "Relationship",
    "Difficulty",
    # World models
    "GeneratedAttribute",
    "GeneratedSkill",
    "GeneratedWorld",
    "WorldSettings",
    # Suggestion models
    "AttributeSuggestion",
    "SkillSuggestion",
    "SuggestionSet",
]
