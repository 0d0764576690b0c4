"""
worldgen - Structured world generation from LLM output.

Turns free-text model responses into validated world definitions and
attribute/skill suggestion sets, falling back to hand-authored content
whenever generation fails.
"""

from worldgen.generation import (
    WorldGenerationPipeline,
    analyze_description,
    generate_test_world,
    generate_world,
)

__version__ = "0.1.0"

__all__ = [
    "WorldGenerationPipeline",
    "generate_world",
    "analyze_description",
    "generate_test_world",
    "__version__",
]
