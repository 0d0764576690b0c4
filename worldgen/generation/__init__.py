"""Structured world generation.

- `pipeline.py`: WorldGenerationPipeline, the public entry point
- `prompts.py`: Instruction building from a GenerationRequest
- `normalizer.py`: Raw JSON to validated records
- `naming.py`: World name uniqueness
- `fallbacks.py`: Hand-authored substitute results
- `universes.py`: Reference universe genre table
"""

from worldgen.generation.pipeline import (
    WorldGenerationPipeline,
    analyze_description,
    generate_test_world,
    generate_world,
)

__all__ = [
    "WorldGenerationPipeline",
    "generate_world",
    "analyze_description",
    "generate_test_world",
]
