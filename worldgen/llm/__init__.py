"""LLM integration components.

- `client.py`: GenerationClient protocol and the LiteLLM-backed client
- `extractor.py`: JSON recovery from free-form model output
- `prompt_loader.py`: Prompt template loading utility
- `prompts/`: Prompt templates, one subdirectory per category
"""

from worldgen.llm.client import (
    GenerationClient,
    LiteLLMGenerationClient,
    LLMResponse,
    get_completion,
    get_model_string,
)
from worldgen.llm.extractor import extract_json
from worldgen.llm.prompt_loader import get_loader

__all__ = [
    "GenerationClient",
    "LiteLLMGenerationClient",
    "LLMResponse",
    "get_completion",
    "get_model_string",
    "extract_json",
    "get_loader",
]
