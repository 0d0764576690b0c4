"""
LLM client - Provider-agnostic LLM integration using LiteLLM

Exposes the GenerationClient boundary used by the generation pipeline and a
LiteLLM-backed implementation of it.
"""

import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 4096


@dataclass
class LLMResponse:
    """Raw text returned by a generation backend, plus call metadata"""
    content: str | None
    model: str = ""
    finish_reason: str = "unknown"
    duration_ms: int = 0
    tokens_input: int | None = None
    tokens_output: int | None = None
    tokens_total: int | None = None


@runtime_checkable
class GenerationClient(Protocol):
    """Protocol for a configured text-generation backend.

    Implementations may raise on transport errors or return empty content;
    the pipeline treats both as a generation failure. Bounding the wait is
    the implementation's job.
    """

    async def generate(self, prompt: str) -> LLMResponse:
        """Submit a prompt and return the raw model text."""
        ...


# LiteLLM routes on a provider prefix; OpenAI models go unprefixed
MODEL_PREFIXES = {
    "gemini": "gemini/",
    "anthropic": "anthropic/",
    "ollama": "ollama/",
}

API_KEY_VARS = {
    "gemini": "GEMINI_API_KEY",
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


def get_provider() -> str:
    """Provider name from LLM_PROVIDER (gemini, openai, anthropic, ollama)"""
    return os.getenv("LLM_PROVIDER", "gemini").strip().lower()


def get_model() -> str:
    """Get configured model name for generation.

    Uses WORLDGEN_LLM_MODEL if set, otherwise falls back to LLM_MODEL.
    """
    load_dotenv(override=True)

    worldgen_model = os.getenv("WORLDGEN_LLM_MODEL")
    llm_model = os.getenv("LLM_MODEL")
    default_model = "gemini-2.5-flash"

    model = worldgen_model or llm_model or default_model

    logger.debug(f"Model selection: WORLDGEN_LLM_MODEL={worldgen_model}, LLM_MODEL={llm_model}, using={model}")

    return model


def get_model_string() -> str:
    """Model name as LiteLLM expects it, e.g. 'gemini/gemini-2.5-flash'"""
    return MODEL_PREFIXES.get(get_provider(), "") + get_model()


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={value!r}, using {default}")
        return default


def get_timeout() -> float:
    """Request timeout in seconds"""
    return _env_float("WORLDGEN_LLM_TIMEOUT", DEFAULT_TIMEOUT)


def get_temperature() -> float:
    """Sampling temperature for generation calls"""
    return _env_float("WORLDGEN_LLM_TEMPERATURE", DEFAULT_TEMPERATURE)


def get_max_tokens() -> int:
    """Maximum response length for generation calls"""
    return int(_env_float("WORLDGEN_LLM_MAX_TOKENS", DEFAULT_MAX_TOKENS))


async def get_completion(
    messages: list[dict[str, str]],
    model: str | None = None,
    temperature: float = DEFAULT_TEMPERATURE,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    response_format: dict | None = None,
    timeout: float | None = None,
) -> LLMResponse:
    """
    Get completion from configured LLM provider.

    Args:
        messages: List of message dicts with 'role' and 'content'
        model: Optional model override
        temperature: Creativity (0-1)
        max_tokens: Maximum response length
        response_format: Optional format specification
        timeout: Request timeout in seconds

    Returns:
        LLMResponse with the generated text
    """
    import litellm

    _configure_provider()

    model_string = model or get_model_string()

    logger.info(f"LLM Request: model={model_string}, temperature={temperature}, max_tokens={max_tokens}")

    kwargs: dict[str, Any] = {
        "model": model_string,
        "messages": messages,
        "temperature": temperature,
        "max_tokens": max_tokens,
    }

    # Not all models support JSON mode
    if response_format:
        kwargs["response_format"] = response_format
    if timeout is not None:
        kwargs["timeout"] = timeout

    started = time.monotonic()
    try:
        logger.debug("Sending request to LiteLLM...")
        response = await litellm.acompletion(**kwargs)
    except Exception as e:
        logger.error(f"LLM Error: {type(e).__name__}: {e}")
        raise

    duration_ms = int((time.monotonic() - started) * 1000)
    content = response.choices[0].message.content
    finish_reason = getattr(response.choices[0], "finish_reason", None) or "unknown"

    usage = getattr(response, "usage", None)
    if usage:
        logger.info(f"LLM Usage: prompt_tokens={getattr(usage, 'prompt_tokens', 'N/A')}, "
                    f"completion_tokens={getattr(usage, 'completion_tokens', 'N/A')}, "
                    f"total_tokens={getattr(usage, 'total_tokens', 'N/A')}")

    logger.info(f"LLM Response: finish_reason={finish_reason}, content_length={len(content) if content else 0}, duration_ms={duration_ms}")

    if finish_reason == "length":
        logger.warning(f"Response TRUNCATED due to max_tokens limit ({max_tokens}).")

    if not content:
        logger.warning("LLM returned empty content")
    else:
        preview = content[:200] + "..." if len(content) > 200 else content
        logger.debug(f"Response preview: {preview}")

    return LLMResponse(
        content=content,
        model=model_string,
        finish_reason=finish_reason,
        duration_ms=duration_ms,
        tokens_input=getattr(usage, "prompt_tokens", None) if usage else None,
        tokens_output=getattr(usage, "completion_tokens", None) if usage else None,
        tokens_total=getattr(usage, "total_tokens", None) if usage else None,
    )


def _configure_provider():
    """Check the provider's API key and point LiteLLM at a local Ollama server"""
    import litellm

    provider = get_provider()
    key_var = API_KEY_VARS.get(provider)
    if key_var:
        api_key = os.getenv(key_var)
        if not api_key:
            logger.warning(f"{key_var} not set; {provider} requests will fail")
        elif provider == "openai":
            litellm.api_key = api_key
    elif provider == "ollama":
        os.environ["OLLAMA_API_BASE"] = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
        logger.debug(f"Using Ollama at {os.environ['OLLAMA_API_BASE']}")


class LiteLLMGenerationClient:
    """GenerationClient backed by LiteLLM.

    Settings left as None are read from the environment on each call, so a
    changed .env is picked up without rebuilding the client.
    """

    def __init__(
        self,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout: float | None = None,
        system_message: str | None = None,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.system_message = system_message

    async def generate(self, prompt: str) -> LLMResponse:
        messages = []
        if self.system_message:
            messages.append({"role": "system", "content": self.system_message})
        messages.append({"role": "user", "content": prompt})

        return await get_completion(
            messages,
            model=self.model,
            temperature=self.temperature if self.temperature is not None else get_temperature(),
            max_tokens=self.max_tokens if self.max_tokens is not None else get_max_tokens(),
            response_format={"type": "json_object"},
            timeout=self.timeout if self.timeout is not None else get_timeout(),
        )
