"""
World generation pipeline - the public entry point for each generation kind.

Each call runs:

    request -> prompt -> raw text -> extracted JSON -> normalized record
            -> unique name (world kind only) -> result

Any failure along the way is logged and replaced by the fallback catalog
entry for that kind. Callers always receive a usable record; there is no
error outcome to handle.

Example:
    >>> pipeline = WorldGenerationPipeline()
    >>> world = await pipeline.generate_world("The Office", "set_in", ["Scranton"])
    >>> suggestions = await pipeline.analyze_description("A desert of sky-whales")
"""

import logging
import random
from collections.abc import Iterable

from worldgen.errors import GenerationError, TransportFailure
from worldgen.generation.fallbacks import fallback_suggestion_set, fallback_world
from worldgen.generation.naming import resolve_unique_name
from worldgen.generation.normalizer import normalize_suggestions, normalize_world
from worldgen.generation.prompts import build_prompt
from worldgen.generation.universes import TV_MOVIE_UNIVERSES
from worldgen.llm.client import GenerationClient, LiteLLMGenerationClient
from worldgen.llm.extractor import extract_json
from worldgen.models.generation import GenerationKind, GenerationRequest, Relationship
from worldgen.models.world import GeneratedWorld, SuggestionSet

logger = logging.getLogger(__name__)


def _name_set(names: Iterable[str] | None) -> frozenset[str]:
    """Collect the string entries of names; anything else is ignored."""
    if isinstance(names, str):
        return frozenset({names})
    try:
        return frozenset(name for name in (names or ()) if isinstance(name, str))
    except TypeError:
        logger.warning(f"Ignoring non-iterable existing_names: {names!r}")
        return frozenset()


class WorldGenerationPipeline:
    """Sequences prompt building, generation, extraction and normalization.

    Holds no state between calls besides its client, so one instance can
    serve concurrent calls.
    """

    def __init__(self, client: GenerationClient | None = None):
        self.client = client or LiteLLMGenerationClient()

    async def _complete(self, prompt: str) -> str:
        """Await the client once and return non-empty text."""
        try:
            response = await self.client.generate(prompt)
        except Exception as e:
            raise TransportFailure(f"{type(e).__name__}: {e}") from e

        content = getattr(response, "content", None)
        if not isinstance(content, str) or not content.strip():
            raise TransportFailure("Generation client returned no content")
        return content

    async def generate_world(
        self,
        reference: str | None,
        relationship: Relationship | str | None,
        existing_names: Iterable[str] = (),
        suggested_name: str | None = None,
    ) -> GeneratedWorld:
        """
        Generate a world set in, or based on, a reference universe.

        Args:
            reference: Name of the source universe (None for an original world)
            relationship: "set_in" or "based_on"
            existing_names: World names the result must not collide with
            suggested_name: Name to adopt verbatim when feasible

        Returns:
            A generated world, or the fallback world if generation failed
        """
        existing = _name_set(existing_names)

        logger.info(f"Generating world: reference={reference}, relationship={relationship}")
        try:
            request = GenerationRequest(
                kind=GenerationKind.WORLD,
                reference=reference or None,
                relationship=relationship or None,
                existing_names=existing,
                suggested_name=suggested_name or None,
            )
            prompt = build_prompt(request)
            text = await self._complete(prompt)
            world = normalize_world(extract_json(text), request)
        except Exception as e:
            self._log_failure("World generation", e)
            world = fallback_world()

        world.name = resolve_unique_name(world.name, existing)
        logger.info(
            f"World ready: name={world.name!r}, theme={world.theme!r}, "
            f"attributes={len(world.attributes)}, skills={len(world.skills)}"
        )
        return world

    async def analyze_description(self, description: str) -> SuggestionSet:
        """
        Suggest attributes and skills for a free-text world description.

        Returns:
            A suggestion set with every entry unaccepted, or the fallback
            suggestion set if generation failed
        """
        preview = description[:100] + "..." if isinstance(description, str) and len(description) > 100 else description
        logger.info(f"Analyzing world description: {preview}")
        try:
            request = GenerationRequest(
                kind=GenerationKind.SUGGESTION_SET,
                description=description,
            )
            prompt = build_prompt(request)
            text = await self._complete(prompt)
            suggestions = normalize_suggestions(extract_json(text))
        except Exception as e:
            self._log_failure("Description analysis", e)
            return fallback_suggestion_set()

        logger.info(
            f"Suggestions ready: attributes={len(suggestions.attributes)}, skills={len(suggestions.skills)}"
        )
        return suggestions

    async def generate_test_world(self, rng: random.Random | None = None) -> GeneratedWorld:
        """Generate a world inspired by a randomly chosen reference universe."""
        reference = (rng or random).choice(TV_MOVIE_UNIVERSES)
        logger.info(f"Test world reference: {reference}")
        return await self.generate_world(reference, Relationship.BASED_ON)

    @staticmethod
    def _log_failure(stage: str, error: Exception) -> None:
        if isinstance(error, GenerationError):
            logger.warning(f"{stage} failed ({type(error).__name__}): {error}. Using fallback.")
        else:
            logger.exception(f"{stage} failed unexpectedly: {error}. Using fallback.")


async def generate_world(
    reference: str | None,
    relationship: Relationship | str | None,
    existing_names: Iterable[str] = (),
    suggested_name: str | None = None,
    client: GenerationClient | None = None,
) -> GeneratedWorld:
    """Generate a world with the default (or given) client. Never raises."""
    pipeline = WorldGenerationPipeline(client)
    return await pipeline.generate_world(reference, relationship, existing_names, suggested_name)


async def analyze_description(
    description: str,
    client: GenerationClient | None = None,
) -> SuggestionSet:
    """Suggest attributes and skills for a description. Never raises."""
    return await WorldGenerationPipeline(client).analyze_description(description)


async def generate_test_world(client: GenerationClient | None = None) -> GeneratedWorld:
    """Generate a world inspired by a random entry of TV_MOVIE_UNIVERSES."""
    return await WorldGenerationPipeline(client).generate_test_world()
