"""Integration tests for WorldGenerationPipeline.

Tests cover:
- Generated results for both kinds with mocked clients
- Fallback on transport, extraction and schema failures
- Range and acceptance invariants on every path
- Name uniqueness for generated and fallback worlds
- Fallback determinism
- Concurrent calls
"""

import asyncio
import json
import logging
import random

import pytest

from tests.mocks.llm import (
    AttributePayload,
    FailingGenerationClient,
    MockGenerationClient,
    SkillPayload,
    suggestion_payload,
    world_payload,
)
from worldgen.generation.fallbacks import (
    FALLBACK_WORLD_NAME,
    fallback_suggestion_set,
    fallback_world,
)
from worldgen.generation.pipeline import (
    WorldGenerationPipeline,
    analyze_description,
    generate_world,
)
from worldgen.generation.universes import TV_MOVIE_UNIVERSES
from worldgen.models.world import GeneratedWorld, SuggestionSet

FANTASY_WORDS = ("magic", "spell", "dragon", "sword", "arcane", "wizard", "elf")


def assert_ranges_valid(entries) -> None:
    for entry in entries:
        assert entry.min_value < entry.max_value, entry
        assert entry.min_value <= entry.base_value <= entry.max_value, entry


def assert_valid_world(world: GeneratedWorld) -> None:
    assert isinstance(world, GeneratedWorld)
    assert world.name and world.theme and world.description
    assert world.attributes and world.skills
    assert world.settings.max_attributes == len(world.attributes)
    assert world.settings.max_skills == len(world.skills)
    assert_ranges_valid(world.attributes)
    assert_ranges_valid(world.skills)


def assert_valid_suggestions(suggestions: SuggestionSet) -> None:
    assert isinstance(suggestions, SuggestionSet)
    assert suggestions.attributes and suggestions.skills
    assert_ranges_valid(suggestions.attributes)
    assert_ranges_valid(suggestions.skills)
    assert all(a.accepted is False for a in suggestions.attributes)
    assert all(s.accepted is False for s in suggestions.skills)


class TestAnalyzeDescription:
    """Tests for suggestion-set generation."""

    @pytest.mark.asyncio
    async def test_valid_payload_is_used(self) -> None:
        """A valid two-attribute/two-skill payload is returned as-is, unaccepted."""
        client = MockGenerationClient({"default": suggestion_payload()})
        pipeline = WorldGenerationPipeline(client)

        result = await pipeline.analyze_description("A fantasy world with magic and dragons")

        assert [a.name for a in result.attributes] == ["Might", "Arcana"]
        assert [s.name for s in result.skills] == ["Dragon Riding", "Spellcasting"]
        assert_valid_suggestions(result)
        client.assert_called(times=1)
        assert "A fantasy world with magic and dragons" in client.get_last_call().prompt

    @pytest.mark.asyncio
    async def test_network_error_returns_fallback(self, failing_client) -> None:
        result = await WorldGenerationPipeline(failing_client).analyze_description(
            "A fantasy world with magic and dragons"
        )

        assert len(result.attributes) == 6
        assert len(result.skills) == 12
        assert result.attributes[0].name == "Strength"
        assert result.skills[0].name == "Combat"
        assert result == fallback_suggestion_set()
        assert failing_client.calls == 1

    @pytest.mark.asyncio
    async def test_accepted_flags_from_model_are_ignored(self) -> None:
        payload = json.loads(suggestion_payload())
        for entry in payload["attributes"] + payload["skills"]:
            entry["accepted"] = True
        client = MockGenerationClient({"default": json.dumps(payload)})

        result = await WorldGenerationPipeline(client).analyze_description("Sky pirates")

        assert_valid_suggestions(result)

    @pytest.mark.asyncio
    async def test_oversized_number_is_logged_as_extraction_failure(self, caplog) -> None:
        client = MockGenerationClient(
            {"default": '{"attributes": [{"name": "A", "minValue": ' + "9" * 5000 + "}]}"}
        )

        with caplog.at_level(logging.WARNING, logger="worldgen.generation.pipeline"):
            result = await WorldGenerationPipeline(client).analyze_description("Sky pirates")

        assert result == fallback_suggestion_set()
        assert any("ExtractionFailure" in r.getMessage() for r in caplog.records)
        assert not any(r.levelno >= logging.ERROR for r in caplog.records)

    @pytest.mark.asyncio
    async def test_fenced_response_with_prose(self) -> None:
        client = MockGenerationClient(
            {"default": "Here you go:\n```json\n" + suggestion_payload() + "\n```\nEnjoy!"}
        )

        result = await WorldGenerationPipeline(client).analyze_description("Sky pirates")

        assert result.attributes[0].name == "Might"

    @pytest.mark.parametrize(
        "response",
        [
            None,
            "",
            "I cannot do that.",
            '{"attributes": [{"name": "Might"}]}',
            '{"attributes": [], "skills": []}',
            '{"attributes": "Might", "skills": "Flying"}',
            "[1, 2, 3]",
        ],
    )
    @pytest.mark.asyncio
    async def test_bad_responses_return_fallback(self, response) -> None:
        client = MockGenerationClient({"default": response})

        result = await WorldGenerationPipeline(client).analyze_description("Sky pirates")

        assert result == fallback_suggestion_set()
        assert_valid_suggestions(result)

    @pytest.mark.parametrize("description", [None, "", "   ", 42])
    @pytest.mark.asyncio
    async def test_invalid_description_returns_fallback(self, description) -> None:
        client = MockGenerationClient({"default": suggestion_payload()})

        result = await WorldGenerationPipeline(client).analyze_description(description)

        assert result == fallback_suggestion_set()
        client.assert_called(times=0)

    @pytest.mark.asyncio
    async def test_module_level_helper(self, mock_generation_client) -> None:
        result = await analyze_description("Sky pirates", client=mock_generation_client)

        assert result.attributes[0].name == "Might"


class TestGenerateWorld:
    """Tests for world generation."""

    @pytest.mark.asyncio
    async def test_set_in_keeps_reference_genre(self) -> None:
        """A set_in world for a contemporary show stays Modern, with no fantasy skills."""
        client = MockGenerationClient({"default": world_payload(theme="Modern")})

        world = await WorldGenerationPipeline(client).generate_world("The Office", "set_in", [])

        assert world.theme == "Modern"
        assert world.theme != "Fantasy"
        assert_valid_world(world)
        for skill in world.skills:
            text = f"{skill.name} {skill.description}".lower()
            assert not any(word in text for word in FANTASY_WORDS), skill.name

        prompt = client.get_last_call().prompt
        assert "NEVER default to Fantasy" in prompt
        assert "Genre: Modern" in prompt

    @pytest.mark.asyncio
    async def test_world_ranges_and_settings(self) -> None:
        payload = world_payload(
            attributes=[
                AttributePayload(name="Grit", min_value=10, max_value=1, default_value=99),
                AttributePayload(name="Nerve", min_value=None, max_value=None),
            ],
            skills=[
                SkillPayload(name="Riding", difficulty="impossible"),
                SkillPayload(name="Shooting", difficulty="HARD"),
                SkillPayload(name="Gambling", difficulty=None),
            ],
        )
        client = MockGenerationClient({"default": payload})

        world = await WorldGenerationPipeline(client).generate_world("Deadwood", "set_in", [])

        assert_valid_world(world)
        assert (world.attributes[0].min_value, world.attributes[0].max_value) == (1, 10)
        assert world.attributes[0].base_value == 10
        assert world.attributes[1].base_value == 5
        assert [s.difficulty.value for s in world.skills] == ["medium", "hard", "medium"]
        assert world.settings.max_attributes == 2
        assert world.settings.max_skills == 3

    @pytest.mark.asyncio
    async def test_name_collision_gets_suffix(self) -> None:
        client = MockGenerationClient({"default": world_payload(name="Atlantis")})
        pipeline = WorldGenerationPipeline(client)

        first = await pipeline.generate_world("Star Trek", "based_on", {"Atlantis"})
        second = await pipeline.generate_world("Star Trek", "based_on", {"Atlantis", "Atlantis 1"})

        assert first.name == "Atlantis 1"
        assert second.name == "Atlantis 2"

    @pytest.mark.asyncio
    async def test_suggested_name_adopted_and_made_unique(self) -> None:
        client = MockGenerationClient({"default": world_payload(name="Something Else")})
        pipeline = WorldGenerationPipeline(client)

        world = await pipeline.generate_world("Dune", "based_on", ["Sandreach"], "Sandreach")

        assert world.name == "Sandreach 1"
        assert '"Sandreach"' in client.get_last_call().prompt

    @pytest.mark.asyncio
    async def test_transport_failure_returns_fallback(self, failing_client) -> None:
        world = await WorldGenerationPipeline(failing_client).generate_world(
            "The Office", "set_in", []
        )

        assert world == fallback_world()
        assert_valid_world(world)

    @pytest.mark.asyncio
    async def test_fallback_name_is_unique_too(self, failing_client) -> None:
        world = await WorldGenerationPipeline(failing_client).generate_world(
            "The Office", "set_in", [FALLBACK_WORLD_NAME]
        )

        assert world.name == f"{FALLBACK_WORLD_NAME} 1"

    @pytest.mark.parametrize(
        "response",
        [
            None,
            "   ",
            "Here is a world: Atlantis, a sunken city.",
            json.dumps({"name": "Atlantis", "theme": "Fantasy", "attributes": []}),
            json.dumps({"name": "Atlantis", "attributes": [{"name": "A"}], "skills": [{"name": "B"}]}),
        ],
    )
    @pytest.mark.asyncio
    async def test_bad_responses_return_fallback(self, response) -> None:
        client = MockGenerationClient({"default": response})

        world = await WorldGenerationPipeline(client).generate_world("Dune", "set_in", [])

        assert world == fallback_world()

    @pytest.mark.parametrize(
        "reference,relationship,existing",
        [
            ("Dune", "orbiting", []),
            ("Dune", "set_in", 12),
            (None, None, None),
        ],
    )
    @pytest.mark.asyncio
    async def test_odd_inputs_never_raise(self, reference, relationship, existing) -> None:
        client = MockGenerationClient({"default": world_payload()})

        world = await WorldGenerationPipeline(client).generate_world(
            reference, relationship, existing
        )

        assert_valid_world(world)

    @pytest.mark.asyncio
    async def test_original_world_without_reference(self, mock_generation_client) -> None:
        world = await generate_world(None, None, client=mock_generation_client)

        assert_valid_world(world)
        assert "COMPLETELY ORIGINAL" in mock_generation_client.get_last_call().prompt

    @pytest.mark.asyncio
    async def test_unexpected_client_behavior_returns_fallback(self) -> None:
        """A client returning something without content is treated as a failure."""

        class WeirdClient:
            async def generate(self, prompt):
                return {"content": "not an LLMResponse"}

        world = await WorldGenerationPipeline(WeirdClient()).generate_world("Dune", "set_in", [])

        assert world == fallback_world()


class TestFallbackDeterminism:
    """Fallback content is identical across calls."""

    @pytest.mark.asyncio
    async def test_consecutive_failures_identical(self, failing_client) -> None:
        pipeline = WorldGenerationPipeline(failing_client)

        first = await pipeline.analyze_description("Anything")
        second = await pipeline.analyze_description("Anything")
        assert first.model_dump_json() == second.model_dump_json()

        world_a = await pipeline.generate_world("Dune", "set_in", [])
        world_b = await pipeline.generate_world("Dune", "set_in", [])
        assert world_a.model_dump_json() == world_b.model_dump_json()

    @pytest.mark.asyncio
    async def test_mutating_result_does_not_leak(self, failing_client) -> None:
        pipeline = WorldGenerationPipeline(failing_client)

        first = await pipeline.analyze_description("Anything")
        first.attributes[0].accepted = True

        second = await pipeline.analyze_description("Anything")
        assert second.attributes[0].accepted is False


class TestConcurrency:
    """Concurrent calls share no mutable state."""

    @pytest.mark.asyncio
    async def test_batch_generation(self) -> None:
        client = MockGenerationClient(
            {
                "set within the Star Wars universe": world_payload(name="Mos Eisley", theme="Sci-Fi"),
                "set within the Deadwood universe": world_payload(name="Copper Gulch", theme="Western"),
                "default": world_payload(name="Harbor Point", theme="Modern"),
            }
        )
        pipeline = WorldGenerationPipeline(client)

        worlds = await asyncio.gather(
            pipeline.generate_world("Star Wars", "set_in", []),
            pipeline.generate_world("Deadwood", "set_in", []),
            pipeline.generate_world("The Office", "set_in", []),
        )

        assert [w.theme for w in worlds] == ["Sci-Fi", "Western", "Modern"]
        client.assert_called(times=3)

    @pytest.mark.asyncio
    async def test_mixed_success_and_failure(self, failing_client) -> None:
        good = WorldGenerationPipeline(MockGenerationClient({"default": suggestion_payload()}))
        bad = WorldGenerationPipeline(failing_client)

        results = await asyncio.gather(
            good.analyze_description("Sky pirates"),
            bad.analyze_description("Sky pirates"),
        )

        assert results[0].attributes[0].name == "Might"
        assert results[1] == fallback_suggestion_set()


class TestGenerateTestWorld:
    """Tests for random-reference test worlds."""

    @pytest.mark.asyncio
    async def test_uses_a_known_reference(self, mock_generation_client) -> None:
        pipeline = WorldGenerationPipeline(mock_generation_client)

        world = await pipeline.generate_test_world(rng=random.Random(7))

        assert_valid_world(world)
        prompt = mock_generation_client.get_last_call().prompt
        assert any(f"inspired by the {ref} universe" in prompt for ref in TV_MOVIE_UNIVERSES)
