"""
Shared pytest fixtures for worldgen tests.

This module provides:
- world_request / suggestion_request: Ready-made GenerationRequests
- mock_generation_client: Mock client with a valid world and suggestion payload
- mock_client_with_responses: Factory for custom mock clients
- failing_client: Client that always raises a network error
- Custom markers for test categorization
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from worldgen.models.generation import GenerationKind, GenerationRequest, Relationship

if TYPE_CHECKING:
    from tests.mocks.llm import FailingGenerationClient, MockGenerationClient


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line(
        "markers", "e2e: marks tests as end-to-end tests requiring real LLM"
    )


# =============================================================================
# Request Fixtures
# =============================================================================


@pytest.fixture
def world_request() -> GenerationRequest:
    """A set_in world request for a contemporary reference."""
    return GenerationRequest(
        kind=GenerationKind.WORLD,
        reference="The Office",
        relationship=Relationship.SET_IN,
        existing_names=frozenset({"Scranton Branch"}),
    )


@pytest.fixture
def suggestion_request() -> GenerationRequest:
    """A suggestion-set request with a fantasy description."""
    return GenerationRequest(
        kind=GenerationKind.SUGGESTION_SET,
        description="A fantasy world with magic and dragons",
    )


# =============================================================================
# Generation Client Fixtures
# =============================================================================


@pytest.fixture
def mock_generation_client() -> "MockGenerationClient":
    """Mock client answering world prompts and analysis prompts."""
    from tests.mocks.llm import MockGenerationClient, suggestion_payload, world_payload

    return MockGenerationClient(
        responses={
            "Analyze the following world description": suggestion_payload(),
            "default": world_payload(),
        }
    )


@pytest.fixture
def mock_client_with_responses() -> callable:
    """Factory fixture to create a mock client with custom responses.

    Usage:
        def test_something(mock_client_with_responses):
            client = mock_client_with_responses({
                "default": '{"attributes": [...], "skills": [...]}',
            })
    """
    from tests.mocks.llm import MockGenerationClient

    def _factory(responses: dict[str, str | None]) -> MockGenerationClient:
        return MockGenerationClient(responses=responses)

    return _factory


@pytest.fixture
def failing_client() -> "FailingGenerationClient":
    """Client that rejects every call with a network error."""
    from tests.mocks.llm import FailingGenerationClient

    return FailingGenerationClient()
