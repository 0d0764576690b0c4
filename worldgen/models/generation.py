"""
Generation request models.

A GenerationRequest describes one unit of work for the pipeline: either a
full world built around a reference universe, or a suggestion set derived
from a free-text world description.

Example:
    >>> request = GenerationRequest(
    ...     kind=GenerationKind.WORLD,
    ...     reference="The Office",
    ...     relationship=Relationship.SET_IN,
    ...     existing_names=frozenset({"Scranton"}),
    ... )
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GenerationKind(str, Enum):
    """What the pipeline is asked to produce."""

    WORLD = "world"
    SUGGESTION_SET = "suggestion_set"


class Relationship(str, Enum):
    """How a generated world relates to its reference universe.

    SET_IN: the world exists literally inside the reference's continuity.
    BASED_ON: the world is original and merely inspired by the reference.
    """

    SET_IN = "set_in"
    BASED_ON = "based_on"


class Difficulty(str, Enum):
    """How hard a skill is to raise or use."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class GenerationRequest(BaseModel):
    """Immutable input to the generation pipeline.

    Attributes:
        kind: Which record to generate
        reference: Name of a source universe (world kind only)
        relationship: set_in / based_on (world kind only)
        existing_names: Names the generated world must not collide with
        suggested_name: Name to adopt verbatim when feasible
        description: Free-text world description (suggestion_set kind)
    """

    model_config = ConfigDict(frozen=True)

    kind: GenerationKind
    reference: str | None = None
    relationship: Relationship | None = None
    existing_names: frozenset[str] = Field(default_factory=frozenset)
    suggested_name: str | None = None
    description: str | None = None

    @model_validator(mode="after")
    def _check_description(self) -> "GenerationRequest":
        if self.kind == GenerationKind.SUGGESTION_SET and not (
            self.description and self.description.strip()
        ):
            raise ValueError("suggestion_set requests require a description")
        return self
