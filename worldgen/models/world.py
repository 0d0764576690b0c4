"""
Generated world schema models - Pydantic models for pipeline output.

Every record here is created fresh per generation call and handed to the
caller. Range invariants are checked on construction:

    min_value < max_value
    min_value <= base_value <= max_value
"""

from pydantic import BaseModel, Field, model_validator

from worldgen.models.generation import Difficulty

DEFAULT_ATTRIBUTE_POINT_POOL = 30
DEFAULT_SKILL_POINT_POOL = 50


class RangedValue(BaseModel):
    """Shared numeric range for attributes and skills"""
    min_value: int
    max_value: int
    base_value: int

    @model_validator(mode="after")
    def _check_range(self):
        if self.min_value >= self.max_value:
            raise ValueError(
                f"min_value ({self.min_value}) must be below max_value ({self.max_value})"
            )
        if not self.min_value <= self.base_value <= self.max_value:
            raise ValueError(
                f"base_value ({self.base_value}) outside "
                f"[{self.min_value}, {self.max_value}]"
            )
        return self


class GeneratedAttribute(RangedValue):
    """A character attribute defined by a world"""
    name: str
    description: str = ""
    category: str | None = None


class GeneratedSkill(RangedValue):
    """A skill defined by a world.

    linked_attribute_ref holds attribute display names, not identifiers.
    The consumer that owns attribute ids resolves them.
    """
    name: str
    description: str = ""
    difficulty: Difficulty = Difficulty.MEDIUM
    category: str | None = None
    linked_attribute_ref: str | list[str] | None = None


class WorldSettings(BaseModel):
    """Character-creation budget for a world"""
    max_attributes: int
    max_skills: int
    attribute_point_pool: int = DEFAULT_ATTRIBUTE_POINT_POOL
    skill_point_pool: int = DEFAULT_SKILL_POINT_POOL


class GeneratedWorld(BaseModel):
    """Complete generated world definition"""
    name: str
    theme: str
    description: str
    attributes: list[GeneratedAttribute]
    skills: list[GeneratedSkill]
    settings: WorldSettings

    @model_validator(mode="after")
    def _check_settings(self):
        if self.settings.max_attributes != len(self.attributes):
            raise ValueError("settings.max_attributes must match attribute count")
        if self.settings.max_skills != len(self.skills):
            raise ValueError("settings.max_skills must match skill count")
        return self

    @classmethod
    def build(
        cls,
        name: str,
        theme: str,
        description: str,
        attributes: list[GeneratedAttribute],
        skills: list[GeneratedSkill],
    ) -> "GeneratedWorld":
        """Create a world with settings derived from its attributes and skills"""
        return cls(
            name=name,
            theme=theme,
            description=description,
            attributes=attributes,
            skills=skills,
            settings=WorldSettings(
                max_attributes=len(attributes),
                max_skills=len(skills),
            ),
        )


class AttributeSuggestion(GeneratedAttribute):
    """An attribute awaiting review; never accepted by the pipeline itself"""
    accepted: bool = False


class SkillSuggestion(GeneratedSkill):
    """A skill awaiting review; never accepted by the pipeline itself"""
    accepted: bool = False


class SuggestionSet(BaseModel):
    """Advisory attributes and skills derived from a world description"""
    attributes: list[AttributeSuggestion] = Field(default_factory=list)
    skills: list[SkillSuggestion] = Field(default_factory=list)
