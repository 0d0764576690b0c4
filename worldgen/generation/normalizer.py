"""
Schema normalizer - maps loosely-typed model output onto strict records.

The extracted object is never trusted: bounds are defaulted and repaired,
base values computed and clamped, difficulty coerced into its closed set,
and unknown fields dropped. A payload missing either list is rejected
outright rather than treated as empty.

Default ranges and base values per entity class:

    world attribute       1-10, base = defaultValue or midpoint
    world skill           1-5,  base = midpoint
    suggested attribute   1-10, base = defaultValue or midpoint
    suggested skill       1-10, base = 5
"""

import logging
import math
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from worldgen.errors import SchemaFailure
from worldgen.models.generation import Difficulty, GenerationRequest
from worldgen.models.world import (
    AttributeSuggestion,
    GeneratedAttribute,
    GeneratedSkill,
    GeneratedWorld,
    SkillSuggestion,
    SuggestionSet,
)

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "General"


@dataclass(frozen=True)
class RangeDefaults:
    """Default bounds and base value for one entity class.

    fixed_base of None means the midpoint of the resolved bounds.
    """
    min_value: int
    max_value: int
    fixed_base: int | None = None
    use_wire_default: bool = True


WORLD_ATTRIBUTE = RangeDefaults(min_value=1, max_value=10)
WORLD_SKILL = RangeDefaults(min_value=1, max_value=5, use_wire_default=False)
SUGGESTED_ATTRIBUTE = RangeDefaults(min_value=1, max_value=10)
SUGGESTED_SKILL = RangeDefaults(min_value=1, max_value=10, fixed_base=5, use_wire_default=False)


def _as_int(value: Any) -> int | None:
    """Coerce a JSON number (or numeric string) to int, or None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return int(number) if math.isfinite(number) else None
    return None


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


def resolve_range(raw: dict, defaults: RangeDefaults) -> tuple[int, int, int]:
    """Resolve (min, max, base) for one raw entity.

    Bounds that are missing or do not satisfy min < max revert to the class
    defaults. The base value is always clamped into [min, max].
    """
    min_value = _as_int(raw.get("minValue"))
    max_value = _as_int(raw.get("maxValue"))
    if min_value is None:
        min_value = defaults.min_value
    if max_value is None:
        max_value = defaults.max_value
    if min_value >= max_value:
        logger.debug(f"Invalid range {min_value}-{max_value}, using defaults")
        min_value, max_value = defaults.min_value, defaults.max_value

    base_value = None
    if defaults.use_wire_default:
        base_value = _as_int(raw.get("defaultValue"))
        if base_value is None:
            base_value = _as_int(raw.get("baseValue"))
    if base_value is None:
        if defaults.fixed_base is not None:
            base_value = defaults.fixed_base
        else:
            base_value = (min_value + max_value) // 2

    base_value = max(min_value, min(base_value, max_value))
    return min_value, max_value, base_value


def coerce_difficulty(value: Any) -> Difficulty:
    """Map a raw difficulty onto the closed enum, defaulting to medium."""
    if isinstance(value, str):
        try:
            return Difficulty(value.strip().lower())
        except ValueError:
            pass
    return Difficulty.MEDIUM


def _linked_attributes(raw: dict) -> str | list[str] | None:
    names = raw.get("linkedAttributeNames")
    if isinstance(names, list):
        cleaned = [text for text in (_as_text(n) for n in names) if text]
        return cleaned or None
    return _as_text(names) or _as_text(raw.get("linkedAttributeName"))


def _require_entries(data: Any, key: str) -> list[dict]:
    if not isinstance(data, dict):
        raise SchemaFailure(f"Expected a JSON object, got {type(data).__name__}")
    entries = data.get(key)
    if not isinstance(entries, list):
        raise SchemaFailure(f"Response is missing the '{key}' list")
    if not entries:
        raise SchemaFailure(f"Response has an empty '{key}' list")
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise SchemaFailure(f"'{key}[{index}]' is not an object")
    return entries


def _entity_fields(raw: dict, kind: str, default_category: str | None) -> dict:
    name = _as_text(raw.get("name"))
    if name is None:
        raise SchemaFailure(f"{kind} entry has no name")
    return {
        "name": name,
        "description": _as_text(raw.get("description")) or "",
        "category": _as_text(raw.get("category")) or default_category,
    }


def _build(model, kind: str, **fields):
    try:
        return model(**fields)
    except ValidationError as e:
        raise SchemaFailure(f"Invalid {kind}: {e}") from e


def normalize_attribute(
    raw: dict,
    defaults: RangeDefaults = WORLD_ATTRIBUTE,
    model: type[GeneratedAttribute] = GeneratedAttribute,
    default_category: str | None = DEFAULT_CATEGORY,
) -> GeneratedAttribute:
    min_value, max_value, base_value = resolve_range(raw, defaults)
    return _build(
        model,
        "attribute",
        **_entity_fields(raw, "Attribute", default_category),
        min_value=min_value,
        max_value=max_value,
        base_value=base_value,
    )


def normalize_skill(
    raw: dict,
    defaults: RangeDefaults = WORLD_SKILL,
    model: type[GeneratedSkill] = GeneratedSkill,
    default_category: str | None = DEFAULT_CATEGORY,
) -> GeneratedSkill:
    min_value, max_value, base_value = resolve_range(raw, defaults)
    return _build(
        model,
        "skill",
        **_entity_fields(raw, "Skill", default_category),
        difficulty=coerce_difficulty(raw.get("difficulty")),
        linked_attribute_ref=_linked_attributes(raw),
        min_value=min_value,
        max_value=max_value,
        base_value=base_value,
    )


def normalize_world(data: Any, request: GenerationRequest) -> GeneratedWorld:
    """
    Normalize an extracted world payload.

    The name is the request's suggested name when given, otherwise the
    payload name. Uniqueness against existing names is applied afterwards
    by the pipeline.

    Raises:
        SchemaFailure: If required fields or lists are missing or invalid
    """
    raw_attributes = _require_entries(data, "attributes")
    raw_skills = _require_entries(data, "skills")

    name = _as_text(request.suggested_name) or _as_text(data.get("name"))
    theme = _as_text(data.get("theme"))
    description = _as_text(data.get("description"))

    missing = [
        field
        for field, value in (("name", name), ("theme", theme), ("description", description))
        if value is None
    ]
    if missing:
        raise SchemaFailure(f"Generated world is missing required fields: {', '.join(missing)}")

    attributes = [normalize_attribute(raw) for raw in raw_attributes]
    skills = [normalize_skill(raw) for raw in raw_skills]

    try:
        return GeneratedWorld.build(
            name=name,
            theme=theme,
            description=description,
            attributes=attributes,
            skills=skills,
        )
    except ValidationError as e:
        raise SchemaFailure(f"Invalid world: {e}") from e


def normalize_suggestions(data: Any) -> SuggestionSet:
    """
    Normalize an extracted suggestion payload.

    Every suggestion is stamped accepted=False regardless of the payload.

    Raises:
        SchemaFailure: If either list is missing, empty, or malformed
    """
    raw_attributes = _require_entries(data, "attributes")
    raw_skills = _require_entries(data, "skills")

    attributes = [
        normalize_attribute(raw, SUGGESTED_ATTRIBUTE, AttributeSuggestion, default_category=None)
        for raw in raw_attributes
    ]
    skills = [
        normalize_skill(raw, SUGGESTED_SKILL, SkillSuggestion, default_category=None)
        for raw in raw_skills
    ]
    return SuggestionSet(attributes=attributes, skills=skills)
