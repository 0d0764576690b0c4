"""
Fallback catalog - hand-authored results used when generation fails.

A failed generation is replaced wholesale, never merged with partial output.
Entries are built once and copied on every request, so callers may mutate
what they receive without affecting later fallbacks.
"""

from worldgen.models.generation import Difficulty
from worldgen.models.world import (
    AttributeSuggestion,
    GeneratedAttribute,
    GeneratedSkill,
    GeneratedWorld,
    SkillSuggestion,
    SuggestionSet,
)

FALLBACK_WORLD_NAME = "Uncharted Realm"


def _attribute(name, description, category, base_value=5):
    return AttributeSuggestion(
        name=name,
        description=description,
        category=category,
        min_value=1,
        max_value=10,
        base_value=base_value,
    )


def _skill(name, description, difficulty, category, linked_attribute):
    return SkillSuggestion(
        name=name,
        description=description,
        difficulty=difficulty,
        category=category,
        linked_attribute_ref=linked_attribute,
        min_value=1,
        max_value=10,
        base_value=5,
    )


_SUGGESTION_SET = SuggestionSet(
    attributes=[
        _attribute("Strength", "Physical power and endurance", "Physical", 5),
        _attribute("Intelligence", "Mental acuity and reasoning", "Mental", 7),
        _attribute("Agility", "Speed and dexterity", "Physical", 6),
        _attribute("Charisma", "Social influence and charm", "Social", 4),
        _attribute("Dexterity", "Hand-eye coordination and precision", "Physical", 5),
        _attribute("Constitution", "Health and stamina", "Physical", 6),
    ],
    skills=[
        _skill("Combat", "Ability to fight effectively", Difficulty.MEDIUM, "Combat", "Strength"),
        _skill("Stealth", "Moving unseen and unheard", Difficulty.HARD, "Physical", "Agility"),
        _skill("Perception", "Noticing details and dangers", Difficulty.EASY, "Mental", "Intelligence"),
        _skill("Persuasion", "Convincing others to agree", Difficulty.MEDIUM, "Social", "Charisma"),
        _skill("Investigation", "Finding clues and solving mysteries", Difficulty.MEDIUM, "Mental", "Intelligence"),
        _skill("Athletics", "Running, jumping, and climbing", Difficulty.EASY, "Physical", "Strength"),
        _skill("Medicine", "Healing wounds and treating ailments", Difficulty.HARD, "Mental", "Intelligence"),
        _skill("Survival", "Finding food and shelter in the wild", Difficulty.MEDIUM, "Physical", "Constitution"),
        _skill("Arcana", "Understanding magical theory and practice", Difficulty.HARD, "Mental", "Intelligence"),
        _skill("Deception", "Lying and misleading others", Difficulty.MEDIUM, "Social", "Charisma"),
        _skill("Intimidation", "Frightening or coercing others", Difficulty.MEDIUM, "Social", "Strength"),
        _skill("Performance", "Entertainment and artistic expression", Difficulty.EASY, "Social", "Charisma"),
    ],
)

# Genre-neutral so it is a plausible stand-in for any reference
_WORLD = GeneratedWorld.build(
    name=FALLBACK_WORLD_NAME,
    theme="Other",
    description=(
        "A blank-slate setting waiting to be shaped. Its history, cultures and "
        "conflicts are yours to define."
    ),
    attributes=[
        GeneratedAttribute(name="Body", description="Physical strength, speed and health",
                           category="Physical", min_value=1, max_value=10, base_value=5),
        GeneratedAttribute(name="Mind", description="Reasoning, memory and awareness",
                           category="Mental", min_value=1, max_value=10, base_value=5),
        GeneratedAttribute(name="Spirit", description="Willpower, composure and resolve",
                           category="Mental", min_value=1, max_value=10, base_value=5),
        GeneratedAttribute(name="Presence", description="Charm, influence and leadership",
                           category="Social", min_value=1, max_value=10, base_value=5),
    ],
    skills=[
        GeneratedSkill(name="Athletics", description="Running, climbing and swimming",
                       difficulty=Difficulty.EASY, category="Physical",
                       linked_attribute_ref=["Body"], min_value=1, max_value=5, base_value=3),
        GeneratedSkill(name="Fighting", description="Defending yourself in a physical conflict",
                       difficulty=Difficulty.MEDIUM, category="Combat",
                       linked_attribute_ref=["Body"], min_value=1, max_value=5, base_value=3),
        GeneratedSkill(name="Awareness", description="Noticing details, threats and opportunities",
                       difficulty=Difficulty.EASY, category="Mental",
                       linked_attribute_ref=["Mind"], min_value=1, max_value=5, base_value=3),
        GeneratedSkill(name="Knowledge", description="Recalling facts, history and lore",
                       difficulty=Difficulty.MEDIUM, category="Mental",
                       linked_attribute_ref=["Mind"], min_value=1, max_value=5, base_value=3),
        GeneratedSkill(name="Persuasion", description="Convincing others through argument or charm",
                       difficulty=Difficulty.MEDIUM, category="Social",
                       linked_attribute_ref=["Presence"], min_value=1, max_value=5, base_value=3),
        GeneratedSkill(name="Endurance", description="Pushing through hardship, fear and fatigue",
                       difficulty=Difficulty.HARD, category="Physical",
                       linked_attribute_ref=["Spirit", "Body"], min_value=1, max_value=5, base_value=3),
    ],
)


def fallback_suggestion_set() -> SuggestionSet:
    """The default six-attribute / twelve-skill suggestion set."""
    return _SUGGESTION_SET.model_copy(deep=True)


def fallback_world() -> GeneratedWorld:
    """The minimal default world."""
    return _WORLD.model_copy(deep=True)
