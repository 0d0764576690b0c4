"""
Prompt builder - composes a GenerationRequest into one instruction string.

Pure string construction: no network, no parsing. Output is deterministic for
a given request, since template text and the universe table are fixed.
"""

import logging

from worldgen.generation.universes import (
    THEMES,
    UniverseContext,
    get_universe_context,
    is_known_universe,
)
from worldgen.llm.prompt_loader import get_loader
from worldgen.models.generation import GenerationKind, GenerationRequest, Relationship

logger = logging.getLogger(__name__)

SUGGESTED_ATTRIBUTE_COUNT = 6
SUGGESTED_SKILL_COUNT = 12

NAMING_GUIDANCE = {
    "fantasy": (
        '- Use Celtic, Norse, or other cultural linguistics (e.g., "Vryndaal", "Korvathia", "Zhengara")\n'
        '- Combine natural elements creatively (e.g., "Thornspire", "Mistholm", "Dragonmere")\n'
        '- Use abstract concepts (e.g., "The Sundering", "Whisperlands", "Evermoon")'
    ),
    "sci-fi": (
        '- Use technical/scientific terms (e.g., "Nexus Prime", "Quantum Gate", "Neural Collective")\n'
        '- Combine numbers/codes (e.g., "Sector 7", "Alpha Station", "Grid 2049")\n'
        '- Use corporate/futuristic names (e.g., "Neo Singapore", "CyberCore City")'
    ),
    "western": (
        '- Use frontier/geographic names (e.g., "Copper Canyon", "Deadwater Gulch", "Sunset Ridge")\n'
        '- Use historical American names (e.g., "Fort Meridian", "Silver Creek", "Tombstone Valley")'
    ),
    "horror": (
        '- Use dark, ominous names (e.g., "Ravenshollow", "The Blackmoor", "Grimhaven")\n'
        '- Use gothic or Victorian names (e.g., "Ashworth Manor", "Bleakshire", "Morrighan\'s Rest")'
    ),
    "modern": (
        '- Use realistic place or business names (e.g., "Lakeview Plaza", "Harbor Street Precinct")\n'
        '- Use grounded, everyday names that could appear on a real map or letterhead'
    ),
    "default": (
        "- Names from different cultures and languages\n"
        "- Made-up words that sound natural\n"
        "- Descriptive names based on geography or history\n"
        "- Abstract or poetic names"
    ),
}

_GUIDANCE_BY_GENRE = {
    "fantasy": "fantasy",
    "sci-fi": "sci-fi",
    "cyberpunk": "sci-fi",
    "western": "western",
    "horror": "horror",
    "modern": "modern",
}


def _format_names(names: frozenset[str] | set[str]) -> str:
    """Render names as a stable, comma-separated literal list."""
    if not names:
        return "none"
    return ", ".join(f'"{name}"' for name in sorted(names))


def _naming_guidance(context: UniverseContext) -> str:
    key = _GUIDANCE_BY_GENRE.get(context.genre.lower(), "default")
    return NAMING_GUIDANCE[key]


def _theme_instruction(request: GenerationRequest, context: UniverseContext) -> str:
    options = ", ".join(THEMES)
    if request.relationship == Relationship.SET_IN and request.reference:
        expected = (
            f"The expected genre for {request.reference} is {context.genre}. "
            if is_known_universe(request.reference)
            else ""
        )
        return (
            f"The ACTUAL genre of {request.reference}. CRITICAL: You MUST identify and use "
            f"the correct genre from these options: {options}. {expected}"
            "Examples: The Office = Modern, Star Wars = Sci-Fi, Lord of the Rings = Fantasy, "
            "Breaking Bad = Modern, The Walking Dead = Post-Apocalyptic, Deadwood = Western. "
            "NEVER default to Fantasy unless the source material is actually fantasy."
        )
    return f"The genre/setting (choose from: {options})"


def _description_instruction(request: GenerationRequest, context: UniverseContext) -> str:
    if not request.reference:
        return "MUST be completely original with no references to existing media."
    if request.relationship == Relationship.SET_IN:
        instruction = (
            f"MUST be a realistic location that could actually exist in the {request.reference} "
            "universe without adding any fantasy or supernatural elements that don't exist in the original."
        )
        if context.genre == "Modern":
            instruction += (
                " Use realistic, mundane language. Avoid flowery or fantastical descriptions."
                " This should sound like a real place that could exist today."
            )
        return instruction
    return f"MUST mention that this world is inspired by {request.reference}."


def _content_instruction(request: GenerationRequest) -> str:
    if not request.reference:
        return "Make the world interesting and playable with completely original concepts."
    if request.relationship == Relationship.SET_IN:
        return (
            f"CRITICAL: Attributes and skills must be realistic and appropriate for the actual "
            f"{request.reference} setting. Do NOT include magical, supernatural, or fantasy elements "
            f"unless they actually exist in {request.reference}. Focus on skills and attributes that "
            "characters would actually have in that universe."
        )
    return f"Make the world interesting and playable while capturing the essence of {request.reference}."


def build_world_prompt(request: GenerationRequest) -> str:
    """Build the instruction for a full world generation request."""
    loader = get_loader()
    context = get_universe_context(request.reference)

    if request.reference and request.relationship == Relationship.SET_IN:
        if is_known_universe(request.reference):
            genre_requirement = f"The theme MUST be {context.genre}, the actual genre of {request.reference}"
        else:
            genre_requirement = f"The theme MUST exactly match the actual genre of {request.reference}"
        intro = loader.render(
            "world_generation",
            "set_in.txt",
            reference=request.reference,
            genre=context.genre,
            universe_description=context.description,
            tech_level=context.tech_level,
            setting=context.setting,
            genre_requirement=genre_requirement,
        )
    elif request.reference:
        # A reference without an explicit relationship is treated as inspiration
        intro = loader.render(
            "world_generation",
            "based_on.txt",
            reference=request.reference,
            genre=context.genre,
            universe_description=context.description,
        )
    else:
        intro = loader.render("world_generation", "original.txt")

    suggested_name_line = (
        f'The world should be named: "{request.suggested_name}"\n'
        if request.suggested_name
        else ""
    )
    naming = loader.render(
        "world_generation",
        "naming.txt",
        suggested_name_line=suggested_name_line,
        existing_names=_format_names(request.existing_names),
        naming_guidance=_naming_guidance(context),
    )

    response_format = loader.render(
        "world_generation",
        "response_format.txt",
        theme_instruction=_theme_instruction(request, context),
        description_instruction=_description_instruction(request, context),
        content_instruction=_content_instruction(request),
    )

    return "\n\n".join((intro, naming, response_format))


def build_suggestion_prompt(request: GenerationRequest) -> str:
    """Build the instruction for an attribute/skill suggestion request."""
    return get_loader().render(
        "world_analysis",
        "suggestions.txt",
        description=request.description.strip(),
        attribute_count=SUGGESTED_ATTRIBUTE_COUNT,
        skill_count=SUGGESTED_SKILL_COUNT,
        existing_names=_format_names(request.existing_names),
    )


def build_prompt(request: GenerationRequest) -> str:
    """Compose a generation request into a single instruction string."""
    if request.kind == GenerationKind.SUGGESTION_SET:
        prompt = build_suggestion_prompt(request)
    else:
        prompt = build_world_prompt(request)
    logger.debug(f"Built {request.kind.value} prompt, length: {len(prompt)} chars")
    return prompt
