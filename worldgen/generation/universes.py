"""
Reference universe lookup.

Maps a reference name (a TV show, film or book setting) to the genre and tone
descriptors used to keep generated content consistent with it. The table is
built once at import time and never mutated. Unknown references resolve to
UNKNOWN_CONTEXT instead of raising.
"""

from types import MappingProxyType

from pydantic import BaseModel, ConfigDict

# Theme values the model is asked to choose from
THEMES = [
    "Fantasy",
    "Sci-Fi",
    "Modern",
    "Historical",
    "Post-Apocalyptic",
    "Cyberpunk",
    "Western",
    "Other",
]


class UniverseContext(BaseModel):
    """Genre and tone descriptors for one reference universe"""

    model_config = ConfigDict(frozen=True)

    genre: str
    description: str
    tech_level: str
    setting: str


UNKNOWN_CONTEXT = UniverseContext(
    genre="Unknown",
    description="an established setting whose genre must be inferred from the source material",
    tech_level="whatever technology actually exists in the source material",
    setting="the places, institutions and people that actually exist in the source material",
)


_UNIVERSES = {
    "Game of Thrones": UniverseContext(
        genre="Fantasy",
        description="a gritty medieval fantasy of feuding noble houses, politics and rare, dangerous magic",
        tech_level="medieval: swords, castles, ravens and sail ships",
        setting="the continents of Westeros and Essos",
    ),
    "Lord of the Rings": UniverseContext(
        genre="Fantasy",
        description="an epic high fantasy of ancient races, quests and a struggle against a dark lord",
        tech_level="pre-industrial: swords, bows, forges and old magic",
        setting="Middle-earth",
    ),
    "Star Wars": UniverseContext(
        genre="Sci-Fi",
        description="a space opera of rebels, empires, smugglers and the mystical Force",
        tech_level="interstellar: hyperdrive starships, blasters, droids and lightsabers",
        setting="a galaxy far, far away of desert planets, space stations and frontier outposts",
    ),
    "Twin Peaks": UniverseContext(
        genre="Modern",
        description="a surreal small-town mystery with an undercurrent of the uncanny",
        tech_level="contemporary 1990s America: cars, landlines and tape recorders",
        setting="a logging town in the Pacific Northwest",
    ),
    "Stranger Things": UniverseContext(
        genre="Modern",
        description="1980s small-town adventure with government secrets and a hidden otherworldly dimension",
        tech_level="1980s America: bicycles, walkie-talkies and arcade machines",
        setting="Hawkins, Indiana",
    ),
    "Deadwood": UniverseContext(
        genre="Western",
        description="a brutal frontier drama about law, commerce and power in a mining camp",
        tech_level="1870s frontier: revolvers, horses, telegraph and gold mining",
        setting="a lawless gold-rush camp in the Dakota Territory",
    ),
    "The Walking Dead": UniverseContext(
        genre="Post-Apocalyptic",
        description="a survival drama in the collapse that follows a zombie outbreak",
        tech_level="scavenged modern: firearms, cars without fuel, fortified camps",
        setting="the ruins of the American South",
    ),
    "Black Mirror": UniverseContext(
        genre="Sci-Fi",
        description="near-future anthology fiction about the dark side of technology",
        tech_level="near-future consumer technology: implants, social scoring, simulated minds",
        setting="recognizable modern societies one step ahead of today",
    ),
    "The Matrix": UniverseContext(
        genre="Cyberpunk",
        description="a cyberpunk war between humans and machines inside and outside a simulated reality",
        tech_level="advanced AI, neural interfaces and hovercraft",
        setting="the simulated late-1990s city and the machine-ruled real world",
    ),
    "Mad Max": UniverseContext(
        genre="Post-Apocalyptic",
        description="a desert wasteland of scarce fuel, warlords and road warriors",
        tech_level="salvaged combustion engines and improvised weapons",
        setting="the Australian wasteland",
    ),
    "Westworld": UniverseContext(
        genre="Sci-Fi",
        description="a theme park of lifelike android hosts playing out frontier stories",
        tech_level="advanced robotics and AI hidden behind a Wild West facade",
        setting="a corporate-run frontier theme park",
    ),
    "Star Trek": UniverseContext(
        genre="Sci-Fi",
        description="optimistic space exploration and diplomacy aboard starships",
        tech_level="warp drive, transporters, phasers and replicators",
        setting="the United Federation of Planets and the space around it",
    ),
    "Dune": UniverseContext(
        genre="Sci-Fi",
        description="a far-future feudal space empire fighting over a desert planet and its spice",
        tech_level="interstellar travel without thinking machines: shields, ornithopters and stillsuits",
        setting="the desert planet Arrakis and the great houses of the Imperium",
    ),
    "The Mandalorian": UniverseContext(
        genre="Sci-Fi",
        description="a space western following bounty hunters in the galaxy's lawless outer rim",
        tech_level="interstellar: starships, blasters, beskar armor and droids",
        setting="the Outer Rim after the fall of the Empire",
    ),
    "Breaking Bad": UniverseContext(
        genre="Modern",
        description="a contemporary crime drama about the drug trade and moral collapse",
        tech_level="contemporary: cars, cell phones and chemistry labs",
        setting="Albuquerque, New Mexico",
    ),
    "True Detective": UniverseContext(
        genre="Modern",
        description="a bleak contemporary crime drama about detectives and long-buried murders",
        tech_level="contemporary police work: case files, interrogations and patrol cars",
        setting="the bayous and small towns of the American South",
    ),
    "The Office": UniverseContext(
        genre="Modern",
        description="a mockumentary workplace comedy about office life at a paper company",
        tech_level="contemporary office: desktop computers, phones, copiers",
        setting="a regional paper company branch office in Scranton, Pennsylvania",
    ),
}

# Reference universes offered for inspiration when no reference is chosen
TV_MOVIE_UNIVERSES = [name for name in _UNIVERSES if name != "The Office"]

UNIVERSE_CONTEXTS = MappingProxyType(_UNIVERSES)

_BY_KEY = MappingProxyType({name.casefold(): context for name, context in _UNIVERSES.items()})


def get_universe_context(reference: str | None) -> UniverseContext:
    """Look up a reference universe, case-insensitively.

    Returns UNKNOWN_CONTEXT for missing or unrecognized references.
    """
    if not reference:
        return UNKNOWN_CONTEXT
    return _BY_KEY.get(reference.strip().casefold(), UNKNOWN_CONTEXT)


def is_known_universe(reference: str | None) -> bool:
    return bool(reference) and reference.strip().casefold() in _BY_KEY
