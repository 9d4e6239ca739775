import re
from dataclasses import dataclass

# Canonical color order used everywhere a color set is rendered or iterated
COLOR_ORDER: tuple[str, ...] = ("W", "U", "B", "R", "G")

# Basic land English name -> the color it produces
BASIC_LAND_TO_COLOR: dict[str, str] = {
    "plains": "W",
    "island": "U",
    "swamp": "B",
    "mountain": "R",
    "forest": "G",
}

COLOR_TO_BASIC_LAND: dict[str, str] = {
    "W": "Plains",
    "U": "Island",
    "B": "Swamp",
    "R": "Mountain",
    "G": "Forest",
}

# "Basic Land", "Basic Snow Land", and the French "Terrain de base"
_BASIC_LAND_PATTERN = re.compile(r"\bbasic\b.*\bland\b|\bterrain de base\b", re.IGNORECASE)
_LAND_PATTERN = re.compile(r"\bland\b|\bterrain\b", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class CardRef:
    """
    Read-only view of the static card attributes the engine needs.

    Instances are built once at the normalization boundary
    (see deckforge.parsers.card_data) and shared by reference between boards.

    Attributes:
        id: Printing-level identifier (board entries are unique by this)
        name: English card name
        type_line: Full type line (e.g., "Legendary Creature — Elf Druid")
        oracle_id: Rules-level identity shared by all printings
        mana_cost: Cost in brace notation (e.g., "{1}{W/U}{W/U}")
        mana_value: Converted mana cost, always finite and >= 0
        colors: Card colors in WUBRG order
        color_identity: Color identity in WUBRG order
        printed_name: Localized printed name, if different from name
    """

    id: str
    name: str
    type_line: str = ""
    oracle_id: str | None = None
    mana_cost: str | None = None
    mana_value: float = 0.0
    colors: tuple[str, ...] = ()
    color_identity: tuple[str, ...] = ()
    printed_name: str | None = None

    @property
    def identity_key(self) -> str:
        """Key used for copy counting across printings."""
        return self.oracle_id or self.id

    @property
    def display_name(self) -> str:
        return self.printed_name or self.name

    @property
    def is_land(self) -> bool:
        return bool(_LAND_PATTERN.search(self.type_line))

    @property
    def is_basic_land(self) -> bool:
        """Basic lands are exempt from copy limits in every format."""
        return bool(_BASIC_LAND_PATTERN.search(self.type_line))

    @property
    def basic_land_color(self) -> str | None:
        """Color produced by a basic land, by its English name (Wastes has none)."""
        if not self.is_basic_land:
            return None
        return BASIC_LAND_TO_COLOR.get(self.name.strip().lower())

    def matches_name(self, lowered_names: frozenset[str]) -> str | None:
        """Return the first of name/printed name found in `lowered_names`."""
        for candidate in (self.name, self.printed_name):
            if candidate and candidate.lower() in lowered_names:
                return candidate
        return None
