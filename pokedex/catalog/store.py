"""
In-memory state of the catalogue viewer.

Nothing here is persisted: ``CatalogState`` is a thin cache of the
page currently on screen plus the handful of flags the front-end needs
(loading, selected Pokémon, collapsed sidebar, remembered scroll
offset). It is owned by a single ``CatalogController`` and passed to it
by reference.

The module also holds the catalogue constants and the colour palette
used to tint cards by their primary type.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .schemas import PokemonDetail, PokemonSummary


# Fixed number of Pokémon per page and size of the full national catalogue.
PAGE_SIZE = 154
CATALOG_SIZE = 1025

CATEGORY_ALL = "all"
CATEGORY_SEARCH = "search"

DEFAULT_COLOR = "#F5F5F5"

# Card background for each type, keyed by the type name used by the API.
TYPE_COLORS: Dict[str, str] = {
    "fire": "#E62224",
    "grass": "#3FA129",
    "electric": "#FAC000",
    "water": "#2980EF",
    "ground": "#915121",
    "rock": "#B0AA82",
    "fairy": "#EF70EF",
    "poison": "#9141CB",
    "bug": "#91A119",
    "dragon": "#5060E1",
    "psychic": "#EF4179",
    "flying": "#81B9EF",
    "fighting": "#FF8000",
    "normal": "#9FA19F",
    "ice": "#3DCEF3",
    "ghost": "#704170",
    "steel": "#60A1B8",
    "dark": "#624D4E",
}

# Types offered in the sidebar, in palette order.
AVAILABLE_TYPES: List[str] = list(TYPE_COLORS)


def total_pages(total: int, page_size: int = PAGE_SIZE) -> int:
    """Number of pages needed for ``total`` results; never less than 1."""
    return max(1, math.ceil(total / page_size))


def pokemon_color(pokemon: Optional[PokemonDetail]) -> str:
    """Background colour for a card, from the Pokémon's first type."""
    if pokemon is None:
        return DEFAULT_COLOR
    return TYPE_COLORS.get(pokemon.primary_type or "", DEFAULT_COLOR)


@dataclass
class CatalogState:
    category: str = CATEGORY_ALL
    page: int = 0
    total: int = CATALOG_SIZE
    items: List[PokemonDetail] = field(default_factory=list)
    selected: Optional[PokemonDetail] = None
    loading: bool = False
    status: str = "idle"
    sidebar_collapsed: bool = False
    scroll_memory: int = 0
    # Summaries of the active category (or the search hit); pages are sliced from here.
    category_members: List[PokemonSummary] = field(default_factory=list)
    alert: Optional[str] = None
    error: Optional[str] = None

    @property
    def offset(self) -> int:
        return self.page * PAGE_SIZE

    def find_item(self, name: str) -> Optional[PokemonDetail]:
        """Return the displayed Pokémon called ``name`` (case-insensitive)."""
        key = (name or "").strip().lower()
        return next((p for p in self.items if p.name.lower() == key), None)
