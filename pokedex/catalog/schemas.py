"""
Pydantic schema definitions for the catalog module.

Two families of models live here. The first mirrors the PokéAPI
responses the viewer consumes (``PokemonSummary``, ``PokemonListPage``,
``PokemonDetail`` and ``TypeMembership``). These are pass-through
shapes: unknown fields are kept so a detail record can be handed to the
front-end exactly as the API returned it. The second family
(``PokemonCard`` and ``CatalogView``) is what the ``/api/catalog``
routes return so that a front-end can render the current page.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Literal  # Py3.8 compatibility


Status = Literal["idle", "loading", "loaded", "error"]


class PokemonSummary(BaseModel):
    """A reference to a single Pokémon: no display data, only its name and URL."""

    name: str
    url: str = ""


class PokemonListPage(BaseModel):
    """One page of ``GET /pokemon``."""

    count: int = 0
    next: Optional[str] = None
    previous: Optional[str] = None
    results: List[PokemonSummary] = Field(default_factory=list)


class NamedResource(BaseModel):
    name: str
    url: str = ""


class TypeSlot(BaseModel):
    slot: int = 1
    type: NamedResource


class PokemonDetail(BaseModel):
    """The full record returned by ``GET /pokemon/{nameOrId}``.

    Only ``types`` and ``sprites`` are read by the viewer; every other
    field (stats, abilities, moves...) is carried through untouched.
    """

    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    types: List[TypeSlot] = Field(default_factory=list)
    sprites: Dict[str, Any] = Field(default_factory=dict)

    @property
    def primary_type(self) -> Optional[str]:
        """Name of the first type slot, or ``None`` when the record has none."""
        if not self.types:
            return None
        return self.types[0].type.name

    @property
    def image_url(self) -> Optional[str]:
        # Official artwork is the large picture; front_default is the small sprite.
        other = self.sprites.get("other") or {}
        artwork = other.get("official-artwork") or {}
        return artwork.get("front_default") or self.sprites.get("front_default")

    def summary(self) -> PokemonSummary:
        return PokemonSummary(name=self.name, url=f"/pokemon/{self.id}/")


class TypeMember(BaseModel):
    slot: int = 1
    pokemon: PokemonSummary


class TypeMembership(BaseModel):
    """Response of ``GET /type/{name}``: the Pokémon belonging to one type."""

    model_config = ConfigDict(extra="allow")

    name: str = ""
    pokemon: List[TypeMember] = Field(default_factory=list)

    def members(self) -> List[PokemonSummary]:
        return [entry.pokemon for entry in self.pokemon]


class PokemonCard(BaseModel):
    """The fields a catalogue card needs; the full record is only sent for the detail view."""

    id: int
    name: str
    image_url: Optional[str] = None
    primary_type: Optional[str] = None
    color: str


class CatalogView(BaseModel):
    """Snapshot of the viewer state returned by every ``/api/catalog`` action."""

    category: str
    page: int
    page_size: int
    total: int
    total_pages: int
    status: Status
    loading: bool
    items: List[PokemonCard]
    # Full pass-through record of the Pokémon shown in the detail view.
    selected: Optional[Dict[str, Any]] = None
    sidebar_collapsed: bool = False
    scroll_top: int = 0
    alert: Optional[str] = None
    error: Optional[str] = None


class TypeInfo(BaseModel):
    name: str
    color: str


class SearchRequest(BaseModel):
    term: str = ""


class OpenDetailRequest(BaseModel):
    # Scroll offset of the list at the moment the card was clicked.
    scroll_top: int = Field(default=0, ge=0)
