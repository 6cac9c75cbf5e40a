"""
Catalogue controller.

``CatalogController`` owns the viewer state and turns user actions
(load a page, filter by type, search, page forward/back, open/close
the detail view) into calls on ``PokeAPIClient``.

Each page is built the same way: get the names for the page (from
``/pokemon`` for the full catalogue, or by slicing the cached members
of the active type), fetch every detail record concurrently, and
publish the page only when the whole batch succeeded.

Every action takes a new generation number. A flow only writes to the
state while its generation is still the latest one, so a slow response
from an earlier action is dropped instead of overwriting newer state.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .pokeapi_service import PokeAPIClient, PokeAPIError, PokemonNotFound
from .schemas import CatalogView, PokemonCard, PokemonDetail, PokemonSummary
from .store import (
    CATALOG_SIZE,
    CATEGORY_ALL,
    CATEGORY_SEARCH,
    PAGE_SIZE,
    CatalogState,
    pokemon_color,
    total_pages,
)
from .viewport import Viewport

logger = logging.getLogger(__name__)


class CatalogController:
    """Drives one ``CatalogState`` from user actions.

    The state is held by reference and only this controller writes to
    it. ``viewport`` stands for the scrolling list on screen and
    ``on_alert`` receives the messages that must be shown to the user
    (an unknown Pokémon, a type that failed to load).
    """

    def __init__(
        self,
        client: PokeAPIClient,
        state: Optional[CatalogState] = None,
        viewport: Optional[Viewport] = None,
        on_alert: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.client = client
        self.state = state if state is not None else CatalogState()
        self.viewport = viewport if viewport is not None else Viewport()
        self.on_alert = on_alert
        self._generation = 0

    # ------------------------------------------------------------------
    # Generations

    def _begin(self) -> int:
        self._generation += 1
        return self._generation

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    # ------------------------------------------------------------------
    # Loading

    async def start(self) -> None:
        """Initial load: first page of the unfiltered catalogue."""
        await self.load_page(0)

    async def load_page(self, offset: int) -> None:
        """Load the page starting at ``offset`` of the active result set.

        ``offset`` must be a non-negative multiple of ``PAGE_SIZE``;
        anything else raises ``ValueError``.
        """
        if offset < 0 or offset % PAGE_SIZE:
            raise ValueError(f"Offset {offset} is not the start of a page of {PAGE_SIZE}")
        await self._load_page(offset, self._begin())

    async def _load_page(self, offset: int, generation: int) -> None:
        state = self.state
        # Read before the first await: a newer action may change both while we wait.
        category = state.category
        members = list(state.category_members)
        state.loading = True
        state.status = "loading"
        state.error = None
        state.page = offset // PAGE_SIZE

        try:
            if category == CATEGORY_ALL:
                listing = await self.client.list_pokemon(PAGE_SIZE, offset)
                names = [summary.name for summary in listing.results]
            else:
                names = [summary.name for summary in members[offset:offset + PAGE_SIZE]]
            details = await self.client.get_pokemon_batch(names)
        except PokeAPIError as exc:
            if not self._is_current(generation):
                logger.debug("Dropping failed page load at offset %s from a stale action", offset)
                return
            logger.warning("Failed to load page at offset %s (%s): %s", offset, category, exc)
            state.items = []
            state.loading = False
            state.status = "error"
            state.error = str(exc)
            return

        if not self._is_current(generation):
            logger.debug("Dropping page at offset %s from a stale action", offset)
            return
        self._publish(details)
        logger.info(
            "Loaded page %d of %s (%d items)", state.page, state.category, len(details)
        )

    def _publish(self, details: List[PokemonDetail]) -> None:
        state = self.state
        state.items = details
        state.loading = False
        state.status = "loaded"
        self.viewport.scroll_to_top()

    # ------------------------------------------------------------------
    # Filtering and search

    async def filter_by_category(self, name: str) -> None:
        """Show the whole catalogue (``"all"``) or only the Pokémon of one type."""
        generation = self._begin()
        category = (name or "").strip().lower() or CATEGORY_ALL
        state = self.state
        state.selected = None

        if category == CATEGORY_ALL:
            self._switch_category(CATEGORY_ALL, [], CATALOG_SIZE)
            await self._load_page(0, generation)
            return

        # The new category, its members and its total only reach the state
        # together, once the membership arrived for the latest action.
        state.loading = True
        state.status = "loading"
        try:
            membership = await self.client.get_type(category)
        except PokeAPIError as exc:
            if not self._is_current(generation):
                return
            self._switch_category(category, [], 0)
            state.items = []
            state.loading = False
            state.status = "error"
            state.error = str(exc)
            self.alert(f"Error loading Pokémon of type {category!r}")
            return

        if not self._is_current(generation):
            logger.debug("Dropping membership of %s from a stale action", category)
            return
        members = membership.members()
        self._switch_category(category, members, len(members))
        await self._load_page(0, generation)

    def _switch_category(self, category: str, members: List[PokemonSummary], total: int) -> None:
        state = self.state
        state.category = category
        state.category_members = members
        state.total = total
        state.page = 0

    async def search(self, term: str) -> None:
        """Look a Pokémon up by name or id; an empty term shows the whole catalogue."""
        term = (term or "").strip()
        if not term:
            await self.filter_by_category(CATEGORY_ALL)
            return

        generation = self._begin()
        state = self.state
        state.loading = True
        state.status = "loading"
        state.selected = None
        try:
            hit = await self.client.get_pokemon(term.lower())
        except PokeAPIError as exc:
            if not self._is_current(generation):
                return
            state.loading = False
            if isinstance(exc, PokemonNotFound):
                self.alert(f"Pokémon not found: {term}")
            else:
                self.alert("Could not reach the Pokédex, please try again later")
            await self.filter_by_category(CATEGORY_ALL)
            return

        if not self._is_current(generation):
            logger.debug("Dropping search result for %r from a stale action", term)
            return
        self._switch_category(CATEGORY_SEARCH, [hit.summary()], 1)
        state.error = None
        self._publish([hit])

    # ------------------------------------------------------------------
    # Pagination

    async def next_page(self) -> bool:
        next_offset = self.state.offset + PAGE_SIZE
        if next_offset < self.state.total:
            await self.load_page(next_offset)
            return True
        return False

    async def prev_page(self) -> bool:
        prev_offset = self.state.offset - PAGE_SIZE
        if prev_offset >= 0:
            await self.load_page(prev_offset)
            return True
        return False

    def total_pages(self) -> int:
        return total_pages(self.state.total)

    # ------------------------------------------------------------------
    # Detail view

    def open_detail(self, item: PokemonDetail) -> None:
        """Remember where the list was scrolled to and show ``item``."""
        self.state.scroll_memory = self.viewport.scroll_top
        self.state.selected = item
        self.viewport.scroll_to_top()

    def close_detail(self) -> None:
        """Hide the detail view; the list scroll offset comes back after the next render."""
        self.state.selected = None
        remembered = self.state.scroll_memory

        def restore() -> None:
            self.viewport.scroll_top = remembered

        self.viewport.after_render(restore)

    # ------------------------------------------------------------------
    # Misc UI

    def toggle_sidebar(self) -> None:
        self.state.sidebar_collapsed = not self.state.sidebar_collapsed

    def color_for(self, item: Optional[PokemonDetail]) -> str:
        return pokemon_color(item)

    def alert(self, message: str) -> None:
        logger.warning("Alert: %s", message)
        self.state.alert = message
        if self.on_alert is not None:
            self.on_alert(message)

    def dismiss_alert(self) -> None:
        self.state.alert = None

    # ------------------------------------------------------------------
    # Rendering

    def render(self) -> CatalogView:
        """Run a render pass and return the view the front-end should draw."""
        self.viewport.render()
        state = self.state
        return CatalogView(
            category=state.category,
            page=state.page,
            page_size=PAGE_SIZE,
            total=state.total,
            total_pages=self.total_pages(),
            status=state.status,
            loading=state.loading,
            items=[
                PokemonCard(
                    id=p.id,
                    name=p.name,
                    image_url=p.image_url,
                    primary_type=p.primary_type,
                    color=self.color_for(p),
                )
                for p in state.items
            ],
            selected=state.selected.model_dump() if state.selected is not None else None,
            sidebar_collapsed=state.sidebar_collapsed,
            scroll_top=self.viewport.scroll_top,
            alert=state.alert,
            error=state.error,
        )
