"""
Route definitions for the catalogue viewer.

Endpoints under /api/catalog:
- GET    /view                   : current view (first call loads page 0)
- POST   /page?offset=N          : load the page starting at offset N (a multiple of 154)
- POST   /page/next, /page/prev  : move one page forward / back
- POST   /category/{name}        : filter by type ("all" shows everything)
- POST   /search                 : look up one Pokémon by name or id
- POST   /detail/{name}          : open the detail view of a displayed Pokémon
- POST   /detail/close           : close the detail view, restoring the scroll offset
- POST   /sidebar/toggle         : collapse / expand the type sidebar
- DELETE /alert                  : dismiss the pending alert
- GET    /types                  : types offered in the sidebar with their colours
- GET    /pokemon/{name_or_id}   : raw detail record, straight from the PokéAPI

Every action answers with the ``CatalogView`` after a render pass, so
the front-end always redraws from the latest state.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from .controller import CatalogController
from .pokeapi_service import PokeAPIError, PokemonNotFound
from .schemas import CatalogView, OpenDetailRequest, SearchRequest, TypeInfo
from .store import AVAILABLE_TYPES, CATEGORY_ALL, PAGE_SIZE, TYPE_COLORS


router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def get_controller(request: Request) -> CatalogController:
    """The single controller instance created by the application lifespan."""
    controller = getattr(request.app.state, "catalog_controller", None)
    if controller is None:
        raise HTTPException(status_code=503, detail="Catalog is not ready")
    return controller


@router.get("/view", response_model=CatalogView)
async def get_view(controller: CatalogController = Depends(get_controller)) -> CatalogView:
    if controller.state.status == "idle":
        await controller.start()
    return controller.render()


@router.post("/page", response_model=CatalogView)
async def load_page(
    offset: int = Query(default=0, ge=0, description="Index of the first Pokémon of the page"),
    controller: CatalogController = Depends(get_controller),
) -> CatalogView:
    if offset % PAGE_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"Offset {offset} is not the start of a page (multiples of {PAGE_SIZE})",
        )
    if offset and offset >= controller.state.total:
        raise HTTPException(
            status_code=400,
            detail=f"Offset {offset} is outside the {controller.state.total} available results",
        )
    await controller.load_page(offset)
    return controller.render()


@router.post("/page/next", response_model=CatalogView)
async def next_page(controller: CatalogController = Depends(get_controller)) -> CatalogView:
    await controller.next_page()
    return controller.render()


@router.post("/page/prev", response_model=CatalogView)
async def prev_page(controller: CatalogController = Depends(get_controller)) -> CatalogView:
    await controller.prev_page()
    return controller.render()


@router.post("/category/{name}", response_model=CatalogView)
async def filter_by_category(
    name: str,
    controller: CatalogController = Depends(get_controller),
) -> CatalogView:
    category = name.strip().lower()
    if category != CATEGORY_ALL and category not in TYPE_COLORS:
        raise HTTPException(status_code=400, detail=f"Unknown type: {name}")
    await controller.filter_by_category(category)
    return controller.render()


@router.post("/search", response_model=CatalogView)
async def search(
    req: SearchRequest,
    controller: CatalogController = Depends(get_controller),
) -> CatalogView:
    await controller.search(req.term)
    return controller.render()


# Declared before /detail/{name} so "close" is not taken for a Pokémon name.
@router.post("/detail/close", response_model=CatalogView)
async def close_detail(controller: CatalogController = Depends(get_controller)) -> CatalogView:
    controller.close_detail()
    return controller.render()


@router.post("/detail/{name}", response_model=CatalogView)
async def open_detail(
    name: str,
    req: Optional[OpenDetailRequest] = None,
    controller: CatalogController = Depends(get_controller),
) -> CatalogView:
    item = controller.state.find_item(name)
    if item is None:
        raise HTTPException(status_code=404, detail=f"{name} is not on the current page")
    if req is not None:
        controller.viewport.scroll_top = req.scroll_top
    controller.open_detail(item)
    return controller.render()


@router.post("/sidebar/toggle", response_model=CatalogView)
async def toggle_sidebar(controller: CatalogController = Depends(get_controller)) -> CatalogView:
    controller.toggle_sidebar()
    return controller.render()


@router.delete("/alert", response_model=CatalogView)
async def dismiss_alert(controller: CatalogController = Depends(get_controller)) -> CatalogView:
    controller.dismiss_alert()
    return controller.render()


@router.get("/types", response_model=List[TypeInfo])
def list_types() -> List[TypeInfo]:
    return [TypeInfo(name=name, color=TYPE_COLORS[name]) for name in AVAILABLE_TYPES]


@router.get("/pokemon/{name_or_id}")
async def get_pokemon(
    name_or_id: str,
    controller: CatalogController = Depends(get_controller),
) -> Dict[str, Any]:
    try:
        detail = await controller.client.get_pokemon(name_or_id.lower())
    except PokemonNotFound:
        raise HTTPException(status_code=404, detail="Pokémon not found")
    except PokeAPIError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    return detail.model_dump()
