from pokedex.catalog.schemas import PokemonDetail
from pokedex.catalog.store import (
    AVAILABLE_TYPES,
    DEFAULT_COLOR,
    CatalogState,
    pokemon_color,
    total_pages,
)
from pokedex.catalog.viewport import Viewport


def _pokemon(name, *types, sprites=None):
    return PokemonDetail(
        id=1,
        name=name,
        types=[{"slot": i + 1, "type": {"name": t}} for i, t in enumerate(types)],
        sprites=sprites or {},
    )


def test_total_pages_never_below_one():
    assert total_pages(0) == 1
    assert total_pages(1025) == 7
    assert total_pages(308) == 2


def test_color_follows_first_type():
    assert pokemon_color(_pokemon("charizard", "fire", "flying")) == "#E62224"
    assert pokemon_color(_pokemon("mystery", "stellar")) == DEFAULT_COLOR
    assert pokemon_color(_pokemon("typeless")) == DEFAULT_COLOR
    assert pokemon_color(None) == DEFAULT_COLOR


def test_image_url_falls_back_to_sprite():
    assert _pokemon("a", sprites={"front_default": "s.png"}).image_url == "s.png"
    assert _pokemon("b").image_url is None


def test_available_types_cover_palette():
    assert len(AVAILABLE_TYPES) == 18
    assert AVAILABLE_TYPES[0] == "fire"


def test_find_item_is_case_insensitive():
    state = CatalogState(items=[_pokemon("pikachu", "electric")])

    assert state.find_item("PIKACHU").name == "pikachu"
    assert state.find_item("raichu") is None


def test_viewport_runs_callbacks_once_in_order():
    viewport = Viewport(scroll_top=10)
    calls = []
    viewport.after_render(lambda: calls.append(1))
    viewport.after_render(lambda: calls.append(2))

    viewport.render()
    viewport.render()

    assert calls == [1, 2]


def test_viewport_clamps_negative_offsets():
    viewport = Viewport()
    viewport.scroll_top = -50

    assert viewport.scroll_top == 0
