"""Pytest fixtures: a fake PokéAPI served through ``httpx.MockTransport``."""

from typing import Dict, List, Optional

import httpx
import pytest

from pokedex.catalog.controller import CatalogController
from pokedex.catalog.pokeapi_service import PokeAPIClient

BASE_URL = "https://pokeapi.test/api/v2"
CATALOG_SIZE = 1025
FIRE_MEMBERS = 68

NAMED = {25: "pikachu", 4: "charmander", 6: "charizard"}


def name_for(pokemon_id: int) -> str:
    return NAMED.get(pokemon_id, f"pokemon-{pokemon_id}")


ID_BY_NAME = {name_for(i): i for i in range(1, CATALOG_SIZE + 1)}


def detail_payload(pokemon_id: int) -> Dict:
    primary = "electric" if pokemon_id == 25 else "fire" if pokemon_id <= FIRE_MEMBERS else "water"
    return {
        "id": pokemon_id,
        "name": name_for(pokemon_id),
        "height": 4,
        "weight": 60,
        "types": [
            {"slot": 1, "type": {"name": primary, "url": f"{BASE_URL}/type/{primary}/"}},
            {"slot": 2, "type": {"name": "flying", "url": f"{BASE_URL}/type/flying/"}},
        ],
        "sprites": {
            "front_default": f"https://img.test/sprites/{pokemon_id}.png",
            "other": {"official-artwork": {"front_default": f"https://img.test/artwork/{pokemon_id}.png"}},
        },
        "stats": [{"base_stat": 35, "effort": 0, "stat": {"name": "hp", "url": ""}}],
    }


class FakePokeAPI:
    """Answers the three PokéAPI routes from a synthetic 1025-entry catalogue.

    ``fail`` holds names (or ``"list"`` / ``"type"``) whose requests answer
    with HTTP 500; ``requests`` records every path that was hit.
    """

    def __init__(self) -> None:
        self.fail: set = set()
        self.requests: List[str] = []
        self.types: Dict[str, List[int]] = {
            "fire": list(range(1, FIRE_MEMBERS + 1)),
            "electric": [25],
            "dragon": [],
        }

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append(path)
        prefix = "/api/v2"
        if not path.startswith(prefix):
            return httpx.Response(404, json={"detail": "Not Found"})
        parts = [p for p in path[len(prefix):].split("/") if p]

        if parts == ["pokemon"]:
            if "list" in self.fail:
                return httpx.Response(500, text="boom")
            limit = int(request.url.params.get("limit", 20))
            offset = int(request.url.params.get("offset", 0))
            ids = range(offset + 1, min(offset + limit, CATALOG_SIZE) + 1)
            return httpx.Response(
                200,
                json={
                    "count": CATALOG_SIZE,
                    "next": None,
                    "previous": None,
                    "results": [
                        {"name": name_for(i), "url": f"{BASE_URL}/pokemon/{i}/"} for i in ids
                    ],
                },
            )

        if len(parts) == 2 and parts[0] == "pokemon":
            key = parts[1]
            if key in self.fail:
                return httpx.Response(500, text="boom")
            pokemon_id = self._resolve(key)
            if pokemon_id is None:
                return httpx.Response(404, text="Not Found")
            return httpx.Response(200, json=detail_payload(pokemon_id))

        if len(parts) == 2 and parts[0] == "type":
            if "type" in self.fail:
                return httpx.Response(500, text="boom")
            members = self.types.get(parts[1])
            if members is None:
                return httpx.Response(404, text="Not Found")
            return httpx.Response(
                200,
                json={
                    "id": 10,
                    "name": parts[1],
                    "pokemon": [
                        {"slot": 1, "pokemon": {"name": name_for(i), "url": f"{BASE_URL}/pokemon/{i}/"}}
                        for i in members
                    ],
                },
            )

        return httpx.Response(404, text="Not Found")

    @staticmethod
    def _resolve(key: str) -> Optional[int]:
        if key.isdigit():
            value = int(key)
            return value if 1 <= value <= CATALOG_SIZE else None
        return ID_BY_NAME.get(key)

    def detail_requests(self) -> List[str]:
        return [p for p in self.requests if p.startswith("/api/v2/pokemon/")]


@pytest.fixture
def fake_api():
    return FakePokeAPI()


@pytest.fixture
def pokeapi(fake_api):
    return PokeAPIClient(base_url=BASE_URL, transport=httpx.MockTransport(fake_api))


@pytest.fixture
def controller(pokeapi):
    return CatalogController(pokeapi)
