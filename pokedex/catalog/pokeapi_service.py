"""
PokéAPI integration for the catalogue.

This module is the only place that talks to the PokéAPI. It exposes
``PokeAPIClient`` with three read-only operations, each a plain HTTP
GET against a fixed base URL:

* ``list_pokemon()``: one page of ``/pokemon`` (``limit``/``offset``).
* ``get_pokemon()``: the detail record of one Pokémon by name or id.
* ``get_type()``: the Pokémon belonging to a type (``/type/{name}``).

``get_pokemon_batch()`` fans ``get_pokemon()`` out over a list of names
and joins the results. The join is all-or-nothing: a single failing
request fails the whole batch.

There are no retries and no caches. Failures are raised to the caller
as ``PokemonNotFound`` (HTTP 404) or ``PokeAPINetworkError`` (anything
else that went wrong), both subclasses of ``PokeAPIError``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Union

import httpx
from pydantic import ValidationError

from ..config import Config
from .schemas import PokemonDetail, PokemonListPage, TypeMembership


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"
DEFAULT_TIMEOUT = 10.0
DEFAULT_HEADERS = {
    "User-Agent": "pokedex-catalog/1.0 (+https://pokeapi.co)",
    "Accept": "application/json",
}


class PokeAPIError(Exception):
    """Base class for every failure raised by ``PokeAPIClient``."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class PokemonNotFound(PokeAPIError):
    """The requested Pokémon or type does not exist on the server."""


class PokeAPINetworkError(PokeAPIError):
    """The request could not be completed (transport error, timeout, bad status or body)."""


class PokeAPIClient:
    """Read-only async client for the PokéAPI.

    One ``httpx.AsyncClient`` is shared by every request and closed by
    ``aclose()`` (or by leaving ``async with``). ``transport`` replaces
    the network, which is how the tests serve a fake PokéAPI.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout_seconds = timeout_seconds or DEFAULT_TIMEOUT
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers=DEFAULT_HEADERS,
            timeout=self.timeout_seconds,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: Config, transport: Optional[httpx.AsyncBaseTransport] = None) -> "PokeAPIClient":
        return cls(
            base_url=config.POKEAPI_BASE_URL,
            timeout_seconds=config.POKEAPI_TIMEOUT,
            transport=transport,
        )

    async def __aenter__(self) -> "PokeAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _http_get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Perform a GET against the base URL and return the decoded JSON object.

        A 404 becomes ``PokemonNotFound``. Transport errors, timeouts,
        any other non-2xx status and bodies that are not a JSON object
        become ``PokeAPINetworkError``.
        """
        url = f"{self.base_url}{path}"
        logger.debug("GET %s params=%s", url, params)
        try:
            response = await self._http.get(path, params=params)
        except httpx.HTTPError as exc:
            logger.error("Error fetching %s: %s", url, exc)
            raise PokeAPINetworkError(f"Could not reach {url}: {exc}", url=url) from exc

        if response.status_code == 404:
            logger.info("PokéAPI returned 404 for %s", url)
            raise PokemonNotFound(f"Not found: {path}", url=url)
        if response.status_code != 200:
            logger.warning("PokéAPI request to %s returned status %s", url, response.status_code)
            raise PokeAPINetworkError(f"Unexpected status {response.status_code} from {url}", url=url)

        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Invalid JSON from %s: %s", url, exc)
            raise PokeAPINetworkError(f"Invalid JSON from {url}", url=url) from exc
        if not isinstance(data, dict):
            raise PokeAPINetworkError(f"Expected a JSON object from {url}", url=url)
        return data

    def _parse(self, model, data: Dict[str, Any], path: str):
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            url = f"{self.base_url}{path}"
            logger.error("Unexpected payload from %s: %s", url, exc)
            raise PokeAPINetworkError(f"Unexpected payload from {url}", url=url) from exc

    async def list_pokemon(self, limit: int = 154, offset: int = 0) -> PokemonListPage:
        """Return one page of Pokémon summaries."""
        data = await self._http_get_json("/pokemon", params={"limit": limit, "offset": offset})
        return self._parse(PokemonListPage, data, "/pokemon")

    async def get_pokemon(self, name_or_id: Union[str, int]) -> PokemonDetail:
        """Return the detail record of a Pokémon.

        Raises ``PokemonNotFound`` when the server does not know the
        identifier.
        """
        key = str(name_or_id).strip()
        if not key:
            raise PokemonNotFound("Empty Pokémon identifier")
        path = f"/pokemon/{key}"
        data = await self._http_get_json(path)
        return self._parse(PokemonDetail, data, path)

    async def get_type(self, name: str) -> TypeMembership:
        """Return the membership of a type. Unknown types raise ``PokemonNotFound``."""
        key = name.strip()
        if not key:
            raise PokemonNotFound("Empty type name")
        path = f"/type/{key}"
        data = await self._http_get_json(path)
        return self._parse(TypeMembership, data, path)

    async def get_pokemon_batch(self, names: Iterable[str]) -> List[PokemonDetail]:
        """Fetch every detail record concurrently and return them in input order.

        An empty batch returns ``[]`` without issuing a request. When any
        request fails the remaining ones are cancelled and the error is
        raised.
        """
        names = list(names)
        if not names:
            return []
        tasks = [asyncio.ensure_future(self.get_pokemon(name)) for name in names]
        try:
            details = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        logger.debug("Fetched %d detail records", len(details))
        return list(details)
