# pokedex/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .catalog import catalog_router
from .catalog.controller import CatalogController
from .catalog.pokeapi_service import PokeAPIClient
from .config import Config, get_config


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def create_app(config: Optional[Config] = None, client: Optional[PokeAPIClient] = None) -> FastAPI:
    """Build the application.

    ``client`` lets tests plug in a PokéAPI client backed by a fake
    transport; by default one is built from the configuration.
    """
    config = config or get_config()
    logging.basicConfig(level=config.APP_LOG_LEVEL, format=LOG_FORMAT)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        pokeapi = client or PokeAPIClient.from_config(config)
        app.state.catalog_controller = CatalogController(pokeapi)
        logger.info("Catalog ready against %s", pokeapi.base_url)
        try:
            yield
        finally:
            app.state.catalog_controller = None
            await pokeapi.aclose()

    app = FastAPI(
        title="Pokédex catalog",
        description=(
            "Browse the national Pokédex page by page, filter it by type "
            "and look Pokémon up by name or number, using the public PokéAPI."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # 🔹 Quick liveness check
    @app.get("/")
    def health_check():
        return {"status": "ok", "message": "Pokédex catalog live 🚀"}

    app.include_router(catalog_router)
    return app


app = create_app()
