"""
Catalog package for the Pokédex viewer.

This package holds everything behind the ``/api/catalog`` endpoints: a
thin async client for the public PokéAPI, the in-memory viewer state,
the controller that pages, filters and searches the national catalogue,
and the routes a front-end calls to drive it. The front-end only draws
what the returned view describes; all fetching, fan-out of detail
requests and pagination rules live here.
"""

from .router import router as catalog_router  # noqa: F401
