import logging
from typing import Any
from urllib.parse import quote

import httpx
from fastapi import HTTPException, status

from dexview.models import NamedResource, NamedResourceList

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"


# Raised when PokeAPI reports that a pokemon, species or type does not exist
class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Resource not found."):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


# Raised for every other upstream fault (5xx, network, malformed body).
# The detail is deliberately generic; the cause is only logged.
class FetchFailure(HTTPException):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="External API Error: upstream data source unavailable.",
        )


def _normalize_key(key: str | int) -> str:
    return str(key).strip().lower()


def _path_segment(key: str) -> str:
    """Escapes a lookup key for use as one URL path segment.

    httpx would collapse '.'/'..' and cut the path at '?' or '#', turning the
    lookup into a request for the list endpoint, so those never reach the wire.
    """
    if not key.strip("."):
        raise NotFoundError(detail=f"'{key}' is not a valid name or id.")
    return quote(key, safe="")


class PokeAPIClient:
    """Thin async gateway over the PokeAPI REST endpoints.

    Returns raw payloads (or the small list shapes from ``dexview.models``) and
    leaves every formatting decision to the service layer.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = 5.0, catalog_limit: int = 10000):
        self.base_url = base_url.rstrip("/")
        self.catalog_limit = catalog_limit
        self.client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def _fetch(self, path: str, context: str, params: dict | None = None) -> Any:
        """Performs one GET and maps failures onto NotFoundError / FetchFailure."""
        logger.debug(f"GET {path} params={params}")
        try:
            response = await self.client.get(path, params=params)
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise NotFoundError(detail=f"{context} not found.")
            logger.error(f"PokeAPI returned {e.response.status_code} for {context}")
            raise FetchFailure()
        except httpx.RequestError as e:
            logger.error(f"PokeAPI network error for {context}: {e!r}")
            raise FetchFailure()
        except ValueError:
            logger.error(f"PokeAPI returned an undecodable body for {context}")
            raise FetchFailure()

    async def list_pokemon(self, limit: int, offset: int) -> NamedResourceList:
        data = await self._fetch("/pokemon", "Pokemon list", params={"limit": limit, "offset": offset})
        return NamedResourceList.model_validate(data)

    async def _fetch_resource(self, collection: str, key: str, context: str) -> dict:
        """Fetches a single resource; a body that is not one (no 'id') counts as not found."""
        data = await self._fetch(f"/{collection}/{_path_segment(key)}", context)
        if not isinstance(data, dict) or "id" not in data:
            logger.warning(f"PokeAPI returned a non-resource body for {context}")
            raise NotFoundError(detail=f"{context} not found.")
        return data

    async def get_pokemon(self, name_or_id: str | int) -> dict:
        key = _normalize_key(name_or_id)
        return await self._fetch_resource("pokemon", key, f"Pokemon '{key}'")

    async def get_pokemon_species(self, key: str | int) -> dict:
        key = _normalize_key(key)
        return await self._fetch_resource("pokemon-species", key, f"Species '{key}'")

    async def get_types(self) -> list[NamedResource]:
        data = await self._fetch("/type", "Type list", params={"limit": 100})
        return NamedResourceList.model_validate(data).results

    async def get_type_members(self, type_name: str) -> list[NamedResource]:
        """Returns every pokemon of a type. PokeAPI sends the whole membership in one response."""
        key = _normalize_key(type_name)
        data = await self._fetch(f"/type/{_path_segment(key)}", f"Type '{key}'")
        return [NamedResource.model_validate(entry["pokemon"]) for entry in data.get("pokemon", [])]

    async def search_catalog(self, query: str) -> list[NamedResource]:
        """Case-insensitive substring match over the full name catalog.

        PokeAPI has no search endpoint, so the whole catalog is fetched and
        filtered here. This costs one large request per search.
        """
        needle = query.strip().lower()
        catalog = await self.list_pokemon(limit=self.catalog_limit, offset=0)
        return [entry for entry in catalog.results if needle in entry.name.lower()]

    async def close(self):
        """Close the HTTP connection pool (call on app shutdown)."""
        await self.client.aclose()
