import asyncio
import logging

from dexview.clients.pokeapi_client import FetchFailure, NotFoundError, PokeAPIClient
from dexview.config import Settings
from dexview.models import NamedResource, PokemonDetail, PokemonPage, PokemonSummary, TypeDescriptor, TypePage
from dexview.services.formatting import (
    build_detail,
    build_page,
    build_summary,
    build_type_descriptors,
    coerce_positive_int,
    display_name,
    minimal_summary,
    page_metadata,
)

logger = logging.getLogger(__name__)


class PokemonService:
    def __init__(self, poke_client: PokeAPIClient, settings: Settings | None = None):
        self._poke_client = poke_client
        self._settings = settings or Settings()

    # --- Detail ---

    async def get_details(self, name_or_id: str) -> PokemonDetail | None:
        """
        Fetches the pokemon, then its species, and merges both into one record.
        Returns None when the pokemon does not exist. A failed species lookup
        only downgrades color/description/genus to their defaults.
        """
        try:
            entity = await self._poke_client.get_pokemon(name_or_id)
        except NotFoundError:
            return None

        species = await self._fetch_species(entity)
        return build_detail(entity, species)

    async def _fetch_species(self, entity: dict) -> dict | None:
        species_key = (entity.get("species") or {}).get("name") or entity["id"]
        try:
            return await self._poke_client.get_pokemon_species(species_key)
        except (NotFoundError, FetchFailure) as e:
            logger.warning(f"Species data unavailable for '{entity['name']}' ({e.status_code}), using defaults")
            return None

    # --- Listing ---

    def _page_args(self, page, page_size) -> tuple[int, int]:
        page = coerce_positive_int(page, 1)
        return page, coerce_positive_int(page_size, self._settings.default_page_size)

    async def list_page(self, page=None, page_size=None) -> PokemonPage:
        page, page_size = self._page_args(page, page_size)
        offset = (page - 1) * page_size

        listing = await self._poke_client.list_pokemon(limit=page_size, offset=offset)
        items = await self._summarize_all(listing.results)

        # totalCount comes from upstream, not from the length of this page
        return build_page(items, listing.count, page, page_size)

    async def _summarize(self, ref: NamedResource) -> PokemonSummary:
        try:
            entity = await self._poke_client.get_pokemon(ref.name)
        except (NotFoundError, FetchFailure) as e:
            logger.warning(f"Could not enrich '{ref.name}' ({e.status_code}), returning minimal summary")
            return minimal_summary(ref)
        return build_summary(entity)

    async def _summarize_all(self, refs: list[NamedResource]) -> list[PokemonSummary]:
        # gather keeps input order regardless of completion order
        return list(await asyncio.gather(*(self._summarize(ref) for ref in refs)))

    # --- Search ---

    async def search(self, query: str | None) -> PokemonPage:
        """
        Exact lookup first; on NotFound, substring search over the catalog.
        Any other fetch failure during the exact lookup is raised, not masked by the fallback.
        The result is a single page: at most search_result_limit matches, and
        totalCount counts only what is returned, so hasNext is always false.
        """
        limit = self._settings.search_result_limit
        query = (query or "").strip()
        if not query:
            return build_page([], 0, 1, self._settings.default_page_size)

        try:
            entity = await self._poke_client.get_pokemon(query)
        except NotFoundError:
            entity = None

        if entity is not None:
            return build_page([build_summary(entity)], 1, 1, limit)

        logger.info(f"No exact match for '{query}', falling back to catalog search")
        matches = await self._poke_client.search_catalog(query)
        items = await self._summarize_all(matches[:limit])
        return build_page(items, len(items), 1, limit)

    # --- Types ---

    async def list_types(self) -> list[TypeDescriptor]:
        types = await self._poke_client.get_types()
        return build_type_descriptors(types)

    async def list_by_type(self, type_name: str, page=None, page_size=None) -> TypePage | None:
        """Slices the type's full membership locally; returns None for an unknown type."""
        page, page_size = self._page_args(page, page_size)
        try:
            members = await self._poke_client.get_type_members(type_name)
        except NotFoundError:
            return None

        offset = (page - 1) * page_size
        items = await self._summarize_all(members[offset:offset + page_size])

        type_key = type_name.strip().lower()
        return TypePage(
            items=items,
            type=type_key,
            type_display_name=display_name(type_key),
            **page_metadata(len(members), page, page_size),
        )
