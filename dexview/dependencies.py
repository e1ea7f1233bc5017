from fastapi import Depends

from dexview.clients import PokeAPIClient
from dexview.config import Settings, get_settings
from dexview.services import PokemonService

_poke_client = None

def get_poke_client(settings: Settings = Depends(get_settings)) -> PokeAPIClient:
    # One pooled HTTP client per process; it holds connections, not pokemon data
    global _poke_client
    if _poke_client is None:
        _poke_client = PokeAPIClient(
            base_url=settings.pokeapi_base_url,
            timeout=settings.pokeapi_timeout,
            catalog_limit=settings.catalog_limit,
        )
    return _poke_client

async def close_poke_client():
    global _poke_client
    if _poke_client is not None:
        await _poke_client.close()
        _poke_client = None

def get_pokemon_service(
    poke_client: PokeAPIClient = Depends(get_poke_client),
    settings: Settings = Depends(get_settings),
) -> PokemonService:
    return PokemonService(poke_client=poke_client, settings=settings)
