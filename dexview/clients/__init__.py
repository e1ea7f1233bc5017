"""Client modules for external API communication."""
from .pokeapi_client import PokeAPIClient, NotFoundError, FetchFailure

__all__ = [
    'PokeAPIClient',
    'NotFoundError',
    'FetchFailure',
]
