from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


# --- Upstream shapes (Internal Contract) ---

# PokeAPI's {name, url} reference, used by every list endpoint
class NamedResource(BaseModel):
    name: str
    url: str | None = None


class NamedResourceList(BaseModel):
    count: int = 0
    results: list[NamedResource] = Field(default_factory=list)


# --- Public view models ---

# Snake_case in Python, camelCase on the wire
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Ability(CamelModel):
    name: str
    is_hidden: bool = False


class Stat(CamelModel):
    name: str
    base_value: int


# Minimal identity used in list and search contexts.
# id is None and types is empty when per-item enrichment failed.
class PokemonSummary(CamelModel):
    id: int | None = None
    name: str
    display_name: str
    types: list[str] = Field(default_factory=list)
    sprite_url: str | None = None


# Full merged record built from the pokemon and pokemon-species payloads
class PokemonDetail(CamelModel):
    id: int
    name: str
    display_name: str
    types: list[str]
    height: float  # metres
    weight: float  # kilograms
    abilities: list[Ability]
    stats: list[Stat]
    sprite_url: str | None = None
    artwork_url: str | None = None
    color: str
    description: str
    genus: str | None = None


class TypeDescriptor(CamelModel):
    name: str
    display_name: str


class PokemonPage(CamelModel):
    items: list[PokemonSummary]
    total_count: int = Field(ge=0)
    page: int = Field(ge=1)
    page_size: int = Field(ge=1)
    total_pages: int = Field(ge=0)
    has_next: bool
    has_prev: bool


class TypePage(PokemonPage):
    type: str
    type_display_name: str


# --- Response envelope ---

class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    data: T


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
