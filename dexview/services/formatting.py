"""Pure functions that turn raw PokeAPI payloads into view models.

Nothing in here performs I/O, so every rule (unit conversion, language
selection, sentinel defaults, pagination math) can be tested from plain dicts.
"""

import math
import re
from typing import Any, Iterable

from dexview.models import (
    Ability,
    NamedResource,
    PokemonDetail,
    PokemonPage,
    PokemonSummary,
    Stat,
    TypeDescriptor,
)

LANGUAGE = "en"
DEFAULT_COLOR = "gray"
DEFAULT_DESCRIPTION = "No description available."

# Types that exist in the API but have no gameplay members.
IGNORED_TYPES = frozenset({"unknown", "shadow"})

_TRAILING_ID = re.compile(r"/(\d+)/?$")


def display_name(name: str) -> str:
    """Upper-cases the first letter and keeps the rest as-is ('mr-mime' -> 'Mr-mime')."""
    return name[:1].upper() + name[1:]


def coerce_positive_int(value: Any, default: int) -> int:
    """Returns value as a positive int, or default for anything missing, non-numeric or < 1."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def id_from_url(url: str | None) -> int | None:
    if not url:
        return None
    match = _TRAILING_ID.search(url)
    return int(match.group(1)) if match else None


def _first_in_language(entries: Iterable[dict], field: str) -> str | None:
    return next(
        (entry[field] for entry in entries if entry.get("language", {}).get("name") == LANGUAGE),
        None,
    )


def _clean_flavor_text(text: str) -> str:
    # PokeAPI flavor text carries hard line breaks and form feeds from the games
    return " ".join(text.replace("\f", " ").split())


def _type_names(entity: dict) -> list[str]:
    slots = sorted(entity.get("types", []), key=lambda slot: slot.get("slot", 0))
    return [slot["type"]["name"] for slot in slots]


def _artwork_url(sprites: dict) -> str | None:
    return (sprites.get("other") or {}).get("official-artwork", {}).get("front_default")


def build_summary(entity: dict) -> PokemonSummary:
    return PokemonSummary(
        id=entity["id"],
        name=entity["name"],
        display_name=display_name(entity["name"]),
        types=_type_names(entity),
        sprite_url=(entity.get("sprites") or {}).get("front_default"),
    )


def minimal_summary(ref: NamedResource) -> PokemonSummary:
    """Summary built from the list reference alone, used when enrichment failed."""
    return PokemonSummary(
        id=id_from_url(ref.url),
        name=ref.name,
        display_name=display_name(ref.name),
    )


def build_detail(entity: dict, species: dict | None) -> PokemonDetail:
    """
    Merges the pokemon payload with its species payload.
    species is None when the species lookup failed; the sentinel defaults apply then.
    """
    species = species or {}
    sprites = entity.get("sprites") or {}

    description = _first_in_language(species.get("flavor_text_entries", []), "flavor_text")

    return PokemonDetail(
        id=entity["id"],
        name=entity["name"],
        display_name=display_name(entity["name"]),
        types=_type_names(entity),
        # PokeAPI reports decimetres and hectograms
        height=entity.get("height", 0) / 10,
        weight=entity.get("weight", 0) / 10,
        abilities=[
            Ability(name=slot["ability"]["name"], is_hidden=slot.get("is_hidden", False))
            for slot in entity.get("abilities", [])
        ],
        stats=[
            Stat(name=slot["stat"]["name"], base_value=slot["base_stat"])
            for slot in entity.get("stats", [])
        ],
        sprite_url=sprites.get("front_default"),
        artwork_url=_artwork_url(sprites),
        color=(species.get("color") or {}).get("name") or DEFAULT_COLOR,
        description=_clean_flavor_text(description) if description else DEFAULT_DESCRIPTION,
        genus=_first_in_language(species.get("genera", []), "genus"),
    )


def build_type_descriptors(types: Iterable[NamedResource]) -> list[TypeDescriptor]:
    return [
        TypeDescriptor(name=t.name, display_name=display_name(t.name))
        for t in types
        if t.name not in IGNORED_TYPES
    ]


def page_metadata(total_count: int, page: int, page_size: int) -> dict:
    total_pages = math.ceil(total_count / page_size)
    return {
        "total_count": total_count,
        "page": page,
        "page_size": page_size,
        "total_pages": total_pages,
        "has_next": page < total_pages,
        "has_prev": page > 1,
    }


def build_page(items: list[PokemonSummary], total_count: int, page: int, page_size: int) -> PokemonPage:
    return PokemonPage(items=items, **page_metadata(total_count, page, page_size))
