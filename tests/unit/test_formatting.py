import pytest
from dexview.models import NamedResource
from dexview.services.formatting import (
    DEFAULT_COLOR,
    DEFAULT_DESCRIPTION,
    build_detail,
    build_page,
    build_summary,
    build_type_descriptors,
    coerce_positive_int,
    display_name,
    id_from_url,
    minimal_summary,
)

MOCK_PIKACHU = {
    "id": 25,
    "name": "pikachu",
    "height": 4,
    "weight": 60,
    "types": [{"slot": 1, "type": {"name": "electric"}}],
    "abilities": [
        {"ability": {"name": "static"}, "is_hidden": False},
        {"ability": {"name": "lightning-rod"}, "is_hidden": True},
    ],
    "stats": [
        {"stat": {"name": "hp"}, "base_stat": 35},
        {"stat": {"name": "attack"}, "base_stat": 55},
    ],
    "sprites": {
        "front_default": "sprite.png",
        "other": {"official-artwork": {"front_default": "artwork.png"}},
    },
    "species": {"name": "pikachu"},
}

MOCK_SPECIES = {
    "color": {"name": "yellow"},
    "flavor_text_entries": [
        {"language": {"name": "ja"}, "flavor_text": "ねずみ"},
        {"language": {"name": "en"}, "flavor_text": "When several of\nthese POKéMON\fgather, their"},
        {"language": {"name": "en"}, "flavor_text": "A later English entry."},
    ],
    "genera": [
        {"language": {"name": "fr"}, "genus": "Pokémon Souris"},
        {"language": {"name": "en"}, "genus": "Mouse Pokémon"},
    ],
}


@pytest.mark.parametrize("name,expected", [
    ("pikachu", "Pikachu"),
    ("mr-mime", "Mr-mime"),
    ("ho-oh", "Ho-oh"),
    ("", ""),
])
def test_display_name_capitalizes_first_letter_only(name, expected):
    assert display_name(name) == expected


@pytest.mark.parametrize("value,expected", [
    (None, 7),
    ("", 7),
    ("abc", 7),
    ("0", 7),
    (0, 7),
    (-3, 7),
    ("2", 2),
    (5, 5),
])
def test_coerce_positive_int(value, expected):
    assert coerce_positive_int(value, 7) == expected


def test_id_from_url():
    assert id_from_url("https://pokeapi.co/api/v2/pokemon/25/") == 25
    assert id_from_url("https://pokeapi.co/api/v2/pokemon/10034") == 10034
    assert id_from_url("https://pokeapi.co/api/v2/pokemon/pikachu/") is None
    assert id_from_url(None) is None


def test_build_detail_converts_units_and_merges_species():
    detail = build_detail(MOCK_PIKACHU, MOCK_SPECIES)

    assert detail.id == 25
    assert detail.display_name == "Pikachu"
    assert detail.types == ["electric"]
    # decimetres -> metres, hectograms -> kilograms
    assert detail.height == 0.4
    assert detail.weight == 6.0
    assert [(a.name, a.is_hidden) for a in detail.abilities] == [("static", False), ("lightning-rod", True)]
    assert [(s.name, s.base_value) for s in detail.stats] == [("hp", 35), ("attack", 55)]
    assert detail.sprite_url == "sprite.png"
    assert detail.artwork_url == "artwork.png"
    assert detail.color == "yellow"
    assert detail.genus == "Mouse Pokémon"


def test_build_detail_picks_first_english_description_and_cleans_it():
    detail = build_detail(MOCK_PIKACHU, MOCK_SPECIES)

    assert detail.description == "When several of these POKéMON gather, their"


def test_build_detail_without_species_uses_defaults():
    detail = build_detail(MOCK_PIKACHU, None)

    assert detail.color == DEFAULT_COLOR == "gray"
    assert detail.description == DEFAULT_DESCRIPTION == "No description available."
    assert detail.genus is None
    # Entity-derived fields are unaffected
    assert detail.height == 0.4
    assert len(detail.stats) == 2


def test_build_detail_species_without_english_entries():
    species = {
        "color": {"name": "yellow"},
        "flavor_text_entries": [{"language": {"name": "de"}, "flavor_text": "Deutsch."}],
        "genera": [],
    }

    detail = build_detail(MOCK_PIKACHU, species)

    assert detail.color == "yellow"
    assert detail.description == DEFAULT_DESCRIPTION
    assert detail.genus is None


def test_build_detail_tolerates_missing_artwork():
    entity = {**MOCK_PIKACHU, "sprites": {"front_default": None, "other": None}}

    detail = build_detail(entity, MOCK_SPECIES)

    assert detail.sprite_url is None
    assert detail.artwork_url is None


def test_build_summary_orders_types_by_slot():
    entity = {
        **MOCK_PIKACHU,
        "id": 1,
        "name": "bulbasaur",
        "types": [{"slot": 2, "type": {"name": "poison"}}, {"slot": 1, "type": {"name": "grass"}}],
    }

    summary = build_summary(entity)

    assert summary.types == ["grass", "poison"]
    assert summary.display_name == "Bulbasaur"
    assert summary.sprite_url == "sprite.png"


def test_minimal_summary_from_reference():
    summary = minimal_summary(NamedResource(name="pichu", url="https://pokeapi.co/api/v2/pokemon/172/"))

    assert summary.id == 172
    assert summary.name == "pichu"
    assert summary.display_name == "Pichu"
    assert summary.types == []


def test_build_type_descriptors_excludes_pseudo_types():
    types = [NamedResource(name=n) for n in ("fire", "water", "unknown", "shadow")]

    result = build_type_descriptors(types)

    assert [t.model_dump() for t in result] == [
        {"name": "fire", "display_name": "Fire"},
        {"name": "water", "display_name": "Water"},
    ]


# --- Pagination math ---

@pytest.mark.parametrize("total,page,size,pages,has_next,has_prev", [
    (1000, 1, 20, 50, True, False),
    (100, 3, 10, 10, True, True),
    (100, 10, 10, 10, False, True),
    (3, 1, 2, 2, True, False),
    (0, 1, 20, 0, False, False),
    (21, 2, 20, 2, False, True),
])
def test_build_page_metadata(total, page, size, pages, has_next, has_prev):
    result = build_page([], total, page, size)

    assert result.total_pages == pages
    assert result.has_next is has_next
    assert result.has_prev is has_prev
    assert result.total_count == total


def test_page_serializes_with_camel_case_keys():
    result = build_page([], 1000, 1, 20).model_dump(by_alias=True)

    assert set(result) == {"items", "totalCount", "page", "pageSize", "totalPages", "hasNext", "hasPrev"}
