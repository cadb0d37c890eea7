import pytest

from app.services.destination_catalog import DestinationCatalog
from app.services.destination_search import parse_limit, search_destinations
from app.utils.errors import CatalogNotLoaded, InvalidRequest, NotFound


def names(destinations):
    return [d.name for d in destinations]


def test_requires_at_least_one_criterion(catalog):
    with pytest.raises(InvalidRequest):
        search_destinations(catalog)
    with pytest.raises(InvalidRequest):
        search_destinations(catalog, name="", region="", country="")


@pytest.mark.parametrize("limit", [0, -1, "0", "abc", "", True])
def test_rejects_invalid_limit(catalog, limit):
    if limit == "":
        # blank means "use the default"
        assert len(search_destinations(catalog, country="Italy", limit=limit)) == 3
        return
    with pytest.raises(InvalidRequest):
        search_destinations(catalog, country="Italy", limit=limit)


def test_parse_limit_defaults():
    assert parse_limit(None) == 5
    assert parse_limit("3") == 3
    assert parse_limit(7) == 7


def test_country_only_search_keeps_catalog_order(catalog):
    assert names(search_destinations(catalog, country="Italy")) == ["Rome", "Florence", "Venice"]


def test_limit_truncates_first_come_first_served(catalog):
    assert names(search_destinations(catalog, country="italy", limit=2)) == ["Rome", "Florence"]


def test_typo_in_name(catalog):
    result = search_destinations(catalog, name="Pariz", limit=1)
    assert names(result) == ["Paris"]


def test_substring_matches_come_in_catalog_order(catalog):
    assert names(search_destinations(catalog, name="Nice")) == ["Venice", "Nice"]


def test_accent_insensitive(catalog):
    assert names(search_destinations(catalog, name="Krakow")) == ["Kraków"]
    assert names(search_destinations(catalog, region="ile-de-france")) == ["Paris"]


def test_fields_are_combined_with_and(catalog):
    assert names(search_destinations(catalog, region="Tuscany", country="Italy")) == ["Florence"]
    with pytest.raises(NotFound):
        search_destinations(catalog, region="Tuscany", country="Spain")


def test_no_match_reports_criteria(catalog):
    with pytest.raises(NotFound) as excinfo:
        search_destinations(catalog, name="Atlantis", limit=3)
    assert excinfo.value.context == {"name": "Atlantis", "region": None, "country": None, "limit": 3}


def test_unloaded_catalog_is_not_an_empty_result():
    with pytest.raises(CatalogNotLoaded):
        search_destinations(None, name="Paris")
    with pytest.raises(CatalogNotLoaded):
        search_destinations(DestinationCatalog([]), name="Paris")
