from pricing_catalog.domain.default_catalog import default_catalog
from pricing_catalog.services.queries import (
    country_codes,
    find_country,
    find_region,
    find_service,
    region_ids,
    search_countries,
    search_regions,
    search_services,
    service_ids,
)


# ============================================================================
# LOOKUP TESTS
# ============================================================================


def test_default_catalog_shape():
    """Test the built-in catalog regions and their order."""
    assert region_ids(default_catalog()) == [
        "europe",
        "north-america",
        "asia",
        "africa",
        "south-america",
        "oceania",
    ]
    assert country_codes(default_catalog(), "oceania") == ["AU", "NZ"]
    assert service_ids(default_catalog(), "north-america", "US") == [
        "bank-payout-us-ach",
        "bank-payout-us-wire",
        "wallet-payout-us-paypal",
    ]


def test_lookups_normalize_keys():
    """Test lookups accept keys in the same forms inserts do."""
    assert find_region(default_catalog(), "North America").id == "north-america"
    assert find_country(default_catalog(), "europe", "gb").name == "United Kingdom"


def test_find_service():
    service = find_service(default_catalog(), "africa", "KE", "mobile-money-ke-mpesa")

    assert service.name == "M-Pesa"
    assert service.type == "mobile-money"
    assert service.fee_structure.percentage == 1.0


def test_lookups_with_unknown_keys():
    """Test unknown keys resolve to None or an empty list."""
    assert find_region(default_catalog(), "antarctica") is None
    assert find_country(default_catalog(), "antarctica", "AQ") is None
    assert find_service(default_catalog(), "europe", "GB", "nope") is None
    assert country_codes(default_catalog(), "antarctica") == []
    assert service_ids(default_catalog(), "europe", "FR") == []


# ============================================================================
# SEARCH TESTS
# ============================================================================


def test_search_regions_by_name():
    names = [region.name for region in search_regions(default_catalog(), "america")]

    assert names == ["North America", "South America"]


def test_search_blank_term_returns_everything():
    assert len(search_regions(default_catalog(), "  ")) == len(default_catalog())


def test_search_countries_by_name_or_code():
    countries = find_region(default_catalog(), "asia").countries

    assert [c.code for c in search_countries(countries, "sing")] == ["SG"]
    assert [c.code for c in search_countries(countries, "in")] == ["IN", "SG"]


def test_search_services_by_any_field():
    services = find_country(default_catalog(), "north-america", "US").services

    assert [s.id for s in search_services(services, "paypal")] == ["wallet-payout-us-paypal"]
    assert [s.id for s in search_services(services, "wallet")] == ["wallet-payout-us-paypal"]
    assert len(search_services(services, "usd")) == 3
    assert [s.name for s in search_services(services, "WIRE")] == ["Wire Transfer"]
