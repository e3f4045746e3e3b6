"""Read-only lookups and search filters over a catalog snapshot.

Lookups resolve nodes by key (region id, country code, service id) and return
``None`` or an empty list when a key is unknown, so callers can hold keys
across mutations and re-resolve them on every read.
"""

from collections.abc import Iterable, Sequence

from pricing_catalog.schemas.catalog import (
    Country,
    Region,
    Service,
    normalize_country_code,
    slugify_region_id,
)


def find_region(tree: Sequence[Region], region_id: str) -> Region | None:
    """Get a region by ID."""
    key = slugify_region_id(region_id)
    return next((region for region in tree if region.id == key), None)


def find_country(tree: Sequence[Region], region_id: str, country_code: str) -> Country | None:
    """Get a country by code within a region."""
    region = find_region(tree, region_id)
    if region is None:
        return None
    key = normalize_country_code(country_code)
    return next((country for country in region.countries if country.code == key), None)


def find_service(
    tree: Sequence[Region], region_id: str, country_code: str, service_id: str
) -> Service | None:
    """Get a service by ID within a country."""
    country = find_country(tree, region_id, country_code)
    if country is None:
        return None
    return next((service for service in country.services if service.id == service_id), None)


def region_ids(tree: Sequence[Region]) -> list[str]:
    return [region.id for region in tree]


def country_codes(tree: Sequence[Region], region_id: str) -> list[str]:
    region = find_region(tree, region_id)
    if region is None:
        return []
    return [country.code for country in region.countries]


def service_ids(tree: Sequence[Region], region_id: str, country_code: str) -> list[str]:
    country = find_country(tree, region_id, country_code)
    if country is None:
        return []
    return [service.id for service in country.services]


def _matches(term: str, *values: str) -> bool:
    needle = term.lower()
    return any(needle in value.lower() for value in values)


def search_regions(regions: Iterable[Region], term: str) -> list[Region]:
    """Filter regions by name. A blank term returns every region."""
    if not term.strip():
        return list(regions)
    return [region for region in regions if _matches(term, region.name)]


def search_countries(countries: Iterable[Country], term: str) -> list[Country]:
    """Filter countries by name or code."""
    if not term.strip():
        return list(countries)
    return [country for country in countries if _matches(term, country.name, country.code)]


def search_services(services: Iterable[Service], term: str) -> list[Service]:
    """Filter services by name, ID, type or currency."""
    if not term.strip():
        return list(services)
    return [
        service
        for service in services
        if _matches(term, service.name, service.id, service.type, service.currency)
    ]
