"""Structural operations on the catalog tree.

Every function takes the current tree and returns a new one. Nodes on the
path to the change are rebuilt by copy; untouched siblings are shared. A
deletion filters the parent collection, so descendants of a removed node are
unreachable afterwards.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from pricing_catalog.errors import DomainValidationError, DuplicateResourceError, NotFoundError
from pricing_catalog.schemas.catalog import (
    Country,
    CountryUpdate,
    Region,
    RegionUpdate,
    Service,
    ServiceUpdate,
)
from pricing_catalog.services.queries import find_country, find_region, find_service

Tree = tuple[Region, ...]

ModelT = TypeVar("ModelT", bound=BaseModel)

# Nested service fields merged key by key on update.
_NESTED_SERVICE_FIELDS = ("transaction_limit", "fee_structure")


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic error into a single readable message."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        message = error["msg"].removeprefix("Value error, ")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)


def validate_model(model_cls: type[ModelT], data: Any) -> ModelT:
    """
    Coerce caller-supplied data (a model instance or a mapping) into ``model_cls``.

    Raises:
        DomainValidationError: If the data breaks a field-level rule
    """
    if isinstance(data, model_cls):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump()
    try:
        return model_cls.model_validate(data)
    except ValidationError as exc:
        raise DomainValidationError(describe_validation_error(exc)) from exc


def _changes(model_cls: type[BaseModel], data: Any) -> dict[str, Any]:
    return validate_model(model_cls, data).model_dump(exclude_unset=True, exclude_none=True)


def _require_region(tree: Tree, region_id: str) -> Region:
    region = find_region(tree, region_id)
    if region is None:
        raise NotFoundError(f'Region "{region_id}" not found')
    return region


def _require_country(tree: Tree, region_id: str, country_code: str) -> tuple[Region, Country]:
    region = _require_region(tree, region_id)
    country = find_country(tree, region_id, country_code)
    if country is None:
        raise NotFoundError(f'Country "{country_code}" not found in region "{region.id}"')
    return region, country


def _replace_region(tree: Tree, region: Region) -> Tree:
    return tuple(region if existing.id == region.id else existing for existing in tree)


def _replace_country(tree: Tree, region: Region, country: Country) -> Tree:
    countries = tuple(
        country if existing.code == country.code else existing for existing in region.countries
    )
    return _replace_region(tree, region.model_copy(update={"countries": countries}))


# ---------------------------------------------------------------------------
# Regions
# ---------------------------------------------------------------------------


def add_region(tree: Tree, region: Region | dict) -> Tree:
    """
    Append a region (with any countries it already carries).

    Raises:
        DomainValidationError: If the region breaks a field-level rule
        DuplicateResourceError: If a region with the same ID exists
    """
    region = validate_model(Region, region)
    if find_region(tree, region.id) is not None:
        raise DuplicateResourceError(f'Region with ID "{region.id}" already exists')
    return (*tree, region)


def update_region(tree: Tree, region_id: str, changes: RegionUpdate | dict) -> Tree:
    """
    Merge changes into a region. The region ID never changes; a ``countries``
    change replaces the whole list and is checked for duplicate codes.

    Raises:
        NotFoundError: If the region doesn't exist
        DomainValidationError: If the merged region is invalid
    """
    region = _require_region(tree, region_id)
    updates = _changes(RegionUpdate, changes)
    updated = validate_model(Region, {**region.model_dump(), **updates, "id": region.id})
    return _replace_region(tree, updated)


def delete_region(tree: Tree, region_id: str) -> Tree:
    """
    Remove a region together with all of its countries and services.

    Raises:
        NotFoundError: If the region doesn't exist
    """
    region = _require_region(tree, region_id)
    return tuple(existing for existing in tree if existing.id != region.id)


# ---------------------------------------------------------------------------
# Countries
# ---------------------------------------------------------------------------


def add_country(tree: Tree, region_id: str, country: Country | dict) -> Tree:
    """
    Append a country to a region. The code is uppercased on the way in.

    Raises:
        NotFoundError: If the region doesn't exist
        DomainValidationError: If the country breaks a field-level rule
        DuplicateResourceError: If the code already exists in the region
    """
    region = _require_region(tree, region_id)
    country = validate_model(Country, country)
    if any(existing.code == country.code for existing in region.countries):
        raise DuplicateResourceError(
            f'Country with code "{country.code}" already exists in this region'
        )
    return _replace_region(
        tree, region.model_copy(update={"countries": (*region.countries, country)})
    )


def update_country(
    tree: Tree, region_id: str, country_code: str, changes: CountryUpdate | dict
) -> Tree:
    """
    Merge changes into a country. The country code never changes; a
    ``services`` change replaces the whole list and is checked for duplicate IDs.

    Raises:
        NotFoundError: If the region or country doesn't exist
        DomainValidationError: If the merged country is invalid
    """
    region, country = _require_country(tree, region_id, country_code)
    updates = _changes(CountryUpdate, changes)
    updated = validate_model(Country, {**country.model_dump(), **updates, "code": country.code})
    return _replace_country(tree, region, updated)


def delete_country(tree: Tree, region_id: str, country_code: str) -> Tree:
    """
    Remove a country and all of its services.

    Raises:
        NotFoundError: If the region or country doesn't exist
    """
    region, country = _require_country(tree, region_id, country_code)
    countries = tuple(existing for existing in region.countries if existing.code != country.code)
    return _replace_region(tree, region.model_copy(update={"countries": countries}))


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


def add_service(tree: Tree, region_id: str, country_code: str, service: Service | dict) -> Tree:
    """
    Append a service to a country.

    Raises:
        NotFoundError: If the region or country doesn't exist
        DomainValidationError: If the service breaks a field-level rule
        DuplicateResourceError: If the service ID already exists in the country
    """
    region, country = _require_country(tree, region_id, country_code)
    service = validate_model(Service, service)
    if any(existing.id == service.id for existing in country.services):
        raise DuplicateResourceError(
            f'Service with ID "{service.id}" already exists in this country'
        )
    updated = country.model_copy(update={"services": (*country.services, service)})
    return _replace_country(tree, region, updated)


def update_service(
    tree: Tree,
    region_id: str,
    country_code: str,
    service_id: str,
    changes: ServiceUpdate | dict,
) -> Tree:
    """
    Field-level merge into a service.

    ``transactionLimit`` and ``feeStructure`` are merged key by key, so
    ``{"transactionLimit": {"max": 5000}}`` keeps the current minimum. The
    merged service is validated as a whole (limit ordering, currency format).

    Raises:
        NotFoundError: If the region, country or service doesn't exist
        DomainValidationError: If the merged service is invalid
    """
    region, country = _require_country(tree, region_id, country_code)
    service = find_service(tree, region_id, country_code, service_id)
    if service is None:
        raise NotFoundError(f'Service "{service_id}" not found in country "{country.code}"')

    current = service.model_dump()
    updates = _changes(ServiceUpdate, changes)
    for field in _NESTED_SERVICE_FIELDS:
        if field in updates:
            updates[field] = {**current[field], **updates[field]}
    updated = validate_model(Service, {**current, **updates, "id": service.id})

    services = tuple(updated if existing.id == service.id else existing for existing in country.services)
    return _replace_country(tree, region, country.model_copy(update={"services": services}))


def delete_service(tree: Tree, region_id: str, country_code: str, service_id: str) -> Tree:
    """
    Remove a single service.

    Raises:
        NotFoundError: If the region, country or service doesn't exist
    """
    region, country = _require_country(tree, region_id, country_code)
    if find_service(tree, region_id, country_code, service_id) is None:
        raise NotFoundError(f'Service "{service_id}" not found in country "{country.code}"')
    services = tuple(existing for existing in country.services if existing.id != service_id)
    return _replace_country(tree, region, country.model_copy(update={"services": services}))
