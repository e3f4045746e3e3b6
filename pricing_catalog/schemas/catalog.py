"""Pricing catalog schemas: Region -> Country -> Service.

All catalog models are frozen. Sequences are tuples so a snapshot handed to a
caller can never be edited behind the store's back; every change goes through
``model_copy``/``model_validate`` and produces new objects.

JSON uses the camelCase names of the persisted document (``transactionLimit``,
``feeStructure``); Python code uses the snake_case attribute names. Both are
accepted on input.
"""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator, model_validator

ServiceType = Literal["bank-payout", "wallet-payout", "mobile-money", "card-payment"]

CURRENCY_PATTERN = r"^[A-Z]{3}$"
COUNTRY_CODE_PATTERN = r"^[A-Z]{2}$"
SERVICE_ID_PATTERN = r"^[a-z0-9-]+$"


def slugify_region_id(value: str) -> str:
    """URL-friendly region key (``North America`` -> ``north-america``)."""
    return re.sub(r"\s+", "-", value.strip().lower())


def normalize_country_code(value: str) -> str:
    return value.strip().upper()


def _find_duplicates(keys) -> list[str]:
    seen: set[str] = set()
    duplicates: list[str] = []
    for key in keys:
        if key in seen and key not in duplicates:
            duplicates.append(key)
        seen.add(key)
    return duplicates


class CatalogModel(BaseModel):
    model_config = ConfigDict(
        frozen=True, populate_by_name=True, str_strip_whitespace=True, allow_inf_nan=False
    )


class TransactionLimit(CatalogModel):
    min: float = Field(..., gt=0)
    max: float = Field(..., gt=0)

    @model_validator(mode="after")
    def check_range(self) -> "TransactionLimit":
        if self.min >= self.max:
            raise ValueError("Maximum transaction must be greater than minimum transaction")
        return self


class FeeStructure(CatalogModel):
    fixed: float = Field(..., ge=0)
    percentage: float = Field(..., ge=0)
    currency: str = Field(..., pattern=CURRENCY_PATTERN)


class Service(CatalogModel):
    id: str = Field(..., min_length=1, pattern=SERVICE_ID_PATTERN)
    name: str = Field(..., min_length=1)
    type: ServiceType
    currency: str = Field(..., pattern=CURRENCY_PATTERN)
    coverage: str = Field(..., min_length=1)
    transaction_limit: TransactionLimit = Field(..., alias="transactionLimit")
    tat: str = Field(..., min_length=1)
    fee_structure: FeeStructure = Field(..., alias="feeStructure")


class Country(CatalogModel):
    code: str = Field(..., pattern=COUNTRY_CODE_PATTERN)
    name: str = Field(..., min_length=1)
    services: tuple[Service, ...] = ()

    @field_validator("code", mode="before")
    @classmethod
    def normalize_code(cls, v):
        """Country codes are stored uppercase (``de`` -> ``DE``)."""
        if isinstance(v, str):
            return normalize_country_code(v)
        return v

    @model_validator(mode="after")
    def check_unique_services(self) -> "Country":
        duplicates = _find_duplicates(service.id for service in self.services)
        if duplicates:
            raise ValueError(f"Duplicate service IDs in country {self.code}: {', '.join(duplicates)}")
        return self


class Region(CatalogModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    countries: tuple[Country, ...] = ()

    @field_validator("id", mode="before")
    @classmethod
    def slugify_id(cls, v):
        """Region IDs are URL-friendly slugs (``North America`` -> ``north-america``)."""
        if isinstance(v, str):
            return slugify_region_id(v)
        return v

    @model_validator(mode="after")
    def check_unique_countries(self) -> "Region":
        duplicates = _find_duplicates(country.code for country in self.countries)
        if duplicates:
            raise ValueError(f"Duplicate country codes in region {self.id}: {', '.join(duplicates)}")
        return self


class Catalog(RootModel[tuple[Region, ...]]):
    """The whole tree, as persisted: a JSON array of regions."""

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_unique_regions(self) -> "Catalog":
        duplicates = _find_duplicates(region.id for region in self.root)
        if duplicates:
            raise ValueError(f"Duplicate region IDs: {', '.join(duplicates)}")
        return self


# Partial updates. Keys that identify a node (region id, country code,
# service id) are not declared here, so they are dropped on the way in.


class UpdateModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True, str_strip_whitespace=True, allow_inf_nan=False, extra="ignore"
    )


class RegionUpdate(UpdateModel):
    name: str | None = None
    countries: tuple[Country, ...] | None = None


class CountryUpdate(UpdateModel):
    name: str | None = None
    services: tuple[Service, ...] | None = None


class TransactionLimitUpdate(UpdateModel):
    min: float | None = None
    max: float | None = None


class FeeStructureUpdate(UpdateModel):
    fixed: float | None = None
    percentage: float | None = None
    currency: str | None = None


class ServiceUpdate(UpdateModel):
    name: str | None = None
    type: ServiceType | None = None
    currency: str | None = None
    coverage: str | None = None
    transaction_limit: TransactionLimitUpdate | None = Field(None, alias="transactionLimit")
    tat: str | None = None
    fee_structure: FeeStructureUpdate | None = Field(None, alias="feeStructure")
