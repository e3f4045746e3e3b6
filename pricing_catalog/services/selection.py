from pricing_catalog.schemas.catalog import (
    Country,
    Region,
    Service,
    normalize_country_code,
    slugify_region_id,
)
from pricing_catalog.services.catalog_store import CatalogStore
from pricing_catalog.services.queries import find_country, find_region


class CatalogSelection:
    """
    Editor selection state, held as keys and resolved against the store on every read.

    - Selecting a region (or clearing it) clears the selected country
    - A deleted region or country that was selected is cleared
    - A stale key resolves to None rather than to a detached node
    """

    def __init__(self, store: CatalogStore):
        self.store = store
        self.selected_region_id: str | None = None
        self.selected_country_code: str | None = None

    def select_region(self, region_id: str | None) -> None:
        if not region_id or not self._is_selected_region(region_id):
            self.selected_country_code = None
        self.selected_region_id = region_id or None

    def select_country(self, country_code: str | None) -> None:
        self.selected_country_code = country_code or None

    def _is_selected_region(self, region_id: str) -> bool:
        return self.selected_region_id is not None and slugify_region_id(
            region_id
        ) == slugify_region_id(self.selected_region_id)

    @property
    def region(self) -> Region | None:
        if not self.selected_region_id:
            return None
        return find_region(self.store.tree, self.selected_region_id)

    @property
    def country(self) -> Country | None:
        if not self.selected_region_id or not self.selected_country_code:
            return None
        return find_country(self.store.tree, self.selected_region_id, self.selected_country_code)

    @property
    def services(self) -> tuple[Service, ...]:
        country = self.country
        return country.services if country is not None else ()

    def delete_region(self, region_id: str) -> bool:
        deleted = self.store.delete_region(region_id)
        if deleted and self._is_selected_region(region_id):
            self.select_region(None)
        return deleted

    def delete_country(self, region_id: str, country_code: str) -> bool:
        deleted = self.store.delete_country(region_id, country_code)
        if (
            deleted
            and self._is_selected_region(region_id)
            and self.selected_country_code is not None
            and normalize_country_code(country_code)
            == normalize_country_code(self.selected_country_code)
        ):
            self.select_country(None)
        return deleted
