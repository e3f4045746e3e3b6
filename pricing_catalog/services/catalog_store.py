"""The catalog store: the single owner of the Region -> Country -> Service tree.

Every mutating operation goes through the same steps:

1. the catalog must be loaded (``CatalogState.READY``),
2. the access guard must allow editing (asked anew on every call),
3. the structural change is computed on a copy of the tree,
4. the new tree replaces the old one and the error slot is cleared.

Domain failures never escape as exceptions. They are recorded in the error
slot (most recent error wins) and the tree is left exactly as it was.
Mutations only change the in-memory tree; ``save_changes`` persists it.
"""

import enum
import logging
from collections.abc import Callable, Sequence

import pricing_catalog.services.catalog as catalog_service
from pricing_catalog.core.config import settings
from pricing_catalog.domain.default_catalog import default_catalog
from pricing_catalog.errors import (
    CatalogNotReadyError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    PersistenceError,
)
from pricing_catalog.schemas.catalog import (
    Country,
    CountryUpdate,
    Region,
    RegionUpdate,
    Service,
    ServiceUpdate,
)
from pricing_catalog.schemas.error import CatalogError
from pricing_catalog.services.access import AccessGuard
from pricing_catalog.services.persistence import PersistenceGateway

logger = logging.getLogger(__name__)

EDIT_PERMISSION_MESSAGE = "You do not have permission to edit pricing data"
RESET_PERMISSION_MESSAGE = "You do not have permission to reset pricing data"
SAVE_FAILED_MESSAGE = "Failed to save pricing data"
RESET_FAILED_MESSAGE = "Failed to reset pricing data"
NOT_READY_MESSAGE = "Pricing data has not been loaded yet"


class CatalogState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


class CatalogStore:
    def __init__(
        self,
        gateway: PersistenceGateway,
        access_guard: AccessGuard,
        default_tree: Callable[[], Sequence[Region]] = default_catalog,
        strict_not_found: bool | None = None,
    ):
        self.gateway = gateway
        self.access_guard = access_guard
        self.default_tree = default_tree
        self.strict_not_found = (
            settings.strict_not_found if strict_not_found is None else strict_not_found
        )

        self._tree: tuple[Region, ...] = ()
        self._state = CatalogState.UNINITIALIZED
        self._last_error: CatalogError | None = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def tree(self) -> tuple[Region, ...]:
        """Current snapshot. Models are frozen; hold keys, not nodes, across mutations."""
        return self._tree

    @property
    def state(self) -> CatalogState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._state is CatalogState.LOADING

    @property
    def can_edit(self) -> bool:
        return self.access_guard.can_edit()

    @property
    def error(self) -> str | None:
        return self._last_error.detail if self._last_error else None

    @property
    def last_error(self) -> CatalogError | None:
        return self._last_error

    def clear_error(self) -> None:
        self._last_error = None

    def _record_error(self, exc: DomainError) -> None:
        self._last_error = CatalogError(detail=str(exc), code=exc.code)

    # ------------------------------------------------------------------
    # Lifecycle and persistence
    # ------------------------------------------------------------------

    def _load_document(self) -> tuple[Region, ...] | None:
        # A gateway that raises is treated like one that found no usable document
        try:
            return self.gateway.load()
        except Exception:
            logger.exception("Pricing data gateway raised while loading")
            return None

    def _persist(self, message: str) -> None:
        """
        Write the current tree through the gateway.

        Raises:
            PersistenceError: If the gateway reports or raises a failure
        """
        try:
            saved = self.gateway.save(self._tree)
        except Exception as e:
            logger.exception("Pricing data gateway raised while saving")
            raise PersistenceError(message) from e
        if not saved:
            raise PersistenceError(message)

    def load(self) -> bool:
        """
        Load the tree through the gateway.

        When there is no usable document the built-in default catalog is used
        and persisted immediately. Returns False if that initial write failed;
        the store is ready either way.
        """
        self._state = CatalogState.LOADING
        try:
            data = self._load_document()
            if data is not None:
                self._tree = tuple(data)
                self._last_error = None
                logger.info("Loaded pricing data with %s regions", len(self._tree))
                return True

            logger.info("No stored pricing data, starting from the default catalog")
            self._tree = tuple(self.default_tree())
            self._persist(SAVE_FAILED_MESSAGE)
            self._last_error = None
            return True
        except PersistenceError as e:
            logger.error("Could not persist the default catalog: %s", e)
            self._record_error(e)
            return False
        finally:
            self._state = CatalogState.READY

    def save_changes(self) -> bool:
        """Persist the whole tree. A failed save leaves the in-memory tree as it is."""
        try:
            self._ensure_ready()
            self._ensure_can_edit(EDIT_PERMISSION_MESSAGE)
            self._persist(SAVE_FAILED_MESSAGE)
        except DomainError as e:
            logger.warning("Pricing data save rejected: %s", e)
            self._record_error(e)
            return False

        self._last_error = None
        logger.info("Saved pricing data with %s regions", len(self._tree))
        return True

    def reset_to_default(self) -> bool:
        """
        Replace the whole tree with the default catalog and persist it.

        The replacement stands even when the write fails; the failure is
        reported through the error slot.
        """
        try:
            self._ensure_ready()
            self._ensure_can_edit(RESET_PERMISSION_MESSAGE)
            self._tree = tuple(self.default_tree())
            self._persist(RESET_FAILED_MESSAGE)
        except DomainError as e:
            logger.warning("Pricing data reset failed: %s", e)
            self._record_error(e)
            return False

        self._last_error = None
        logger.info("Pricing data reset to the default catalog")
        return True

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _ensure_ready(self) -> None:
        if self._state is not CatalogState.READY:
            raise CatalogNotReadyError(NOT_READY_MESSAGE)

    def _ensure_can_edit(self, message: str) -> None:
        if not self.access_guard.can_edit():
            raise ForbiddenError(message)

    def _apply(self, operation: str, change: Callable[..., tuple[Region, ...]], *args) -> bool:
        """Run one structural change behind the readiness and permission checks."""
        try:
            self._ensure_ready()
            self._ensure_can_edit(EDIT_PERMISSION_MESSAGE)
            new_tree = change(self._tree, *args)
        except NotFoundError as e:
            if self.strict_not_found:
                self._record_error(e)
            logger.debug("%s ignored: %s", operation, e)
            return False
        except DomainError as e:
            logger.warning("%s rejected: %s", operation, e)
            self._record_error(e)
            return False

        self._tree = new_tree
        self._last_error = None
        return True

    def add_region(self, region: Region | dict) -> bool:
        return self._apply("add_region", catalog_service.add_region, region)

    def update_region(self, region_id: str, changes: RegionUpdate | dict) -> bool:
        return self._apply("update_region", catalog_service.update_region, region_id, changes)

    def delete_region(self, region_id: str) -> bool:
        """Delete a region and, with it, all of its countries and services."""
        return self._apply("delete_region", catalog_service.delete_region, region_id)

    def add_country(self, region_id: str, country: Country | dict) -> bool:
        return self._apply("add_country", catalog_service.add_country, region_id, country)

    def update_country(
        self, region_id: str, country_code: str, changes: CountryUpdate | dict
    ) -> bool:
        return self._apply(
            "update_country", catalog_service.update_country, region_id, country_code, changes
        )

    def delete_country(self, region_id: str, country_code: str) -> bool:
        """Delete a country and all of its services."""
        return self._apply(
            "delete_country", catalog_service.delete_country, region_id, country_code
        )

    def add_service(self, region_id: str, country_code: str, service: Service | dict) -> bool:
        return self._apply(
            "add_service", catalog_service.add_service, region_id, country_code, service
        )

    def update_service(
        self,
        region_id: str,
        country_code: str,
        service_id: str,
        changes: ServiceUpdate | dict,
    ) -> bool:
        return self._apply(
            "update_service",
            catalog_service.update_service,
            region_id,
            country_code,
            service_id,
            changes,
        )

    def delete_service(self, region_id: str, country_code: str, service_id: str) -> bool:
        return self._apply(
            "delete_service",
            catalog_service.delete_service,
            region_id,
            country_code,
            service_id,
        )
