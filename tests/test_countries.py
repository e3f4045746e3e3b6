from pricing_catalog.errors import DUPLICATE_RESOURCE, VALIDATION_ERROR
from pricing_catalog.services.catalog_store import CatalogStore
from pricing_catalog.services.queries import country_codes, find_country


# ============================================================================
# ADD COUNTRY TESTS
# ============================================================================


def test_add_country_uppercases_code(store: CatalogStore):
    """Test the country code is stored uppercase."""
    store.add_region({"id": "eu", "name": "Europe"})

    assert store.add_country("eu", {"code": "de", "name": "Germany"}) is True

    assert country_codes(store.tree, "eu") == ["DE"]


def test_add_country_duplicate_code_is_rejected(store: CatalogStore):
    """Test a duplicate code within a region is rejected."""
    store.add_region({"id": "eu", "name": "Europe"})
    store.add_country("eu", {"code": "DE", "name": "Germany"})
    before = store.tree

    assert store.add_country("eu", {"code": "de", "name": "Deutschland"}) is False

    assert store.tree == before
    assert store.error == 'Country with code "DE" already exists in this region'
    assert store.last_error.code == DUPLICATE_RESOURCE


def test_same_country_code_allowed_in_different_regions(store: CatalogStore):
    """Test country codes only need to be unique within their region."""
    store.add_region({"id": "eu", "name": "Europe"})
    store.add_region({"id": "emea", "name": "EMEA"})

    assert store.add_country("eu", {"code": "DE", "name": "Germany"})
    assert store.add_country("emea", {"code": "DE", "name": "Germany"})


def test_add_country_invalid_code_is_rejected(store: CatalogStore):
    """Test country codes must be exactly two letters."""
    store.add_region({"id": "eu", "name": "Europe"})

    assert store.add_country("eu", {"code": "DEU", "name": "Germany"}) is False
    assert store.add_country("eu", {"code": "D", "name": "Germany"}) is False

    assert store.tree[0].countries == ()
    assert store.last_error.code == VALIDATION_ERROR


def test_add_country_to_missing_region_is_noop(store: CatalogStore):
    """Test adding a country to an unknown region changes nothing."""
    store.add_region({"id": "eu", "name": "Europe"})
    before = store.tree

    assert store.add_country("asia", {"code": "IN", "name": "India"}) is False
    assert store.tree == before


def test_add_country_preserves_sibling_regions(store: CatalogStore):
    """Test regions not on the changed path are left as they were."""
    store.add_region({"id": "eu", "name": "Europe"})
    store.add_region({"id": "asia", "name": "Asia"})
    asia = store.tree[1]

    store.add_country("eu", {"code": "DE", "name": "Germany"})

    assert store.tree[1] is asia


# ============================================================================
# UPDATE COUNTRY TESTS
# ============================================================================


def test_update_country_name(europe_store: CatalogStore):
    """Test updating a country's name keeps its services."""
    assert europe_store.update_country("eu", "DE", {"name": "Deutschland"})

    country = find_country(europe_store.tree, "eu", "DE")
    assert country.name == "Deutschland"
    assert [service.id for service in country.services] == ["sepa"]


def test_update_country_ignores_code_change(europe_store: CatalogStore):
    """Test the country code cannot be changed through an update."""
    assert europe_store.update_country("eu", "DE", {"code": "FR", "name": "Germany"})

    assert country_codes(europe_store.tree, "eu") == ["DE"]


def test_update_missing_country_is_silent_noop(europe_store: CatalogStore):
    """Test updating an unknown country changes nothing."""
    before = europe_store.tree

    assert europe_store.update_country("eu", "FR", {"name": "France"}) is False
    assert europe_store.tree == before
    assert europe_store.error is None


def test_update_country_replaces_services(europe_store: CatalogStore, sepa_service: dict):
    """Test a services change replaces the country's whole service list."""
    instant = {**sepa_service, "id": "sepa-instant", "name": "SEPA Instant"}

    assert europe_store.update_country("eu", "DE", {"services": [sepa_service, instant]})

    country = find_country(europe_store.tree, "eu", "DE")
    assert [service.id for service in country.services] == ["sepa", "sepa-instant"]
    assert country.name == "Germany"


def test_update_country_duplicate_services_is_rejected(
    europe_store: CatalogStore, sepa_service: dict
):
    """Test a services change carrying duplicate IDs never reaches the tree."""
    before = europe_store.tree

    assert europe_store.update_country("eu", "DE", {"services": [sepa_service, sepa_service]}) is False

    assert europe_store.tree == before
    assert europe_store.last_error.code == VALIDATION_ERROR


# ============================================================================
# DELETE COUNTRY TESTS
# ============================================================================


def test_delete_country_cascades_to_services(europe_store: CatalogStore):
    """Test deleting a country removes it and its services."""
    europe_store.add_country("eu", {"code": "FR", "name": "France"})

    assert europe_store.delete_country("eu", "DE") is True

    assert country_codes(europe_store.tree, "eu") == ["FR"]
    assert find_country(europe_store.tree, "eu", "DE") is None


def test_delete_country_only_in_given_region(store: CatalogStore):
    """Test deletion is scoped to one region."""
    store.add_region({"id": "eu", "name": "Europe"})
    store.add_region({"id": "emea", "name": "EMEA"})
    store.add_country("eu", {"code": "DE", "name": "Germany"})
    store.add_country("emea", {"code": "DE", "name": "Germany"})

    assert store.delete_country("eu", "DE")

    assert country_codes(store.tree, "eu") == []
    assert country_codes(store.tree, "emea") == ["DE"]
