import os
import tempfile
from pathlib import Path

# Set environment variables BEFORE any imports that might use settings
_test_db_dir = tempfile.mkdtemp()
_test_db_path = os.path.join(_test_db_dir, "test_pricing_catalog.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_path}"
os.environ["SECRET_KEY"] = "test-secret-key-min-32-characters-long-for-testing"
os.environ["ALGORITHM"] = "HS256"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["CATALOG_EDITOR_ROLES"] = "super_admin,partnership,business"
os.environ["CATALOG_FILE_PATH"] = ""
os.environ["STRICT_NOT_FOUND"] = "false"

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from pricing_catalog.services.access import StaticAccessGuard
from pricing_catalog.services.catalog_store import CatalogStore

ROOT = Path(__file__).resolve().parent.parent


class InMemoryGateway:
    """Gateway double that keeps the document in memory and can be told to fail."""

    def __init__(self, document=None):
        self.document = document
        self.fail_saves = False
        self.load_calls = 0
        self.save_calls = 0

    def load(self):
        self.load_calls += 1
        return self.document

    def save(self, tree):
        self.save_calls += 1
        if self.fail_saves:
            return False
        self.document = tuple(tree)
        return True


class SwitchableGuard:
    """Access guard whose answer can change between calls, like a role downgrade."""

    def __init__(self, allowed: bool = True):
        self.allowed = allowed
        self.calls = 0

    def can_edit(self) -> bool:
        self.calls += 1
        return self.allowed


@pytest.fixture(scope="function")
def session_factory():
    """Create a fresh migrated SQLite database for each test."""
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_db_url = f"sqlite:///{test_db_path}"

    test_engine = create_engine(test_db_url, connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    # Run Alembic migrations to set up the database schema
    alembic_cfg = Config(str(ROOT / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(ROOT / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    command.upgrade(alembic_cfg, "head")

    try:
        yield TestingSessionLocal
    finally:
        test_engine.dispose()
        if os.path.exists(test_db_path):
            os.remove(test_db_path)
        if os.path.exists(temp_db_dir):
            os.rmdir(temp_db_dir)


@pytest.fixture(scope="function")
def make_gateway():
    """Factory for in-memory gateways: ``make_gateway(document=None)``."""
    return InMemoryGateway


@pytest.fixture(scope="function")
def gateway():
    """Gateway holding an empty catalog document."""
    return InMemoryGateway(document=())


@pytest.fixture(scope="function")
def guard():
    return SwitchableGuard(allowed=True)


@pytest.fixture(scope="function")
def store(gateway, guard) -> CatalogStore:
    """A loaded store that starts from an empty catalog and may be edited."""
    catalog_store = CatalogStore(gateway=gateway, access_guard=guard)
    assert catalog_store.load() is True
    return catalog_store


@pytest.fixture(scope="function")
def default_store() -> CatalogStore:
    """A loaded store that started with no stored document (default catalog)."""
    catalog_store = CatalogStore(gateway=InMemoryGateway(), access_guard=StaticAccessGuard(True))
    assert catalog_store.load() is True
    return catalog_store


@pytest.fixture(scope="function")
def sepa_service() -> dict:
    return {
        "id": "sepa",
        "name": "SEPA",
        "type": "bank-payout",
        "currency": "EUR",
        "coverage": "All SEPA banks",
        "transactionLimit": {"min": 1, "max": 1000000},
        "tat": "T+1",
        "feeStructure": {"fixed": 0.25, "percentage": 0, "currency": "EUR"},
    }


@pytest.fixture(scope="function")
def europe_store(store: CatalogStore, sepa_service: dict) -> CatalogStore:
    """Store holding Europe -> Germany -> SEPA."""
    assert store.add_region({"id": "eu", "name": "Europe", "countries": []})
    assert store.add_country("eu", {"code": "DE", "name": "Germany", "services": []})
    assert store.add_service("eu", "DE", sepa_service)
    return store
