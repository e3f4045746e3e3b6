from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from pricing_catalog.core.config import settings


def normalize_database_url(url: str) -> str:
    """Normalize PostgreSQL URL to use psycopg3 driver."""
    if url.startswith("postgresql://") and "+psycopg" not in url:
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


def create_catalog_engine(url: str | None = None):
    """Build an engine for the catalog database.

    SQLite connections get a busy timeout so a locked file fails fast
    instead of blocking the caller.
    """
    database_url = normalize_database_url(url or settings.database_url)
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args = {
            "check_same_thread": False,
            "timeout": settings.database_timeout_seconds,
        }
    return create_engine(database_url, connect_args=connect_args)


engine = create_catalog_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()
