"""Persistence gateways for the catalog document.

The whole tree is stored as one JSON array of regions under a single slot.
Gateways never raise for storage problems: ``load`` returns ``None`` when
there is no usable document and ``save`` returns ``False`` when the write
failed. Errors are logged here and reported by the store.
"""

import contextlib
import logging
import os
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import pricing_catalog.repositories.catalog_document as document_repo
from pricing_catalog.core.config import settings
from pricing_catalog.db.base import SessionLocal
from pricing_catalog.schemas.catalog import Catalog, Region

logger = logging.getLogger(__name__)


class PersistenceGateway(Protocol):
    def load(self) -> tuple[Region, ...] | None: ...

    def save(self, tree: Sequence[Region]) -> bool: ...


def dump_catalog(tree: Sequence[Region]) -> str:
    """Serialize a tree to the persisted JSON form (camelCase keys)."""
    return Catalog(tuple(tree)).model_dump_json(by_alias=True)


def parse_catalog(payload: str | bytes) -> tuple[Region, ...]:
    """
    Deserialize and validate a persisted document.

    Raises:
        ValidationError: If the payload is not valid JSON or breaks an invariant
    """
    return Catalog.model_validate_json(payload).root


class SqlCatalogGateway:
    """Stores the document in the ``catalog_documents`` table, one row per slot."""

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        slot: str | None = None,
    ):
        self.session_factory = session_factory
        self.slot = slot or settings.catalog_slot

    def load(self) -> tuple[Region, ...] | None:
        with self.session_factory() as db:
            try:
                document = document_repo.get_document(db, self.slot)
                payload = document.payload if document is not None else None
            except SQLAlchemyError:
                logger.exception("Error loading pricing data from slot %s", self.slot)
                return None

        if payload is None:
            return None
        try:
            return parse_catalog(payload)
        except ValidationError as e:
            logger.error("Stored pricing data in slot %s is unreadable: %s", self.slot, e)
            return None

    def save(self, tree: Sequence[Region]) -> bool:
        try:
            payload = dump_catalog(tree)
        except ValidationError as e:
            logger.error("Refusing to save invalid pricing data: %s", e)
            return False

        with self.session_factory() as db:
            try:
                document_repo.put_document(db, self.slot, payload)
            except SQLAlchemyError:
                db.rollback()
                logger.exception("Error saving pricing data to slot %s", self.slot)
                return False
        return True


class JsonFileCatalogGateway:
    """Stores the document in a JSON file, replaced atomically on every save."""

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)

    def load(self) -> tuple[Region, ...] | None:
        try:
            payload = self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError:
            logger.exception("Error reading pricing data from %s", self.path)
            return None

        try:
            return parse_catalog(payload)
        except ValidationError as e:
            logger.error("Pricing data file %s is unreadable: %s", self.path, e)
            return None

    def save(self, tree: Sequence[Region]) -> bool:
        try:
            payload = dump_catalog(tree)
        except ValidationError as e:
            logger.error("Refusing to save invalid pricing data: %s", e)
            return False

        temp_path = self.path.with_name(f".{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(payload, encoding="utf-8")
            os.replace(temp_path, self.path)
        except OSError:
            logger.exception("Error writing pricing data to %s", self.path)
            with contextlib.suppress(OSError):
                temp_path.unlink(missing_ok=True)
            return False
        return True


def build_gateway() -> PersistenceGateway:
    """Pick the gateway from settings: a JSON file when ``CATALOG_FILE_PATH`` is set, else the database."""
    if settings.catalog_file_path:
        return JsonFileCatalogGateway(settings.catalog_file_path)
    return SqlCatalogGateway()
