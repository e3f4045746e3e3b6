from sqlalchemy.orm import Session

from pricing_catalog.db.models.catalog_document import CatalogDocument as CatalogDocumentModel


def get_document(db: Session, slot: str) -> CatalogDocumentModel | None:
    """Get the stored catalog document for a slot."""
    return db.query(CatalogDocumentModel).filter(CatalogDocumentModel.slot == slot).first()


def put_document(db: Session, slot: str, payload: str) -> CatalogDocumentModel:
    """Overwrite the document stored under a slot. Pure data access - no business logic."""
    document = get_document(db, slot)
    if document is None:
        document = CatalogDocumentModel(slot=slot, payload=payload)
        db.add(document)
    else:
        document.payload = payload

    db.commit()
    db.refresh(document)
    return document
