from sqlalchemy import Column, DateTime, String, Text, func

from pricing_catalog.db.base import Base


class CatalogDocument(Base):
    __tablename__ = "catalog_documents"

    slot = Column(String(100), primary_key=True)
    payload = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
