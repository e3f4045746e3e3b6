from pricing_catalog.db.models.catalog_document import CatalogDocument

__all__ = ["CatalogDocument"]
