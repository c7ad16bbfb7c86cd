"""Read-only book catalog component."""

from src.components.book_catalog.models import (
    BookRecord,
    FieldMatch,
    OrPredicate,
    coerce_has_pdf,
)
from src.components.book_catalog.store import CatalogStore, JsonCatalogStore

__all__ = [
    "BookRecord",
    "CatalogStore",
    "FieldMatch",
    "JsonCatalogStore",
    "OrPredicate",
    "coerce_has_pdf",
]
