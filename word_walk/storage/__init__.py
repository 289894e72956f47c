"""Storage layer for the word catalog."""

from .catalog_repository import CatalogError, CatalogRepository

__all__ = [
    "CatalogError",
    "CatalogRepository",
]
