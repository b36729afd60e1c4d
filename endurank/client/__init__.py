"""Catalog store clients."""

from .store import COLLECTIONS, CatalogStore, InMemoryCatalogStore, MySQLCatalogStore

__all__ = ["COLLECTIONS", "CatalogStore", "InMemoryCatalogStore", "MySQLCatalogStore"]
