"""Abstract repository for the product catalog.

Defined in the domain layer so the domain never depends on
infrastructure. Line entry only reads the catalog; writes belong to the
catalog service.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from dms.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Product | None:
        """Return a product by SKU (case-insensitive), or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""
