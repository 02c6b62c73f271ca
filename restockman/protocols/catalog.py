"""
Catalog Protocol — Interface for the product catalog.

Restockman defines this protocol; the host project's catalog implements it.
The catalog owns the authoritative current stock; Restockman only reads it
(alerts, analytics) and updates it through StockMutations, together with
the ledger, in one transaction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class ProductSnapshot:
    """Minimal product fields consumed by Restockman."""

    id: str
    name: str
    stock: int


@runtime_checkable
class CatalogBackend(Protocol):
    """
    Protocol for catalog access.

    Implementations should provide methods to:
    - Fetch one product (optionally row-locked for a stock write)
    - List all products
    - Write a new stock value
    """

    def get_product(self, product_id: str, for_update: bool = False) -> ProductSnapshot | None:
        """
        Get a product snapshot.

        Args:
            product_id: Product identifier
            for_update: Lock the row until the surrounding transaction ends

        Returns:
            ProductSnapshot or None if not found
        """
        ...

    def list_products(self) -> list[ProductSnapshot]:
        """
        List all products.

        Returns:
            List of ProductSnapshot
        """
        ...

    def update_stock(self, product_id: str, new_stock: int) -> None:
        """
        Write the current stock of a product.

        Raises:
            NotFoundError: If the product does not exist
        """
        ...
