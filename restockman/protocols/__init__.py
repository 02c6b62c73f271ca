"""
Restockman Protocols.

Defines interfaces for external system integration.
"""

from restockman.protocols.catalog import (
    CatalogBackend,
    ProductSnapshot,
)

__all__ = [
    "CatalogBackend",
    "ProductSnapshot",
]
