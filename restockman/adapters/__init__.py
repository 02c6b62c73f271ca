"""
Restockman Adapters.

Implementations of protocols for external systems.
"""

from restockman.adapters.catalog import get_catalog, reset_catalog

__all__ = [
    "get_catalog",
    "reset_catalog",
]
