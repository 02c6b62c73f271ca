"""
Restockman configuration.

Usage in settings.py:
    RESTOCKMAN = {
        "CATALOG_BACKEND": "restockman.adapters.django_model.ModelCatalog",
        "CATALOG_MODEL": "catalog.Product",
        "DEFAULT_THRESHOLD": 5,
        "OPEN_STOCKOUT_POLICY": "until_now",
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class RestockmanSettings:
    """Restockman configuration settings."""

    # Catalog backend (dotted path to a CatalogBackend implementation)
    CATALOG_BACKEND: str = "restockman.adapters.django_model.ModelCatalog"

    # Product model for ModelCatalog ("app_label.ModelName")
    CATALOG_MODEL: str = ""
    CATALOG_NAME_FIELD: str = "name"
    CATALOG_STOCK_FIELD: str = "stock"

    # Global low-stock threshold (alert when stock < value)
    DEFAULT_THRESHOLD: int = 5

    # Stockout still open at the end of the history:
    # "until_now" counts it up to the analysis instant, "exclude" drops it
    OPEN_STOCKOUT_POLICY: str = "until_now"

    # Events shown in the dashboard summary
    RECENT_CHANGES_LIMIT: int = 10

    # Stock report window when no start date is given
    REPORT_WINDOW_DAYS: int = 30


def get_restockman_settings() -> RestockmanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "RESTOCKMAN", {})
    return RestockmanSettings(**{
        k: v for k, v in user_settings.items()
        if k in RestockmanSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_restockman_settings(), name)


restockman_settings = _LazySettings()
