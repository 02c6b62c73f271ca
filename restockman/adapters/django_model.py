"""
Django Model Catalog — CatalogBackend over any Django product model.

The model needs a primary key, a name field and an integer stock field.
Field names are configurable:

    RESTOCKMAN = {
        "CATALOG_MODEL": "catalog.Product",
        "CATALOG_NAME_FIELD": "name",
        "CATALOG_STOCK_FIELD": "stock",
    }
"""

from __future__ import annotations

from django.apps import apps
from django.core.exceptions import ImproperlyConfigured
from django.core.exceptions import ValidationError as DjangoValidationError

from restockman.conf import restockman_settings
from restockman.exceptions import NotFoundError
from restockman.protocols.catalog import ProductSnapshot


class ModelCatalog:
    """
    Catalog backed by a Django model in the host project.

    Product ids are exposed as str(pk). get_product(for_update=True) uses
    select_for_update(), so callers must be inside transaction.atomic().
    """

    def __init__(self, model=None, name_field: str | None = None,
                 stock_field: str | None = None):
        model = model or restockman_settings.CATALOG_MODEL
        if not model:
            raise ImproperlyConfigured(
                "RESTOCKMAN['CATALOG_MODEL'] must be configured for ModelCatalog. "
                "Example: 'catalog.Product'"
            )
        if isinstance(model, str):
            try:
                model = apps.get_model(model)
            except (LookupError, ValueError) as e:
                raise ImproperlyConfigured(f"Unknown catalog model '{model}': {e}") from e

        self.model = model
        self.name_field = name_field or restockman_settings.CATALOG_NAME_FIELD
        self.stock_field = stock_field or restockman_settings.CATALOG_STOCK_FIELD

    def get_product(self, product_id: str, for_update: bool = False) -> ProductSnapshot | None:
        qs = self.model._default_manager.all()
        if for_update:
            qs = qs.select_for_update()
        try:
            obj = qs.filter(pk=product_id).first()
        except (ValueError, TypeError, DjangoValidationError):
            # Id not coercible to the pk type: cannot exist
            return None
        return self._snapshot(obj) if obj is not None else None

    def list_products(self) -> list[ProductSnapshot]:
        return [
            self._snapshot(obj)
            for obj in self.model._default_manager.order_by('pk')
        ]

    def update_stock(self, product_id: str, new_stock: int) -> None:
        updated = self.model._default_manager.filter(pk=product_id).update(
            **{self.stock_field: new_stock}
        )
        if not updated:
            raise NotFoundError('PRODUCT_NOT_FOUND', product_id=product_id)

    def _snapshot(self, obj) -> ProductSnapshot:
        return ProductSnapshot(
            id=str(obj.pk),
            name=str(getattr(obj, self.name_field)),
            stock=int(getattr(obj, self.stock_field)),
        )
