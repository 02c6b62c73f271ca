"""
Threshold store — per-product override of the global low-stock threshold.

set() is an upsert guarded by the unique constraint on product_id:
two concurrent calls never produce two rows.
"""

import logging

from django.db import IntegrityError, transaction
from django.utils import timezone

from restockman.exceptions import ConflictError, ValidationError
from restockman.models.threshold import StockThreshold
from restockman.services.guards import check_deadline, persistence_guard

logger = logging.getLogger('restockman')


class ThresholdStore:
    """Keyed get/set of product thresholds."""

    @classmethod
    def get(cls, product_id, deadline=None) -> int | None:
        """
        Threshold override of a product.

        Returns:
            The override, or None meaning "use the global default"
        """
        check_deadline(deadline)
        with persistence_guard('READ_FAILED', product_id=str(product_id)):
            return (
                StockThreshold.objects
                .filter(product_id=str(product_id))
                .values_list('value', flat=True)
                .first()
            )

    @classmethod
    def get_many(cls, product_ids, deadline=None) -> dict[str, int]:
        """Overrides for several products in one query (missing = no override)."""
        check_deadline(deadline)
        ids = [str(pid) for pid in product_ids]
        if not ids:
            return {}
        with persistence_guard('READ_FAILED'):
            return dict(
                StockThreshold.objects
                .filter(product_id__in=ids)
                .values_list('product_id', 'value')
            )

    @classmethod
    def set(cls, product_id, value, deadline=None) -> StockThreshold:
        """
        Create or update the threshold of a product.

        Raises:
            ValidationError('INVALID_THRESHOLD'): value is not a positive int
            ConflictError('DUPLICATE_THRESHOLD'): insert and update both lost
            PersistenceError('WRITE_FAILED'): The store failed

        Concurrency:
            - Update in place first
            - Insert inside a savepoint when no row exists
            - A uniqueness violation means another caller inserted first:
              fall back to update
        """
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValidationError('INVALID_THRESHOLD', product_id=str(product_id), value=value)

        check_deadline(deadline)
        product_id = str(product_id)

        with persistence_guard('WRITE_FAILED', product_id=product_id):
            with transaction.atomic():
                if not cls._update(product_id, value):
                    try:
                        with transaction.atomic():
                            StockThreshold.objects.create(product_id=product_id, value=value)
                    except IntegrityError as exc:
                        logger.info(
                            "threshold.upsert.race",
                            extra={"product_id": product_id, "value": value},
                        )
                        if not cls._update(product_id, value):
                            raise ConflictError('DUPLICATE_THRESHOLD', product_id=product_id) from exc

                threshold = StockThreshold.objects.get(product_id=product_id)

        logger.info(
            "threshold.set",
            extra={"product_id": product_id, "value": value},
        )
        return threshold

    @classmethod
    def _update(cls, product_id: str, value: int) -> int:
        return StockThreshold.objects.filter(product_id=product_id).update(
            value=value,
            updated_at=timezone.now(),
        )
