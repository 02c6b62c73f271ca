"""
Restocking alerts — reconcile low-stock alerts against the catalog.

Usage:
    from restockman.services.alerts import AlertEngine

    # On demand (UI button, management command, periodic task)
    result = AlertEngine.reconcile()
    result.alerts   # every active alert, not only the new ones
    result.failed   # [(product_id, error), ...]

    AlertEngine.resolve(alert.pk)
"""

import logging
from dataclasses import dataclass, field

from django.db import IntegrityError, transaction
from django.utils import timezone

from restockman.adapters import get_catalog
from restockman.conf import restockman_settings
from restockman.exceptions import ConflictError, NotFoundError, PersistenceError
from restockman.models.alert import RestockingAlert
from restockman.models.enums import AlertStatus
from restockman.protocols.catalog import ProductSnapshot
from restockman.services.guards import check_deadline, persistence_guard
from restockman.services.thresholds import ThresholdStore

logger = logging.getLogger('restockman')


def product_id_key(product_id) -> tuple:
    """Sort key for product ids: numeric ids by value first, then the rest as text."""
    text = str(product_id)
    if text.isdigit():
        return (0, int(text), text)
    return (1, 0, text)


@dataclass
class ReconcileResult:
    """
    Outcome of one reconciliation pass.

    alerts: full set of active alerts after the pass
    created: alerts created by this pass
    failed: (product_id, error) for products whose alert could not be created
    """

    alerts: list[RestockingAlert] = field(default_factory=list)
    created: list[RestockingAlert] = field(default_factory=list)
    failed: list[tuple[str, Exception]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class AlertEngine:
    """Low-stock detection, alert creation and resolution."""

    @classmethod
    def effective_threshold(cls, product_id, global_default: int | None = None,
                            deadline=None) -> int:
        """Product override if set, otherwise the global default."""
        override = ThresholdStore.get(product_id, deadline=deadline)
        if override is not None:
            return override
        return cls._global_default(global_default)

    @classmethod
    def check_low_stock(cls, products, threshold: int) -> list[ProductSnapshot]:
        """
        Products with stock < threshold, lowest stock first.

        Equal stock is ordered by product id, numerically for numeric
        ids ("9" before "10"), numeric ids before the others.
        """
        return sorted(
            (p for p in products if p.stock < threshold),
            key=lambda p: (p.stock, product_id_key(p.id)),
        )

    @classmethod
    def below_threshold(cls, products=None, global_default: int | None = None,
                        deadline=None) -> list[tuple[ProductSnapshot, int]]:
        """
        Products below their own effective threshold.

        Args:
            products: ProductSnapshots (None = whole catalog)
            global_default: Threshold for products without override
                (None = RESTOCKMAN['DEFAULT_THRESHOLD'])

        Returns:
            (product, effective_threshold) pairs, lowest stock first
        """
        check_deadline(deadline)
        if products is None:
            catalog = get_catalog()
            with persistence_guard('READ_FAILED'):
                products = catalog.list_products()
        products = list(products)

        default = cls._global_default(global_default)
        overrides = ThresholdStore.get_many([p.id for p in products], deadline=deadline)

        pairs = [
            (p, overrides.get(str(p.id), default))
            for p in products
        ]
        return sorted(
            ((p, threshold) for p, threshold in pairs if p.stock < threshold),
            key=lambda pair: (pair[0].stock, product_id_key(pair[0].id)),
        )

    @classmethod
    def reconcile(cls, products=None, global_default: int | None = None,
                  deadline=None) -> ReconcileResult:
        """
        Create missing alerts for products below their effective threshold.

        Existing active alerts are left untouched. Safe to re-run: the
        database allows one active alert per product, so overlapping
        passes converge on a single alert.

        Not atomic across products: a failure creating one alert is
        logged and reported in result.failed, the rest proceed.

        Returns:
            ReconcileResult
        """
        result = ReconcileResult()
        shortages = cls.below_threshold(products, global_default, deadline=deadline)
        already_active = cls._active_product_ids([p.id for p, _ in shortages])

        for product, threshold in shortages:
            if str(product.id) in already_active:
                continue

            try:
                alert = cls._create_alert(product, threshold, deadline=deadline)
            except ConflictError:
                # Another pass created it between our check and insert
                logger.info(
                    "alert.exists",
                    extra={"product_id": product.id},
                )
                continue
            except PersistenceError as exc:
                logger.exception(
                    "alert.create_failed",
                    extra={"product_id": product.id, "code": exc.code},
                )
                result.failed.append((str(product.id), exc))
                continue

            result.created.append(alert)

        result.alerts = cls.active_alerts(deadline=deadline)

        logger.info(
            "alert.reconcile",
            extra={
                "shortages": len(shortages),
                "created": len(result.created),
                "failed": len(result.failed),
                "active": len(result.alerts),
            },
        )
        return result

    @classmethod
    def resolve(cls, alert_id, deadline=None) -> RestockingAlert:
        """
        Mark an alert as resolved.

        Resolving an already-resolved alert is a no-op that returns it
        unchanged (resolved_at keeps the first resolution instant).

        Raises:
            NotFoundError('ALERT_NOT_FOUND'): Unknown alert id
        """
        check_deadline(deadline)

        with persistence_guard('WRITE_FAILED', alert_id=alert_id):
            with transaction.atomic():
                try:
                    alert = RestockingAlert.objects.select_for_update().get(pk=alert_id)
                except (RestockingAlert.DoesNotExist, ValueError, TypeError):
                    raise NotFoundError('ALERT_NOT_FOUND', alert_id=alert_id) from None

                if alert.status == AlertStatus.RESOLVED:
                    return alert

                alert.status = AlertStatus.RESOLVED
                alert.resolved_at = timezone.now()
                alert.save(update_fields=['status', 'resolved_at'])

        logger.info(
            "alert.resolved",
            extra={"alert_id": alert.pk, "product_id": alert.product_id},
        )
        return alert

    @classmethod
    def active_alerts(cls, deadline=None) -> list[RestockingAlert]:
        """All active alerts, most recent first."""
        check_deadline(deadline)
        with persistence_guard('READ_FAILED'):
            return list(RestockingAlert.objects.active().order_by('-created_at', '-id'))

    @classmethod
    def recovered_alerts(cls, global_default: int | None = None,
                         deadline=None) -> list[RestockingAlert]:
        """
        Active alerts whose product no longer needs restocking.

        A product recovers when its stock is back at or above its effective
        threshold, or when it left the catalog. Nothing is resolved here:
        callers pick which ones to resolve().
        """
        alerts = cls.active_alerts(deadline=deadline)
        if not alerts:
            return []

        catalog = get_catalog()
        default = cls._global_default(global_default)
        overrides = ThresholdStore.get_many([a.product_id for a in alerts], deadline=deadline)

        recovered = []
        with persistence_guard('READ_FAILED'):
            for alert in alerts:
                product = catalog.get_product(alert.product_id)
                threshold = overrides.get(alert.product_id, default)
                if product is None or product.stock >= threshold:
                    recovered.append(alert)
        return recovered

    # ══════════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def _global_default(cls, global_default: int | None) -> int:
        if global_default is None:
            return restockman_settings.DEFAULT_THRESHOLD
        return global_default

    @classmethod
    def _active_product_ids(cls, product_ids) -> set[str]:
        """Fast path only; the unique constraint is the real guard."""
        ids = [str(pid) for pid in product_ids]
        if not ids:
            return set()
        with persistence_guard('READ_FAILED'):
            return set(
                RestockingAlert.objects.active()
                .filter(product_id__in=ids)
                .values_list('product_id', flat=True)
            )

    @classmethod
    def _create_alert(cls, product: ProductSnapshot, threshold: int,
                      deadline=None) -> RestockingAlert:
        """
        Insert an active alert snapshotting the product.

        Raises:
            ConflictError('DUPLICATE_ACTIVE_ALERT'): An active alert exists
            PersistenceError: Deadline passed or the insert failed
        """
        check_deadline(deadline)
        try:
            with persistence_guard('WRITE_FAILED', product_id=str(product.id)):
                with transaction.atomic():
                    alert = RestockingAlert.objects.create(
                        product_id=str(product.id),
                        product_name=product.name,
                        current_stock=product.stock,
                        threshold=threshold,
                        status=AlertStatus.ACTIVE,
                    )
        except IntegrityError as exc:
            raise ConflictError('DUPLICATE_ACTIVE_ALERT', product_id=str(product.id)) from exc

        logger.warning(
            "alert.created",
            extra={
                "alert_id": alert.pk,
                "product_id": alert.product_id,
                "stock": alert.current_stock,
                "threshold": alert.threshold,
            },
        )
        return alert
