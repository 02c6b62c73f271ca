"""
Stock mutations — the single write path for current stock.

The catalog owns current stock and the ledger owns history. Every
mutation updates both inside one transaction, with the product row
locked, so they cannot drift through this path.
"""

import logging

from django.db import transaction

from restockman.adapters import get_catalog
from restockman.exceptions import NotFoundError, ValidationError
from restockman.intents import CatalogEdit, DirectAdjustment
from restockman.models.enums import StockEventType
from restockman.services.guards import check_deadline, persistence_guard
from restockman.services.ledger import StockLedger

logger = logging.getLogger('restockman')


def _is_count(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class StockMutations:
    """Atomic catalog + ledger stock writes."""

    @classmethod
    def apply(cls, intent, deadline=None):
        """
        Apply a stock mutation intent.

        Args:
            intent: DirectAdjustment or CatalogEdit
            deadline: Abort before writing if already past

        Returns:
            The recorded StockEvent, or None when stock did not change

        Raises:
            ValidationError('INVALID_INTENT'): Unknown intent type
            ValidationError('INVALID_EVENT_TYPE'): Unknown event type
            ValidationError('INVALID_STOCK'): new_stock not a non-negative int
            NotFoundError('PRODUCT_NOT_FOUND'): Unknown product
        """
        if not isinstance(intent, (DirectAdjustment, CatalogEdit)):
            raise ValidationError('INVALID_INTENT', intent=type(intent).__name__)

        if intent.event_type not in StockEventType.values:
            raise ValidationError('INVALID_EVENT_TYPE', event_type=intent.event_type)

        if not _is_count(intent.new_stock) or intent.new_stock < 0:
            raise ValidationError(
                'INVALID_STOCK',
                product_id=str(intent.product_id),
                new_stock=intent.new_stock,
            )

        return cls._mutate(
            intent.product_id,
            lambda previous: intent.new_stock,
            event_type=intent.event_type,
            notes=intent.notes,
            actor=intent.actor,
            deadline=deadline,
        )

    @classmethod
    def restock(cls, product_id, quantity: int, notes: str = '', actor=None, deadline=None):
        """
        Stock entry: add quantity to the current stock.

        Raises:
            ValidationError('INVALID_QUANTITY'): quantity not a positive int
        """
        cls._check_quantity(product_id, quantity)
        return cls._mutate(
            product_id,
            lambda previous: previous + quantity,
            event_type=StockEventType.RESTOCK,
            notes=notes,
            actor=actor,
            deadline=deadline,
        )

    @classmethod
    def sell(cls, product_id, quantity: int, notes: str = '', actor=None, deadline=None):
        """
        Stock exit: subtract quantity from the current stock.

        Raises:
            ValidationError('INVALID_QUANTITY'): quantity not a positive int
            ValidationError('INSUFFICIENT_STOCK'): quantity > current stock
        """
        cls._check_quantity(product_id, quantity)

        def remaining(previous):
            if quantity > previous:
                raise ValidationError(
                    'INSUFFICIENT_STOCK',
                    product_id=str(product_id),
                    available=previous,
                    requested=quantity,
                )
            return previous - quantity

        return cls._mutate(
            product_id,
            remaining,
            event_type=StockEventType.SALE,
            notes=notes,
            actor=actor,
            deadline=deadline,
        )

    # ══════════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def _check_quantity(cls, product_id, quantity) -> None:
        if not _is_count(quantity) or quantity <= 0:
            raise ValidationError('INVALID_QUANTITY', product_id=str(product_id), requested=quantity)

    @classmethod
    def _mutate(cls, product_id, compute, event_type, notes='', actor=None, deadline=None):
        """
        Lock product, compute new stock from the locked value, write both sides.

        Concurrency:
            - Runs under transaction.atomic()
            - Product row locked via get_product(for_update=True)
            - A ledger failure rolls back the catalog write
        """
        check_deadline(deadline)
        catalog = get_catalog()
        product_id = str(product_id)

        with persistence_guard('WRITE_FAILED', product_id=product_id):
            with transaction.atomic():
                product = catalog.get_product(product_id, for_update=True)
                if product is None:
                    raise NotFoundError('PRODUCT_NOT_FOUND', product_id=product_id)

                new_stock = compute(product.stock)
                if new_stock == product.stock:
                    return None

                catalog.update_stock(product.id, new_stock)
                event = StockLedger.record_change(
                    product.id,
                    product.stock,
                    new_stock,
                    event_type=event_type,
                    actor=actor,
                    notes=notes,
                )

        logger.info(
            "stock.mutate",
            extra={
                "product_id": product_id,
                "event_type": event_type,
                "previous": product.stock,
                "new": new_stock,
            },
        )
        return event
