"""
Stock ledger — append-only record of stock transitions.

The ledger records whatever transition it is told happened; validating
the new stock is the catalog's job. No retry is attempted: a blind retry
of record_change() could double-record a stock change.
"""

import logging

from restockman.conf import restockman_settings
from restockman.exceptions import ValidationError
from restockman.models.enums import StockEventType
from restockman.models.event import StockEvent
from restockman.services.guards import check_deadline, persistence_guard

logger = logging.getLogger('restockman')


class StockLedger:
    """Append and read stock events."""

    @classmethod
    def record_change(cls, product_id, previous_stock: int, new_stock: int,
                      event_type=StockEventType.UPDATE, actor=None, notes: str = '',
                      timestamp=None, deadline=None) -> StockEvent:
        """
        Record one stock transition.

        change_amount is derived as new_stock - previous_stock.

        Args:
            product_id: Catalog product id
            previous_stock: Stock before the change
            new_stock: Stock after the change
            event_type: StockEventType value
            actor: User responsible (None = system/anonymous)
            notes: Free text
            timestamp: Event instant (None = now)
            deadline: Abort before writing if already past

        Returns:
            The stored StockEvent (with id)

        Raises:
            ValidationError('INVALID_EVENT_TYPE'): Unknown event_type
            PersistenceError('WRITE_FAILED'): The insert failed
        """
        check_deadline(deadline)

        if event_type not in StockEventType.values:
            raise ValidationError('INVALID_EVENT_TYPE', event_type=event_type)

        event = StockEvent(
            product_id=str(product_id),
            previous_stock=previous_stock,
            new_stock=new_stock,
            event_type=event_type,
            actor=actor,
            notes=notes or '',
        )
        if timestamp is not None:
            event.timestamp = timestamp

        with persistence_guard('WRITE_FAILED', product_id=str(product_id)):
            event.save()

        logger.info(
            "ledger.record",
            extra={
                "event_id": event.pk,
                "product_id": event.product_id,
                "event_type": event.event_type,
                "change": event.change_amount,
            },
        )
        return event

    @classmethod
    def history(cls, product_id, deadline=None) -> list[StockEvent]:
        """
        All events of a product, most recent first.

        Events sharing a timestamp are ordered by write sequence.
        A product without events yields an empty list.

        Raises:
            PersistenceError('READ_FAILED'): The query failed
        """
        check_deadline(deadline)
        with persistence_guard('READ_FAILED', product_id=str(product_id)):
            return list(
                StockEvent.objects
                .filter(product_id=str(product_id))
                .order_by('-timestamp', '-id')
            )

    @classmethod
    def events_between(cls, start, end, deadline=None) -> list[StockEvent]:
        """
        Events of every product with start <= timestamp <= end, most recent first.

        Raises:
            PersistenceError('READ_FAILED'): The query failed
        """
        check_deadline(deadline)
        with persistence_guard('READ_FAILED'):
            return list(
                StockEvent.objects
                .filter(timestamp__range=(start, end))
                .order_by('-timestamp', '-id')
            )

    @classmethod
    def recent_changes(cls, limit: int | None = None, deadline=None) -> list[StockEvent]:
        """Latest events across all products (dashboard feed)."""
        check_deadline(deadline)
        if limit is None:
            limit = restockman_settings.RECENT_CHANGES_LIMIT
        with persistence_guard('READ_FAILED'):
            return list(StockEvent.objects.order_by('-timestamp', '-id')[:limit])
