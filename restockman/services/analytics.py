"""
Stock analytics — read-only reports built on the ledger and the catalog.

No locking, no writes. Statistics are recomputed on every call.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from django.utils import timezone

from restockman.adapters import get_catalog
from restockman.analytics import ProductHistory, analyze
from restockman.conf import restockman_settings
from restockman.exceptions import ValidationError
from restockman.services.alerts import AlertEngine
from restockman.services.guards import check_deadline, persistence_guard
from restockman.services.ledger import StockLedger


@dataclass(frozen=True)
class DashboardSummary:
    """Catalog-wide stock overview."""

    total_products: int
    low_stock_count: int
    out_of_stock_count: int
    recent_changes: list = field(default_factory=list)


@dataclass(frozen=True)
class StockReport:
    """
    Point-in-time stock report.

    start/end bound the events included (None for reports without a
    period). low_stock_count excludes out-of-stock products, which are
    counted in out_of_stock_count.
    """

    generated_at: datetime
    start: datetime | None
    end: datetime | None
    total_products: int
    out_of_stock_count: int
    low_stock_count: int
    average_stock_level: float
    event_count: int
    products: list = field(default_factory=list)
    events: list = field(default_factory=list)


class StockAnalytics:
    """Read-only analytics methods."""

    @classmethod
    def product_history(cls, product_id, as_of=None, deadline=None) -> ProductHistory:
        """
        Full history of a product with derived statistics.

        Args:
            product_id: Catalog product id
            as_of: Closing instant for a still-open stockout (None = now)
            deadline: Abort before reading if already past

        Returns:
            ProductHistory (events most recent first)
        """
        events = StockLedger.history(product_id, deadline=deadline)
        return analyze(events, as_of=as_of)

    @classmethod
    def dashboard(cls, low_stock_threshold: int | None = None, deadline=None) -> DashboardSummary:
        """
        Stock overview across the catalog.

        low_stock_count counts products with stock < low_stock_threshold
        (None = RESTOCKMAN['DEFAULT_THRESHOLD']); out-of-stock products
        are included in it.
        """
        check_deadline(deadline)
        if low_stock_threshold is None:
            low_stock_threshold = restockman_settings.DEFAULT_THRESHOLD

        products = cls._list_products()
        return DashboardSummary(
            total_products=len(products),
            low_stock_count=sum(1 for p in products if p.stock < low_stock_threshold),
            out_of_stock_count=sum(1 for p in products if p.stock == 0),
            recent_changes=StockLedger.recent_changes(deadline=deadline),
        )

    @classmethod
    def stock_report(cls, start: datetime | None = None, end: datetime | None = None,
                     low_stock_threshold: int | None = None, deadline=None) -> StockReport:
        """
        Catalog summary plus the stock events of a period.

        Args:
            start: First instant included
                (None = end - RESTOCKMAN['REPORT_WINDOW_DAYS'] days)
            end: Last instant included (None = now)
            low_stock_threshold: None = RESTOCKMAN['DEFAULT_THRESHOLD']

        Raises:
            ValidationError('INVALID_DATE_RANGE'): start after end
        """
        check_deadline(deadline)
        now = timezone.now()
        if end is None:
            end = now
        if start is None:
            start = end - timedelta(days=restockman_settings.REPORT_WINDOW_DAYS)
        if start > end:
            raise ValidationError('INVALID_DATE_RANGE', start=start, end=end)

        threshold = cls._threshold(low_stock_threshold)
        products = cls._list_products()
        events = StockLedger.events_between(start, end, deadline=deadline)

        return cls._report(products, threshold, now, start=start, end=end, events=events)

    @classmethod
    def low_stock_report(cls, threshold: int | None = None, deadline=None) -> StockReport:
        """
        Report restricted to products with stock < threshold, lowest first.

        Uses one flat threshold for every product (None =
        RESTOCKMAN['DEFAULT_THRESHOLD']); per-product overrides are the
        alert engine's concern. Carries no events.
        """
        check_deadline(deadline)
        threshold = cls._threshold(threshold)
        products = AlertEngine.check_low_stock(cls._list_products(), threshold)
        return cls._report(products, threshold, timezone.now())

    # ══════════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def _threshold(cls, threshold: int | None) -> int:
        if threshold is None:
            return restockman_settings.DEFAULT_THRESHOLD
        return threshold

    @classmethod
    def _list_products(cls) -> list:
        catalog = get_catalog()
        with persistence_guard('READ_FAILED'):
            return list(catalog.list_products())

    @classmethod
    def _report(cls, products, threshold: int, generated_at, start=None, end=None,
                events=None) -> StockReport:
        events = events or []
        total_stock = sum(p.stock for p in products)
        return StockReport(
            generated_at=generated_at,
            start=start,
            end=end,
            total_products=len(products),
            out_of_stock_count=sum(1 for p in products if p.stock == 0),
            low_stock_count=sum(1 for p in products if 0 < p.stock < threshold),
            average_stock_level=total_stock / len(products) if products else 0.0,
            event_count=len(events),
            products=list(products),
            events=events,
        )
