"""
Stock analytics — isolated, testable, pure.

Recomputes summary statistics from a product's full event history on
every call; nothing is persisted. Works with StockEvent instances or any
object exposing event_type, new_stock, change_amount and timestamp
(an id attribute, when present, breaks timestamp ties).

Examples:
    - Restocked on day 1 and day 6: restock_frequency = 5.0
    - Hit zero on day 3, restocked on day 6: days_out_of_stock = 3.0
    - Sold 10 units with average stock 7.5: stock_turnover = 1.33
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Sequence

from django.utils import timezone

from restockman.conf import restockman_settings
from restockman.exceptions import ValidationError
from restockman.models.enums import StockEventType

SECONDS_PER_DAY = 86400

UNTIL_NOW = 'until_now'
EXCLUDE = 'exclude'
OPEN_STOCKOUT_POLICIES = (UNTIL_NOW, EXCLUDE)


@dataclass(frozen=True)
class StockStatistics:
    """
    Summary statistics of one product's history.

    restock_frequency is 0 when fewer than two restocks exist; that value
    means "not computable" and must be shown as N/A, never as "0 days".
    """

    average_stock_level: float = 0.0
    restock_frequency: float = 0.0
    stock_turnover: float = 0.0
    days_out_of_stock: float = 0.0
    restock_count: int = 0

    @property
    def has_restock_frequency(self) -> bool:
        return self.restock_count >= 2

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProductHistory:
    """Events (most recent first) plus statistics derived from them."""

    events: list = field(default_factory=list)
    statistics: StockStatistics = field(default_factory=StockStatistics)


def analyze(events: Sequence, as_of: datetime | None = None,
            open_stockout_policy: str | None = None) -> ProductHistory:
    """
    Compute statistics over a product's events.

    Args:
        events: Events ordered most recent first (empty is valid)
        as_of: Instant closing a stockout still open at the end of the
            history (None = now)
        open_stockout_policy: 'until_now' or 'exclude'
            (None = RESTOCKMAN['OPEN_STOCKOUT_POLICY'])

    Returns:
        ProductHistory with the events as given and their statistics
    """
    events = list(events)
    if not events:
        return ProductHistory()

    policy = open_stockout_policy or restockman_settings.OPEN_STOCKOUT_POLICY
    if policy not in OPEN_STOCKOUT_POLICIES:
        raise ValidationError('INVALID_POLICY', policy=policy)

    average = sum(e.new_stock for e in events) / len(events)

    restocks = [e for e in events if e.event_type == StockEventType.RESTOCK]
    total_sold = sum(
        abs(_change_amount(e)) for e in events
        if e.event_type == StockEventType.SALE
    )

    return ProductHistory(
        events=events,
        statistics=StockStatistics(
            average_stock_level=average,
            restock_frequency=restock_frequency(restocks),
            stock_turnover=total_sold / average if average else 0.0,
            days_out_of_stock=days_out_of_stock(
                events,
                as_of=as_of,
                include_open=policy == UNTIL_NOW,
            ),
            restock_count=len(restocks),
        ),
    )


def restock_frequency(restocks: Sequence) -> float:
    """
    Average days between consecutive restocks.

    Returns 0.0 when fewer than two restocks exist.
    """
    if len(restocks) < 2:
        return 0.0

    ordered = sorted(restocks, key=_chronological_key, reverse=True)
    total_days = sum(
        _days_between(ordered[i].timestamp, ordered[i + 1].timestamp)
        for i in range(len(ordered) - 1)
    )
    return total_days / (len(ordered) - 1)


def days_out_of_stock(events: Sequence, as_of: datetime | None = None,
                      include_open: bool = True) -> float:
    """
    Total days spent at zero stock.

    Scans forward in time: a stockout opens at the first event reaching
    zero and closes at the first later event with positive stock. Further
    zero events inside an open stockout do not reopen it.
    """
    total = 0.0
    opened_at = None

    for event in sorted(events, key=_chronological_key):
        if event.new_stock == 0:
            if opened_at is None:
                opened_at = event.timestamp
        elif event.new_stock > 0 and opened_at is not None:
            total += _days_between(event.timestamp, opened_at)
            opened_at = None

    if opened_at is not None and include_open:
        end = as_of or timezone.now()
        total += max(_days_between(end, opened_at), 0.0)

    return total


# ══════════════════════════════════════════════════════════════
# INTERNALS
# ══════════════════════════════════════════════════════════════

def _chronological_key(event):
    return (event.timestamp, getattr(event, 'id', None) or 0)


def _days_between(later: datetime, earlier: datetime) -> float:
    return (later - earlier).total_seconds() / SECONDS_PER_DAY


def _change_amount(event) -> int:
    change = getattr(event, 'change_amount', None)
    if change is None:
        change = event.new_stock - event.previous_stock
    return change
