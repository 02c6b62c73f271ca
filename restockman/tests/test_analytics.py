"""
Tests for the pure analytics engine (no database).
"""

from datetime import timedelta
from types import SimpleNamespace

import pytest

from restockman.analytics import analyze, days_out_of_stock, restock_frequency
from restockman.exceptions import ValidationError
from restockman.models import StockEventType


class TestEmptyHistory:
    """Tests for analyze([])."""

    def test_empty_history_is_all_zero(self):
        """No events: zero statistics and an empty event list."""
        history = analyze([])

        assert history.events == []
        assert history.statistics.average_stock_level == 0
        assert history.statistics.restock_frequency == 0
        assert history.statistics.stock_turnover == 0
        assert history.statistics.days_out_of_stock == 0

    def test_empty_history_has_no_restock_frequency(self):
        """Restock frequency is reported as not computable."""
        assert not analyze([]).statistics.has_restock_frequency


class TestScenario:
    """Restock day 1, sales day 2 and 3 (to zero), restock day 6."""

    def test_average_stock_level(self, scenario_b):
        """Mean of new_stock across all events."""
        stats = analyze(scenario_b).statistics

        assert stats.average_stock_level == pytest.approx(7.5)

    def test_restock_frequency(self, scenario_b):
        """Five days between the two restocks."""
        stats = analyze(scenario_b).statistics

        assert stats.restock_frequency == pytest.approx(5.0)
        assert stats.has_restock_frequency

    def test_stock_turnover(self, scenario_b):
        """Units sold (10) over average stock level."""
        stats = analyze(scenario_b).statistics

        assert stats.stock_turnover == pytest.approx(10 / 7.5)

    def test_days_out_of_stock(self, scenario_b):
        """Out of stock from day 3 until the restock on day 6."""
        stats = analyze(scenario_b).statistics

        assert stats.days_out_of_stock == pytest.approx(3.0)

    def test_events_kept_in_given_order(self, scenario_b):
        """History returns the events exactly as supplied."""
        assert analyze(scenario_b).events == scenario_b

    def test_as_dict(self, scenario_b):
        """Statistics serialize to a plain dict."""
        data = analyze(scenario_b).statistics.as_dict()

        assert data['restock_frequency'] == pytest.approx(5.0)
        assert data['restock_count'] == 2


class TestRestockFrequency:
    """Tests for restock cadence."""

    def test_single_restock_not_computable(self, event, day):
        """One restock gives frequency 0 (N/A)."""
        stats = analyze([event(StockEventType.RESTOCK, 0, 10, day(1))]).statistics

        assert stats.restock_frequency == 0
        assert not stats.has_restock_frequency

    def test_average_of_consecutive_gaps(self, event, day):
        """Gaps of 6 and 3 days average to 4.5."""
        restocks = [
            event(StockEventType.RESTOCK, 0, 10, day(10)),
            event(StockEventType.RESTOCK, 0, 10, day(4)),
            event(StockEventType.RESTOCK, 0, 10, day(1)),
        ]

        assert restock_frequency(restocks) == pytest.approx(4.5)

    def test_order_independent(self, event, day):
        """Input order does not change the result."""
        restocks = [
            event(StockEventType.RESTOCK, 0, 10, day(1)),
            event(StockEventType.RESTOCK, 0, 10, day(10)),
            event(StockEventType.RESTOCK, 0, 10, day(4)),
        ]

        assert restock_frequency(restocks) == pytest.approx(4.5)

    def test_other_event_types_ignored(self, event, day):
        """Adjustments that raise stock are not restocks."""
        events = [
            event(StockEventType.ADJUSTMENT, 0, 10, day(5)),
            event(StockEventType.RESTOCK, 0, 10, day(1)),
        ]

        assert analyze(events).statistics.restock_frequency == 0


class TestStockTurnover:
    """Tests for turnover."""

    def test_zero_average_gives_zero_turnover(self, event, day):
        """No division by zero when every event ends at zero stock."""
        events = [event(StockEventType.SALE, 3, 0, day(1))]

        assert analyze(events, as_of=day(1)).statistics.stock_turnover == 0

    def test_only_sales_count(self, event, day):
        """Adjustments downwards are not sales."""
        events = [
            event(StockEventType.ADJUSTMENT, 8, 4, day(2)),
            event(StockEventType.SALE, 10, 8, day(1)),
        ]
        stats = analyze(events).statistics

        assert stats.stock_turnover == pytest.approx(2 / 6)


class TestDaysOutOfStock:
    """Tests for stockout duration (forward-in-time search)."""

    def test_searches_forward_in_time(self, event, day):
        """Recovery is the next positive event after the zero, not before."""
        events = [
            event(StockEventType.RESTOCK, 0, 8, day(5)),
            event(StockEventType.SALE, 10, 0, day(2)),
            event(StockEventType.RESTOCK, 0, 10, day(1)),
        ]

        assert days_out_of_stock(events) == pytest.approx(3.0)

    def test_consecutive_zero_events_counted_once(self, event, day):
        """A second zero inside an open stockout does not restart it."""
        events = [
            event(StockEventType.RESTOCK, 0, 10, day(4)),
            event(StockEventType.ADJUSTMENT, 0, 0, day(2)),
            event(StockEventType.SALE, 5, 0, day(1)),
        ]

        assert days_out_of_stock(events) == pytest.approx(3.0)

    def test_two_separate_stockouts(self, event, day):
        """Separate stockouts add up."""
        events = [
            event(StockEventType.RESTOCK, 0, 5, day(10)),
            event(StockEventType.SALE, 5, 0, day(8)),
            event(StockEventType.RESTOCK, 0, 5, day(3)),
            event(StockEventType.SALE, 5, 0, day(2)),
        ]

        assert days_out_of_stock(events) == pytest.approx(3.0)

    def test_fractional_days(self, event, day):
        """Durations are not rounded."""
        events = [
            event(StockEventType.RESTOCK, 0, 5, day(1, hours=12)),
            event(StockEventType.SALE, 5, 0, day(1)),
        ]

        assert days_out_of_stock(events) == pytest.approx(0.5)

    def test_open_stockout_counted_until_now(self, event, day):
        """Still out of stock: counted up to as_of by default."""
        events = [event(StockEventType.SALE, 5, 0, day(1))]
        stats = analyze(events, as_of=day(3)).statistics

        assert stats.days_out_of_stock == pytest.approx(2.0)

    def test_open_stockout_excluded(self, event, day):
        """Policy 'exclude' drops the open interval."""
        events = [event(StockEventType.SALE, 5, 0, day(1))]
        stats = analyze(events, as_of=day(3), open_stockout_policy='exclude').statistics

        assert stats.days_out_of_stock == 0

    def test_policy_from_settings(self, event, day, settings):
        """Default policy comes from RESTOCKMAN settings."""
        settings.RESTOCKMAN = {**settings.RESTOCKMAN, 'OPEN_STOCKOUT_POLICY': 'exclude'}
        events = [event(StockEventType.SALE, 5, 0, day(1))]

        assert analyze(events, as_of=day(3)).statistics.days_out_of_stock == 0

    def test_unknown_policy_rejected(self, event, day):
        """Unknown policy raises ValidationError."""
        with pytest.raises(ValidationError) as exc:
            analyze([event(StockEventType.SALE, 5, 0, day(1))], open_stockout_policy='forever')

        assert exc.value.code == 'INVALID_POLICY'

    def test_same_timestamp_ordered_by_sequence(self, event, day):
        """Equal timestamps fall back to write order (id)."""
        zero = event(StockEventType.SALE, 5, 0, day(1))
        refill = event(StockEventType.RESTOCK, 0, 10, day(1))

        assert days_out_of_stock([refill, zero]) == 0

    def test_later_sequence_zero_stays_open(self, event, day):
        """Zero written after the refill at the same instant is an open stockout."""
        refill = event(StockEventType.RESTOCK, 0, 10, day(1))
        zero = event(StockEventType.SALE, 10, 0, day(1))

        assert days_out_of_stock([zero, refill], as_of=day(2)) == pytest.approx(1.0)
        assert days_out_of_stock([zero, refill], include_open=False) == 0


class TestDuckTypedEvents:
    """analyze() accepts any object with the event attributes."""

    def test_plain_objects(self, day):
        """Missing change_amount and id are derived/defaulted."""
        events = [
            SimpleNamespace(
                event_type='sale', previous_stock=4, new_stock=1,
                timestamp=day(1),
            ),
        ]
        stats = analyze(events, as_of=day(1) + timedelta(hours=1)).statistics

        assert stats.average_stock_level == 1
        assert stats.stock_turnover == pytest.approx(3.0)


class TestStockoutMerging:
    """A zero-to-zero event while out of stock extends the same stockout."""

    def test_zero_adjustment_inside_stockout(self, event, day):
        """Out from day 3 to day 6: three days, not five."""
        events = [
            event(StockEventType.RESTOCK, 0, 5, day(6)),
            event(StockEventType.ADJUSTMENT, 0, 0, day(4)),
            event(StockEventType.SALE, 5, 0, day(3)),
            event(StockEventType.RESTOCK, 0, 5, day(1)),
        ]

        assert analyze(events).statistics.days_out_of_stock == pytest.approx(3.0)
