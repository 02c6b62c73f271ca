"""
Restock Service — The single public interface for restocking operations.

Usage:
    from restockman import restock, ValidationError

    restock.restock('42', 20)
    restock.set_threshold('42', 10)
    result = restock.reconcile()
    restock.product_history('42').statistics.days_out_of_stock
"""

from restockman.analytics import analyze
from restockman.services.alerts import AlertEngine
from restockman.services.analytics import StockAnalytics
from restockman.services.ledger import StockLedger
from restockman.services.mutations import StockMutations
from restockman.services.thresholds import ThresholdStore


class Restock:
    """
    Single interface for restocking operations.

    Each method delegates to the service class owning the concern:

    - Ledger:     record_change, history, recent_changes, events_between
    - Analytics:  analyze, product_history, dashboard, stock_report,
                  low_stock_report
    - Thresholds: get_threshold, set_threshold
    - Alerts:     effective_threshold, check_low_stock, reconcile,
                  resolve, active_alerts, recovered_alerts
    - Mutations:  apply, restock, sell
    """

    # ══════════════════════════════════════════════════════════════
    # LEDGER
    # ══════════════════════════════════════════════════════════════

    record_change = StockLedger.record_change
    history = StockLedger.history
    recent_changes = StockLedger.recent_changes
    events_between = StockLedger.events_between

    # ══════════════════════════════════════════════════════════════
    # ANALYTICS
    # ══════════════════════════════════════════════════════════════

    analyze = staticmethod(analyze)
    product_history = StockAnalytics.product_history
    dashboard = StockAnalytics.dashboard
    stock_report = StockAnalytics.stock_report
    low_stock_report = StockAnalytics.low_stock_report

    # ══════════════════════════════════════════════════════════════
    # THRESHOLDS
    # ══════════════════════════════════════════════════════════════

    get_threshold = ThresholdStore.get
    set_threshold = ThresholdStore.set

    # ══════════════════════════════════════════════════════════════
    # ALERTS
    # ══════════════════════════════════════════════════════════════

    effective_threshold = AlertEngine.effective_threshold
    check_low_stock = AlertEngine.check_low_stock
    reconcile = AlertEngine.reconcile
    resolve = AlertEngine.resolve
    active_alerts = AlertEngine.active_alerts
    recovered_alerts = AlertEngine.recovered_alerts

    # ══════════════════════════════════════════════════════════════
    # MUTATIONS
    # ══════════════════════════════════════════════════════════════

    apply = StockMutations.apply
    restock = StockMutations.restock
    sell = StockMutations.sell
