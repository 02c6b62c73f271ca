"""
Restocking services — modular organization of restocking operations.

    from restockman.services import StockLedger, StockAnalytics, ThresholdStore, AlertEngine, StockMutations
"""

from restockman.services.alerts import AlertEngine, ReconcileResult
from restockman.services.analytics import DashboardSummary, StockAnalytics, StockReport
from restockman.services.ledger import StockLedger
from restockman.services.mutations import StockMutations
from restockman.services.thresholds import ThresholdStore

__all__ = [
    'StockLedger',
    'StockAnalytics',
    'DashboardSummary',
    'StockReport',
    'ThresholdStore',
    'AlertEngine',
    'ReconcileResult',
    'StockMutations',
]
