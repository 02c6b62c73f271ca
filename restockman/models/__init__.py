"""
Restockman Models.

Core models for restocking:
- StockEvent: Immutable ledger of stock transitions
- StockThreshold: Per-product low-stock threshold override
- RestockingAlert: Low-stock alert with active/resolved lifecycle
"""

from restockman.models.alert import RestockingAlert
from restockman.models.enums import AlertStatus, StockEventType
from restockman.models.event import StockEvent
from restockman.models.threshold import StockThreshold

__all__ = [
    'StockEventType',
    'AlertStatus',
    'StockEvent',
    'StockThreshold',
    'RestockingAlert',
]
