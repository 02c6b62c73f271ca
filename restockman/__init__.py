"""
Django Restockman — Histórico de estoque, análises e alertas de reposição.

Uso:
    from restockman import restock, ValidationError

    restock.sell('42', 3)
    restock.set_threshold('42', 10)
    restock.reconcile().alerts
    restock.product_history('42').statistics
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'restock':
        from restockman.service import Restock
        return Restock
    elif name in ('RestockError', 'ValidationError', 'PersistenceError',
                  'NotFoundError', 'ConflictError'):
        from restockman import exceptions
        return getattr(exceptions, name)
    elif name == 'StockEvent':
        from restockman.models.event import StockEvent
        return StockEvent
    elif name == 'StockThreshold':
        from restockman.models.threshold import StockThreshold
        return StockThreshold
    elif name == 'RestockingAlert':
        from restockman.models.alert import RestockingAlert
        return RestockingAlert
    elif name in ('StockEventType', 'AlertStatus'):
        from restockman.models import enums
        return getattr(enums, name)
    elif name in ('DirectAdjustment', 'CatalogEdit'):
        from restockman import intents
        return getattr(intents, name)
    elif name == 'analyze':
        from restockman.analytics import analyze
        return analyze
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'restock',
    'RestockError',
    'ValidationError',
    'PersistenceError',
    'NotFoundError',
    'ConflictError',
    'StockEvent',
    'StockThreshold',
    'RestockingAlert',
    'StockEventType',
    'AlertStatus',
    'DirectAdjustment',
    'CatalogEdit',
    'analyze',
]

__version__ = '0.1.0'
