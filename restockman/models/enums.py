"""
Enums for Restockman models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class StockEventType(models.TextChoices):
    """
    Kind of stock transition recorded in the ledger.

    UPDATE:     Raw catalog edit that happened to change the stock field.
    RESTOCK:    Goods received.
    SALE:       Goods sold.
    ADJUSTMENT: Manual correction (inventory count, breakage).
    """
    UPDATE = 'update', _('Atualização')
    RESTOCK = 'restock', _('Reposição')
    SALE = 'sale', _('Venda')
    ADJUSTMENT = 'adjustment', _('Ajuste')


class AlertStatus(models.TextChoices):
    """Restocking alert lifecycle status (resolution is terminal)."""
    ACTIVE = 'active', _('Ativo')
    RESOLVED = 'resolved', _('Resolvido')
