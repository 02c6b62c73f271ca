"""
Stock mutation intents — what kind of stock write the caller means.

A stock change reaches the system either as a deliberate adjustment
(stock screen, sale, restock) or as a side effect of editing the product
record. The intent type decides how the change is recorded in the ledger.

    StockMutations.apply(DirectAdjustment('42', 10, StockEventType.RESTOCK))
    StockMutations.apply(CatalogEdit('42', 7, notes='Corrigido no cadastro'))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from restockman.models.enums import StockEventType


@dataclass(frozen=True)
class DirectAdjustment:
    """Deliberate stock change (restock, sale, manual adjustment)."""

    product_id: str
    new_stock: int
    event_type: str = StockEventType.ADJUSTMENT
    notes: str = ''
    actor: Any = None


@dataclass(frozen=True)
class CatalogEdit:
    """Product record edit that changed the stock field; recorded as UPDATE."""

    product_id: str
    new_stock: int
    notes: str = ''
    actor: Any = None

    @property
    def event_type(self) -> str:
        return StockEventType.UPDATE


StockMutationIntent = DirectAdjustment | CatalogEdit
