"""
Tests for stock mutations (catalog + ledger in one transaction).
"""

from datetime import timedelta

import pytest
from django.utils import timezone

from restockman.exceptions import NotFoundError, PersistenceError, ValidationError
from restockman.intents import CatalogEdit, DirectAdjustment
from restockman.models import StockEvent, StockEventType
from restockman.services import StockLedger, StockMutations


pytestmark = pytest.mark.django_db


class TestApply:
    """Tests for StockMutations.apply()."""

    def test_direct_adjustment(self, product, user):
        """Catalog stock and ledger move together."""
        pid = str(product.pk)

        event = StockMutations.apply(
            DirectAdjustment(pid, 12, StockEventType.ADJUSTMENT, notes='Inventário', actor=user)
        )

        product.refresh_from_db()
        assert product.stock == 12
        assert event.product_id == pid
        assert event.previous_stock == 20
        assert event.new_stock == 12
        assert event.change_amount == -8
        assert event.event_type == StockEventType.ADJUSTMENT
        assert event.actor == user
        assert event.notes == 'Inventário'

    def test_direct_adjustment_restock_type(self, low_product):
        """Caller chooses the event type of a direct adjustment."""
        event = StockMutations.apply(
            DirectAdjustment(str(low_product.pk), 30, StockEventType.RESTOCK)
        )

        assert event.event_type == StockEventType.RESTOCK

    def test_catalog_edit_recorded_as_update(self, product):
        """Product record edits are recorded as 'update'."""
        event = StockMutations.apply(CatalogEdit(str(product.pk), 25, notes='Cadastro'))

        product.refresh_from_db()
        assert product.stock == 25
        assert event.event_type == StockEventType.UPDATE
        assert event.change_amount == 5

    def test_unchanged_stock_records_nothing(self, product):
        """Same stock: no write, no event."""
        assert StockMutations.apply(CatalogEdit(str(product.pk), 20)) is None
        assert not StockEvent.objects.exists()

    @pytest.mark.parametrize('new_stock', [-1, 2.5, '10', None, True])
    def test_invalid_stock(self, product, new_stock):
        """new_stock must be a non-negative integer."""
        with pytest.raises(ValidationError) as exc:
            StockMutations.apply(DirectAdjustment(str(product.pk), new_stock))

        assert exc.value.code == 'INVALID_STOCK'
        product.refresh_from_db()
        assert product.stock == 20

    def test_invalid_event_type(self, product):
        """Unknown event type is rejected before any write."""
        with pytest.raises(ValidationError) as exc:
            StockMutations.apply(DirectAdjustment(str(product.pk), 3, event_type='theft'))

        assert exc.value.code == 'INVALID_EVENT_TYPE'
        product.refresh_from_db()
        assert product.stock == 20

    def test_invalid_intent(self, product):
        """Only DirectAdjustment and CatalogEdit are accepted."""
        with pytest.raises(ValidationError) as exc:
            StockMutations.apply({'product_id': str(product.pk), 'new_stock': 3})

        assert exc.value.code == 'INVALID_INTENT'

    def test_unknown_product(self, db):
        """Unknown product raises NotFoundError."""
        with pytest.raises(NotFoundError) as exc:
            StockMutations.apply(DirectAdjustment('999999', 3))

        assert exc.value.code == 'PRODUCT_NOT_FOUND'
        assert not StockEvent.objects.exists()

    def test_non_numeric_product_id(self, db):
        """Ids that cannot match the catalog pk are simply not found."""
        with pytest.raises(NotFoundError):
            StockMutations.apply(DirectAdjustment('abc', 3))

    def test_ledger_failure_rolls_back_catalog(self, product, monkeypatch):
        """A failed ledger write leaves catalog stock unchanged."""
        def broken_record(*args, **kwargs):
            raise PersistenceError('WRITE_FAILED')

        monkeypatch.setattr(StockLedger, 'record_change', broken_record)

        with pytest.raises(PersistenceError):
            StockMutations.apply(DirectAdjustment(str(product.pk), 3))

        product.refresh_from_db()
        assert product.stock == 20

    def test_deadline_exceeded(self, product):
        """A past deadline aborts before touching the catalog."""
        with pytest.raises(PersistenceError) as exc:
            StockMutations.apply(
                DirectAdjustment(str(product.pk), 3),
                deadline=timezone.now() - timedelta(seconds=1),
            )

        assert exc.value.code == 'DEADLINE_EXCEEDED'
        product.refresh_from_db()
        assert product.stock == 20

    def test_history_follows_catalog(self, product):
        """Each mutation's new_stock matches the next one's previous_stock."""
        pid = str(product.pk)
        StockMutations.apply(DirectAdjustment(pid, 15))
        StockMutations.apply(CatalogEdit(pid, 18))
        StockMutations.apply(DirectAdjustment(pid, 0))

        history = list(reversed(StockLedger.history(pid)))

        assert [e.previous_stock for e in history] == [20, 15, 18]
        assert [e.new_stock for e in history] == [15, 18, 0]
        product.refresh_from_db()
        assert product.stock == history[-1].new_stock


class TestRestock:
    """Tests for StockMutations.restock()."""

    def test_adds_quantity(self, low_product):
        """Restock adds to current stock and records a restock event."""
        event = StockMutations.restock(str(low_product.pk), 10, notes='Fornecedor')

        low_product.refresh_from_db()
        assert low_product.stock == 12
        assert event.event_type == StockEventType.RESTOCK
        assert event.change_amount == 10

    @pytest.mark.parametrize('quantity', [0, -3, 1.5, None])
    def test_invalid_quantity(self, low_product, quantity):
        """Quantity must be a positive integer."""
        with pytest.raises(ValidationError) as exc:
            StockMutations.restock(str(low_product.pk), quantity)

        assert exc.value.code == 'INVALID_QUANTITY'


class TestSell:
    """Tests for StockMutations.sell()."""

    def test_subtracts_quantity(self, product):
        """Sale subtracts from current stock and records a sale event."""
        event = StockMutations.sell(str(product.pk), 8)

        product.refresh_from_db()
        assert product.stock == 12
        assert event.event_type == StockEventType.SALE
        assert event.change_amount == -8

    def test_sell_everything(self, low_product):
        """Selling the exact stock leaves zero."""
        StockMutations.sell(str(low_product.pk), 2)

        low_product.refresh_from_db()
        assert low_product.stock == 0

    def test_insufficient_stock(self, low_product):
        """Selling more than available raises with the details."""
        with pytest.raises(ValidationError) as exc:
            StockMutations.sell(str(low_product.pk), 3)

        assert exc.value.code == 'INSUFFICIENT_STOCK'
        assert exc.value.available == 2
        assert exc.value.data['requested'] == 3
        low_product.refresh_from_db()
        assert low_product.stock == 2
        assert not StockEvent.objects.exists()
