"""
Pytest fixtures for Restockman tests.
"""

from datetime import datetime, timedelta, timezone as dt_timezone

import pytest
from django.contrib.auth import get_user_model

from restockman.adapters import reset_catalog
from restockman.models import StockEvent, StockEventType
from restockman.tests.catalog.models import Product


User = get_user_model()


@pytest.fixture(autouse=True)
def fresh_catalog():
    """Drop the cached catalog backend around every test."""
    reset_catalog()
    yield
    reset_catalog()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username='testuser',
        password='testpass123'
    )


@pytest.fixture
def make_product(db):
    """Factory for catalog products."""
    def _make(name='Filtro de Óleo', stock=0):
        return Product.objects.create(name=name, stock=stock)
    return _make


@pytest.fixture
def product(make_product):
    """Product with comfortable stock (above default threshold)."""
    return make_product('Filtro de Óleo', stock=20)


@pytest.fixture
def low_product(make_product):
    """Product below the default threshold of 5."""
    return make_product('Pastilha de Freio', stock=2)


@pytest.fixture
def day():
    """Return a function mapping day N to a fixed aware datetime."""
    base = datetime(2024, 1, 1, 12, 0, tzinfo=dt_timezone.utc)

    def _day(n: int, hours: int = 0):
        return base + timedelta(days=n - 1, hours=hours)
    return _day


@pytest.fixture
def event():
    """Factory for unsaved StockEvent instances (analytics input)."""
    counter = iter(range(1, 10_000))

    def _event(event_type, previous, new, timestamp):
        return StockEvent(
            id=next(counter),
            product_id='p1',
            previous_stock=previous,
            new_stock=new,
            change_amount=new - previous,
            event_type=event_type,
            timestamp=timestamp,
        )
    return _event


@pytest.fixture
def scenario_b(event, day):
    """Restock, two sales down to zero, restock three days later (most recent first)."""
    return [
        event(StockEventType.RESTOCK, 0, 15, day(6)),
        event(StockEventType.SALE, 5, 0, day(3)),
        event(StockEventType.SALE, 10, 5, day(2)),
        event(StockEventType.RESTOCK, 0, 10, day(1)),
    ]
