"""Test doubles shared by the test suites.

The in-memory repository from the infrastructure layer is used directly
as the store; these fakes add failure injection and event recording on
top of it. No file I/O, no side effects.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sweetshop.domain.exceptions import TransientStorageError
from sweetshop.domain.model.events import DomainEvent
from sweetshop.domain.model.product import Product
from sweetshop.domain.model.value_objects import Money
from sweetshop.domain.repository.product_repository import StockUpdate
from sweetshop.infrastructure.persistence.memory_product_repository import (
    InMemoryProductRepository,
)

FIXED_NOW = datetime(2024, 11, 1, 12, 0, tzinfo=timezone.utc)


def make_product(
    id: str = "1",
    name: str = "Chocolate Truffle",
    category: str = "Chocolate",
    price: str = "5.99",
    quantity: int = 50,
    **extra,
) -> Product:
    return Product(
        id=id,
        name=name,
        category=category,
        price=Money(Decimal(price)),
        quantity=quantity,
        created_at=FIXED_NOW,
        updated_at=FIXED_NOW,
        **extra,
    )


class FlakyProductRepository(InMemoryProductRepository):
    """Fails every stock round-trip while ``offline`` is set."""

    def __init__(self, products: list[Product] | None = None) -> None:
        super().__init__(products)
        self.offline = False

    def decrement_stock(self, product_id: str, quantity: int, at: datetime) -> StockUpdate:
        self._check()
        return super().decrement_stock(product_id, quantity, at)

    def increment_stock(self, product_id: str, quantity: int, at: datetime) -> StockUpdate:
        self._check()
        return super().increment_stock(product_id, quantity, at)

    def _check(self) -> None:
        if self.offline:
            raise TransientStorageError("Storage is temporarily unavailable")


class RecordingSubscriber:

    def __init__(self) -> None:
        self.events: list[DomainEvent] = []

    def __call__(self, event: DomainEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> list:
        return [e for e in self.events if isinstance(e, event_type)]
