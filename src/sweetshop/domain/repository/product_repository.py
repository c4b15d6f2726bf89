"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory) live in the
infrastructure layer.

Stock changes do not go through ``save``: the port exposes guarded
``decrement_stock`` / ``increment_stock`` primitives that every
implementation must apply atomically per product, so two callers can
never both pass the availability check on the same units.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from sweetshop.domain.model.product import Product
from sweetshop.domain.model.product_filter import ProductFilter


class StockUpdateStatus(Enum):
    APPLIED = "APPLIED"
    NOT_FOUND = "NOT_FOUND"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"


@dataclass(frozen=True)
class StockUpdate:
    """Storage's answer to a conditional stock update.

    ``quantity`` is the quantity after the update when APPLIED, the
    untouched current quantity when INSUFFICIENT_STOCK, and None when the
    product does not exist.
    """

    status: StockUpdateStatus
    quantity: int | None = None

    @staticmethod
    def applied(quantity: int) -> StockUpdate:
        return StockUpdate(StockUpdateStatus.APPLIED, quantity)

    @staticmethod
    def insufficient(quantity: int) -> StockUpdate:
        return StockUpdate(StockUpdateStatus.INSUFFICIENT_STOCK, quantity)

    @staticmethod
    def not_found() -> StockUpdate:
        return StockUpdate(StockUpdateStatus.NOT_FOUND)


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def find(self, product_filter: ProductFilter | None = None) -> list[Product]:
        """Return products matching the filter, ordered by name then ID."""

    @abstractmethod
    def list_categories(self) -> list[str]:
        """Return the distinct categories currently present, sorted."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Persist a new product."""

    @abstractmethod
    def update(self, product: Product) -> bool:
        """Persist edits to an existing product's descriptive fields.

        Never writes ``quantity``. Returns False if the product no longer
        exists.
        """

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Remove a product. Returns False if it did not exist."""

    @abstractmethod
    def decrement_stock(self, product_id: str, quantity: int, at: datetime) -> StockUpdate:
        """Atomically subtract ``quantity`` if at least that much is in stock."""

    @abstractmethod
    def increment_stock(self, product_id: str, quantity: int, at: datetime) -> StockUpdate:
        """Atomically add ``quantity`` to the product's stock."""
