"""In-memory, thread-safe implementation of ProductRepository.

Each product id has its own lock; stock changes, edits and deletes of
that id run under it, and nothing ever takes a store-wide lock. Readers
get copies, so a caller holding a Product can never observe or cause a
change to the stored record.
"""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime

from sweetshop.domain.exceptions import ValidationError
from sweetshop.domain.model.product import Product, catalog_order
from sweetshop.domain.model.product_filter import ProductFilter
from sweetshop.domain.repository.product_repository import ProductRepository, StockUpdate


class InMemoryProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        self._locks: dict[str, threading.Lock] = {}
        for p in products or []:
            self.add(p)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        product = self._store.get(product_id)
        return replace(product) if product is not None else None

    def find(self, product_filter: ProductFilter | None = None) -> list[Product]:
        snapshot = list(self._store.values())
        if product_filter is not None and not product_filter.is_empty:
            snapshot = [p for p in snapshot if product_filter.matches(p)]
        return [replace(p) for p in sorted(snapshot, key=catalog_order)]

    def list_categories(self) -> list[str]:
        return sorted({p.category for p in list(self._store.values())})

    def add(self, product: Product) -> None:
        with self._lock_for(product.id):
            if product.id in self._store:
                raise ValidationError(f"Sweet '{product.id}' already exists")
            self._store[product.id] = replace(product)

    def update(self, product: Product) -> bool:
        with self._lock_for(product.id):
            current = self._store.get(product.id)
            if current is None:
                return False
            # quantity stays whatever the ledger last committed
            self._store[product.id] = replace(product, quantity=current.quantity)
            return True

    def delete(self, product_id: str) -> bool:
        with self._lock_for(product_id):
            removed = self._store.pop(product_id, None) is not None
        # ids are never reused; a late caller on the old lock finds nothing to change
        self._locks.pop(product_id, None)
        return removed

    def decrement_stock(self, product_id: str, quantity: int, at: datetime) -> StockUpdate:
        with self._lock_for(product_id):
            product = self._store.get(product_id)
            if product is None:
                return StockUpdate.not_found()
            if product.quantity < quantity:
                return StockUpdate.insufficient(product.quantity)
            product.remove_stock(quantity, at)
            return StockUpdate.applied(product.quantity)

    def increment_stock(self, product_id: str, quantity: int, at: datetime) -> StockUpdate:
        with self._lock_for(product_id):
            product = self._store.get(product_id)
            if product is None:
                return StockUpdate.not_found()
            product.add_stock(quantity, at)
            return StockUpdate.applied(product.quantity)

    # --- Internal helpers -----------------------------------------------------

    def _lock_for(self, product_id: str) -> threading.Lock:
        # dict.setdefault is atomic, so two threads always agree on the lock
        return self._locks.setdefault(product_id, threading.Lock())
