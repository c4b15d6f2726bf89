"""Application service: catalog queries (search and categories).

Results may be served from a cache. Every committed mutation publishes an
event and ``invalidate`` drops the whole cache in response; a lookup that
raced an invalidation is returned but not cached, so nothing stale
survives past the mutation that made it stale.
"""

from __future__ import annotations

import logging
import threading

from sweetshop.application.dto import SweetDTO, to_sweet_dto
from sweetshop.domain.model.events import DomainEvent
from sweetshop.domain.model.product_filter import ProductFilter
from sweetshop.domain.service.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)

_CATEGORIES_KEY = "categories"
MAX_CACHED_QUERIES = 128


class SearchSweetsHandler:

    def __init__(
        self,
        ledger: InventoryLedger,
        cache_enabled: bool = True,
        max_entries: int = MAX_CACHED_QUERIES,
    ) -> None:
        self._ledger = ledger
        self._cache_enabled = cache_enabled
        self._max_entries = max_entries
        self._cache: dict[object, list] = {}
        self._generation = 0
        self._lock = threading.Lock()

    def search(self, product_filter: ProductFilter | None = None) -> list[SweetDTO]:
        key = product_filter or ProductFilter()
        return list(
            self._cached(key, lambda: [to_sweet_dto(p) for p in self._ledger.list_products(key)])
        )

    def list_categories(self) -> list[str]:
        return list(self._cached(_CATEGORIES_KEY, self._ledger.list_categories))

    def invalidate(self, event: DomainEvent | None = None) -> None:
        with self._lock:
            self._generation += 1
            self._cache.clear()
        if event is not None:
            logger.debug("Catalog cache cleared after %s", type(event).__name__)

    # --- Internal helpers -----------------------------------------------------

    def _cached(self, key, load):
        if not self._cache_enabled:
            return load()

        with self._lock:
            hit = self._cache.get(key)
            generation = self._generation
        if hit is not None:
            return hit

        result = load()
        with self._lock:
            if generation == self._generation:
                if len(self._cache) >= self._max_entries:
                    # oldest entry first; dicts keep insertion order
                    del self._cache[next(iter(self._cache))]
                self._cache[key] = result
        return result
