"""Domain service: Inventory Ledger.

The ledger is the single owner of every sweet's ``quantity``. Purchases
and restocks never read-modify-write the quantity here; they hand the
guarded change to the repository's atomic primitives and interpret the
answer, so concurrent calls on one product are linearized by storage
while calls on different products never contend.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from sweetshop.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from sweetshop.domain.model.commands import NewSweet, SweetChanges
from sweetshop.domain.model.events import (
    SweetAdded,
    SweetPurchased,
    SweetRemoved,
    SweetRestocked,
    SweetUpdated,
)
from sweetshop.domain.model.product import Product, utcnow
from sweetshop.domain.model.product_filter import ProductFilter
from sweetshop.domain.model.value_objects import Money, Quantity
from sweetshop.domain.repository.product_repository import (
    ProductRepository,
    StockUpdateStatus,
)
from sweetshop.domain.service.event_publisher import EventPublisher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PurchaseReceipt:
    purchase_id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: Money
    total: Money
    remaining: int
    purchased_at: datetime


@dataclass(frozen=True)
class StockLevel:
    product_id: str
    quantity: int
    updated_at: datetime


class InventoryLedger:

    def __init__(
        self,
        product_repo: ProductRepository,
        publisher: EventPublisher | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._product_repo = product_repo
        self._publisher = publisher or EventPublisher()
        self._clock = clock

    # --- Stock mutations ------------------------------------------------------

    def purchase(self, product_id: str, quantity: int) -> PurchaseReceipt:
        """Sell ``quantity`` units of a sweet.

        Raises EntityNotFoundError if the sweet does not exist (or is
        deleted before the decrement lands) and InsufficientStockError if
        fewer than ``quantity`` units are in stock. Either way nothing is
        mutated.
        """
        qty = Quantity(quantity).value
        product = self._require(product_id)

        now = self._clock()
        result = self._product_repo.decrement_stock(product_id, qty, now)

        if result.status is StockUpdateStatus.NOT_FOUND:
            logger.warning("Purchase of %s rejected: sweet was removed", product_id)
            raise EntityNotFoundError(f"Sweet '{product_id}' not found")
        if result.status is StockUpdateStatus.INSUFFICIENT_STOCK:
            logger.warning(
                "Purchase of %s x%d rejected: only %s in stock",
                product_id, qty, result.quantity,
            )
            raise InsufficientStockError(product_id, qty, result.quantity or 0)

        receipt = PurchaseReceipt(
            purchase_id=str(uuid.uuid4()),
            product_id=product_id,
            product_name=product.name,
            quantity=qty,
            unit_price=product.price,
            total=product.price * qty,
            remaining=result.quantity,  # type: ignore[arg-type]
            purchased_at=now,
        )
        logger.info(
            "Purchase %s: %d x %s, %d left",
            receipt.purchase_id, qty, product_id, receipt.remaining,
        )
        self._publisher.publish(
            SweetPurchased(
                product_id=product_id,
                quantity=qty,
                purchase_id=receipt.purchase_id,
                remaining=receipt.remaining,
                occurred_at=now,
            )
        )
        return receipt

    def restock(self, product_id: str, quantity: int) -> StockLevel:
        """Add ``quantity`` units to a sweet's stock."""
        qty = Quantity(quantity).value

        now = self._clock()
        result = self._product_repo.increment_stock(product_id, qty, now)
        if result.status is not StockUpdateStatus.APPLIED:
            logger.warning("Restock of %s rejected: sweet not found", product_id)
            raise EntityNotFoundError(f"Sweet '{product_id}' not found")

        level = StockLevel(product_id=product_id, quantity=result.quantity, updated_at=now)  # type: ignore[arg-type]
        logger.info("Restocked %s by %d, now %d", product_id, qty, level.quantity)
        self._publisher.publish(
            SweetRestocked(
                product_id=product_id,
                quantity=qty,
                new_quantity=level.quantity,
                occurred_at=now,
            )
        )
        return level

    # --- Read path ------------------------------------------------------------

    def list_products(self, product_filter: ProductFilter | None = None) -> list[Product]:
        return self._product_repo.find(product_filter)

    def list_categories(self) -> list[str]:
        return self._product_repo.list_categories()

    # --- Administrative CRUD --------------------------------------------------

    def create(self, command: NewSweet) -> Product:
        product = Product.create(
            name=command.name,
            category=command.category,
            price=command.price,
            quantity=command.quantity,
            description=command.description,
            image_url=command.image_url,
            now=self._clock(),
        )
        self._product_repo.add(product)
        logger.info("Added sweet %s (%s)", product.id, product.name)
        self._publisher.publish(SweetAdded(product_id=product.id, occurred_at=product.created_at))
        return product

    def update(self, product_id: str, changes: SweetChanges) -> Product:
        if changes.is_empty:
            raise ValidationError("Nothing to update")

        product = self._require(product_id)
        if changes.name is not None:
            product.rename(changes.name)
        if changes.category is not None:
            product.category = changes.category
        if changes.price is not None:
            product.update_price(changes.price)
        if changes.description is not None:
            product.description = changes.description or None
        if changes.image_url is not None:
            product.image_url = changes.image_url or None

        now = self._clock()
        product.touch(now)
        if not self._product_repo.update(product):
            raise EntityNotFoundError(f"Sweet '{product_id}' not found")

        logger.info("Updated sweet %s", product_id)
        self._publisher.publish(SweetUpdated(product_id=product_id, occurred_at=now))
        return product

    def delete(self, product_id: str) -> None:
        if not self._product_repo.delete(product_id):
            raise EntityNotFoundError(f"Sweet '{product_id}' not found")
        logger.info("Removed sweet %s", product_id)
        self._publisher.publish(SweetRemoved(product_id=product_id, occurred_at=self._clock()))

    # --- Internal helpers -----------------------------------------------------

    def _require(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Sweet '{product_id}' not found")
        return product
