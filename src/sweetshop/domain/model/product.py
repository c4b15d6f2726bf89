"""Product aggregate (a "sweet" in the shop's catalog).

Products have their own lifecycle: they are added by an administrator,
edited, sold, restocked and finally removed. ``quantity`` is the only
field under the stock invariant and it only moves through
``remove_stock`` / ``add_stock``; administrative edits never touch it.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sweetshop.domain.exceptions import InsufficientStockError, ValidationError
from sweetshop.domain.model.value_objects import Money

# ---------------------------------------------------------------------------
# Field constraints
# ---------------------------------------------------------------------------
NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
DEFAULT_CATEGORIES = ("Chocolate", "Candy", "Pastry", "Ice Cream", "Cake", "Cookie")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """Aggregate root for a sweet.

    Use ``Product.create()`` for new products. The ``__init__`` is
    intentionally simple so repositories can reconstitute persisted
    records without re-validating.
    """

    id: str
    name: str
    category: str
    price: Money
    quantity: int
    description: str | None = None
    image_url: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        name: str,
        category: str,
        price: Money,
        quantity: int,
        description: str | None = None,
        image_url: str | None = None,
        now: datetime | None = None,
    ) -> Product:
        """Create a new product with a fresh identifier."""
        if not name or not name.strip():
            raise ValidationError("Sweet name is required")
        if not category or not category.strip():
            raise ValidationError("Sweet category is required")
        if not price.is_positive:
            raise ValidationError("Sweet price must be greater than zero")
        if quantity < 0:
            raise ValidationError("Sweet quantity cannot be negative")

        created = now or utcnow()
        return Product(
            id=str(uuid.uuid4()),
            name=name.strip(),
            category=category.strip(),
            price=price,
            quantity=quantity,
            description=description,
            image_url=image_url,
            created_at=created,
            updated_at=created,
        )

    # --- Stock transitions ----------------------------------------------------

    def remove_stock(self, quantity: int, at: datetime) -> None:
        """Take ``quantity`` units out of stock (a sale).

        Guarded by ``quantity <= self.quantity``; nothing changes when the
        guard fails.
        """
        if quantity <= 0:
            raise ValidationError("Quantity must be positive")
        if quantity > self.quantity:
            raise InsufficientStockError(self.id, quantity, self.quantity)
        self.quantity -= quantity
        self.updated_at = at

    def add_stock(self, quantity: int, at: datetime) -> None:
        if quantity <= 0:
            raise ValidationError("Quantity must be positive")
        self.quantity += quantity
        self.updated_at = at

    # --- Administrative edits -------------------------------------------------

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Sweet name is required")
        self.name = name.strip()

    def update_price(self, new_price: Money) -> None:
        if not new_price.is_positive:
            raise ValidationError("Sweet price must be greater than zero")
        self.price = new_price

    def touch(self, at: datetime) -> None:
        self.updated_at = at


def catalog_order(product: Product) -> tuple[str, str]:
    """Sort key giving listings a stable order for a fixed snapshot."""
    return (product.name.lower(), product.id)
