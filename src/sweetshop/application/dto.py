"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from sweetshop.domain.model.product import Product
from sweetshop.domain.service.inventory_ledger import PurchaseReceipt, StockLevel

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class SweetInput:
    """Input: raw administrative form values, not yet validated.

    Every field is optional so the same shape serves both "add" (where
    the validator insists on the required ones) and partial "update".
    """

    name: str | None = None
    category: str | None = None
    price: str | int | float | Decimal | None = None
    quantity: str | int | None = None
    description: str | None = None
    image_url: str | None = None


@dataclass(frozen=True)
class SweetDTO:
    """Output: a sweet as displayed to the user."""

    id: str
    name: str
    category: str
    price: str  # formatted, e.g. "$5.99"
    price_amount: Decimal
    quantity: int
    description: str | None
    image_url: str | None
    updated_at: str

    @property
    def in_stock(self) -> bool:
        return self.quantity > 0


@dataclass(frozen=True)
class PurchaseReceiptDTO:
    purchase_id: str
    sweet_id: str
    sweet_name: str
    quantity: int
    unit_price: str
    total: str
    remaining: int
    purchased_at: str


@dataclass(frozen=True)
class StockLevelDTO:
    sweet_id: str
    quantity: int
    updated_at: str


# --- Mapping ------------------------------------------------------------------


def to_sweet_dto(product: Product) -> SweetDTO:
    return SweetDTO(
        id=product.id,
        name=product.name,
        category=product.category,
        price=str(product.price),
        price_amount=product.price.amount,
        quantity=product.quantity,
        description=product.description,
        image_url=product.image_url,
        updated_at=product.updated_at.strftime(TIMESTAMP_FORMAT),
    )


def to_receipt_dto(receipt: PurchaseReceipt) -> PurchaseReceiptDTO:
    return PurchaseReceiptDTO(
        purchase_id=receipt.purchase_id,
        sweet_id=receipt.product_id,
        sweet_name=receipt.product_name,
        quantity=receipt.quantity,
        unit_price=str(receipt.unit_price),
        total=str(receipt.total),
        remaining=receipt.remaining,
        purchased_at=receipt.purchased_at.strftime(TIMESTAMP_FORMAT),
    )


def to_stock_level_dto(level: StockLevel) -> StockLevelDTO:
    return StockLevelDTO(
        sweet_id=level.product_id,
        quantity=level.quantity,
        updated_at=level.updated_at.strftime(TIMESTAMP_FORMAT),
    )
