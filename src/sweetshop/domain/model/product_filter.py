"""Catalog filter: the predicates a shopper can search by."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from sweetshop.domain.exceptions import FieldError, ValidationError
from sweetshop.domain.model.product import Product


@dataclass(frozen=True)
class ProductFilter:
    """All present predicates must hold (logical AND); ``None`` means "any".

    Price bounds are inclusive. The name match is a case-insensitive
    substring match, the category match is exact.
    """

    name: str | None = None
    category: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None

    @staticmethod
    def of(
        name: str | None = None,
        category: str | None = None,
        min_price: str | float | int | Decimal | None = None,
        max_price: str | float | int | Decimal | None = None,
    ) -> ProductFilter:
        """Build a filter from loosely typed input, rejecting bad bounds."""
        errors: list[FieldError] = []
        low = _parse_bound("min_price", min_price, errors)
        high = _parse_bound("max_price", max_price, errors)
        if low is not None and high is not None and low > high:
            errors.append(FieldError("min_price", "must not exceed max_price"))
        if errors:
            raise ValidationError.from_errors(errors)

        return ProductFilter(
            name=(name or "").strip() or None,
            category=(category or "").strip() or None,
            min_price=low,
            max_price=high,
        )

    @property
    def is_empty(self) -> bool:
        return (
            self.name is None
            and self.category is None
            and self.min_price is None
            and self.max_price is None
        )

    def matches(self, product: Product) -> bool:
        if self.name is not None and self.name.lower() not in product.name.lower():
            return False
        if self.category is not None and product.category != self.category:
            return False
        if self.min_price is not None and product.price.amount < self.min_price:
            return False
        if self.max_price is not None and product.price.amount > self.max_price:
            return False
        return True


def _parse_bound(
    field_name: str,
    raw: str | float | int | Decimal | None,
    errors: list[FieldError],
) -> Decimal | None:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        errors.append(FieldError(field_name, f"not a number: {raw!r}"))
        return None
    if not value.is_finite() or value < 0:
        errors.append(FieldError(field_name, "must be a non-negative number"))
        return None
    return value
