"""Validation of administrative write input.

Turns a raw SweetInput into a well-typed NewSweet / SweetChanges, or
raises one ValidationError listing every rejected field. The rules are
plain data below; each checker appends to ``errors`` instead of raising
so a form can report all of its problems at once.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from urllib.parse import urlparse

from sweetshop.application.dto import SweetInput
from sweetshop.domain.exceptions import FieldError, ValidationError
from sweetshop.domain.model.commands import NewSweet, SweetChanges
from sweetshop.domain.model.product import (
    DEFAULT_CATEGORIES,
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
)
from sweetshop.domain.model.value_objects import Money

MAX_PRICE = Decimal("99999999.99")
PRICE_DECIMAL_PLACES = 2
URL_SCHEMES = ("http", "https")


class SweetValidator:

    def __init__(self, categories: Iterable[str] = DEFAULT_CATEGORIES) -> None:
        self._categories = tuple(categories)

    @property
    def categories(self) -> tuple[str, ...]:
        return self._categories

    def validate_new(self, data: SweetInput) -> NewSweet:
        errors: list[FieldError] = []
        name = _text("name", data.name, errors, required=True, max_length=NAME_MAX_LENGTH)
        category = self._category(data.category, errors, required=True)
        price = _price(data.price, errors, required=True)
        quantity = _stock_count(data.quantity, errors)
        description = _text(
            "description", data.description, errors, max_length=DESCRIPTION_MAX_LENGTH
        )
        image_url = _url(data.image_url, errors)
        if errors:
            raise ValidationError.from_errors(errors)

        return NewSweet(
            name=name,  # type: ignore[arg-type]
            category=category,  # type: ignore[arg-type]
            price=price,  # type: ignore[arg-type]
            quantity=quantity,  # type: ignore[arg-type]
            description=description or None,
            image_url=image_url or None,
        )

    def validate_changes(self, data: SweetInput) -> SweetChanges:
        """Validate a partial edit; only the fields that are present are checked."""
        errors: list[FieldError] = []
        if data.quantity is not None:
            errors.append(
                FieldError("quantity", "stock is changed by purchases and restocks only")
            )
        name = (
            _text("name", data.name, errors, required=True, max_length=NAME_MAX_LENGTH)
            if data.name is not None
            else None
        )
        category = (
            self._category(data.category, errors, required=True)
            if data.category is not None
            else None
        )
        price = _price(data.price, errors, required=True) if data.price is not None else None
        description = _text(
            "description", data.description, errors, max_length=DESCRIPTION_MAX_LENGTH
        )
        image_url = _url(data.image_url, errors)
        if errors:
            raise ValidationError.from_errors(errors)

        return SweetChanges(
            name=name,
            category=category,
            price=price,
            description=description,
            image_url=image_url,
        )

    def _category(self, raw: str | None, errors: list[FieldError], required: bool) -> str | None:
        value = _text("category", raw, errors, required=required)
        if value and value not in self._categories:
            errors.append(
                FieldError("category", f"must be one of: {', '.join(self._categories)}")
            )
            return None
        return value


# --- Field checkers -------------------------------------------------------------


def _text(
    field: str,
    raw: str | None,
    errors: list[FieldError],
    required: bool = False,
    max_length: int | None = None,
) -> str | None:
    if raw is None:
        if required:
            errors.append(FieldError(field, "is required"))
        return None
    value = raw.strip()
    if required and not value:
        errors.append(FieldError(field, "is required"))
        return None
    if max_length is not None and len(value) > max_length:
        errors.append(FieldError(field, f"must be at most {max_length} characters"))
        return None
    return value


def _price(raw, errors: list[FieldError], required: bool) -> Money | None:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        if required:
            errors.append(FieldError("price", "is required"))
        return None
    if isinstance(raw, bool):
        errors.append(FieldError("price", "must be a number"))
        return None
    try:
        price = Money.of(raw)
    except ValidationError:
        errors.append(FieldError("price", "must be a number"))
        return None
    if not price.is_positive:
        errors.append(FieldError("price", "must be greater than 0"))
        return None
    if price.amount > MAX_PRICE:
        errors.append(FieldError("price", f"must be at most {MAX_PRICE}"))
        return None
    if -price.amount.normalize().as_tuple().exponent > PRICE_DECIMAL_PLACES:  # type: ignore[operator]
        errors.append(FieldError("price", "must have at most two decimal places"))
        return None
    return price


def _stock_count(raw: str | int | None, errors: list[FieldError]) -> int | None:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return 0
    if isinstance(raw, bool):
        errors.append(FieldError("quantity", "must be a whole number"))
        return None
    if isinstance(raw, str):
        try:
            raw = int(raw.strip())
        except ValueError:
            errors.append(FieldError("quantity", "must be a whole number"))
            return None
    if not isinstance(raw, int):
        errors.append(FieldError("quantity", "must be a whole number"))
        return None
    if raw < 0:
        errors.append(FieldError("quantity", "cannot be negative"))
        return None
    return raw


def _url(raw: str | None, errors: list[FieldError]) -> str | None:
    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return ""
    parsed = urlparse(value)
    if parsed.scheme not in URL_SCHEMES or not parsed.netloc or any(c.isspace() for c in value):
        errors.append(FieldError("image_url", "must be a valid http(s) URL"))
        return None
    return value
