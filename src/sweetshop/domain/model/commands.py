"""Validated administrative write commands.

Instances are produced by the application layer's validator; by the time
the ledger sees one, every field already satisfies its constraints.
"""

from __future__ import annotations

from dataclasses import dataclass

from sweetshop.domain.model.value_objects import Money


@dataclass(frozen=True)
class NewSweet:
    name: str
    category: str
    price: Money
    quantity: int
    description: str | None = None
    image_url: str | None = None


@dataclass(frozen=True)
class SweetChanges:
    """A partial edit. ``None`` leaves a field alone.

    For the optional fields ``description`` and ``image_url`` an empty
    string clears the stored value.
    """

    name: str | None = None
    category: str | None = None
    price: Money | None = None
    description: str | None = None
    image_url: str | None = None

    @property
    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (self.name, self.category, self.price, self.description, self.image_url)
        )
