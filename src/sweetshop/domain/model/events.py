"""Domain events published after a mutation has been committed.

Subscribers use them to invalidate cached catalog reads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from sweetshop.domain.model.product import utcnow


@dataclass(frozen=True)
class SweetPurchased:
    product_id: str
    quantity: int
    purchase_id: str
    remaining: int
    occurred_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class SweetRestocked:
    product_id: str
    quantity: int
    new_quantity: int
    occurred_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class SweetAdded:
    product_id: str
    occurred_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class SweetUpdated:
    product_id: str
    occurred_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class SweetRemoved:
    product_id: str
    occurred_at: datetime = field(default_factory=utcnow)


DomainEvent = SweetPurchased | SweetRestocked | SweetAdded | SweetUpdated | SweetRemoved
