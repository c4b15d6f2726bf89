"""SQLAlchemy-backed implementation of ProductRepository.

Stock changes are single conditional UPDATE statements, so the database
serializes concurrent purchases of one sweet through its row lock and the
availability guard is evaluated against the row as it is at write time.
An in-memory SQLite database has a single shared connection, so there
every transaction holds that connection's guard for its whole length.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session, sessionmaker

from sweetshop.domain.exceptions import TransientStorageError
from sweetshop.domain.model.product import Product
from sweetshop.domain.model.product_filter import ProductFilter
from sweetshop.domain.model.value_objects import Money
from sweetshop.domain.repository.product_repository import ProductRepository, StockUpdate
from sweetshop.infrastructure.persistence.database import connection_guard
from sweetshop.infrastructure.persistence.orm import SweetRecord

logger = logging.getLogger(__name__)


class SqlProductRepository(ProductRepository):

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory
        self._guard = connection_guard(session_factory.kw["bind"])

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        with self._transaction() as session:
            record = session.get(SweetRecord, product_id)
            return self._to_domain(record) if record is not None else None

    def find(self, product_filter: ProductFilter | None = None) -> list[Product]:
        stmt = select(SweetRecord)
        f = product_filter or ProductFilter()
        if f.name is not None:
            stmt = stmt.where(
                func.lower(SweetRecord.name).contains(f.name.lower(), autoescape=True)
            )
        if f.category is not None:
            stmt = stmt.where(SweetRecord.category == f.category)
        if f.min_price is not None:
            stmt = stmt.where(SweetRecord.price >= f.min_price)
        if f.max_price is not None:
            stmt = stmt.where(SweetRecord.price <= f.max_price)
        stmt = stmt.order_by(func.lower(SweetRecord.name), SweetRecord.id)

        with self._transaction() as session:
            return [self._to_domain(r) for r in session.scalars(stmt)]

    def list_categories(self) -> list[str]:
        stmt = select(SweetRecord.category).distinct().order_by(SweetRecord.category)
        with self._transaction() as session:
            return [c for c in session.scalars(stmt) if c]

    def add(self, product: Product) -> None:
        with self._transaction() as session:
            session.add(self._to_record(product))

    def update(self, product: Product) -> bool:
        stmt = (
            update(SweetRecord)
            .where(SweetRecord.id == product.id)
            .values(
                name=product.name,
                category=product.category,
                price=product.price.amount,
                currency=product.price.currency,
                description=product.description,
                image_url=product.image_url,
                updated_at=product.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        with self._transaction() as session:
            return session.execute(stmt).rowcount == 1

    def delete(self, product_id: str) -> bool:
        stmt = (
            delete(SweetRecord)
            .where(SweetRecord.id == product_id)
            .execution_options(synchronize_session=False)
        )
        with self._transaction() as session:
            return session.execute(stmt).rowcount == 1

    def decrement_stock(self, product_id: str, quantity: int, at: datetime) -> StockUpdate:
        stmt = (
            update(SweetRecord)
            .where(SweetRecord.id == product_id, SweetRecord.quantity >= quantity)
            .values(quantity=SweetRecord.quantity - quantity, updated_at=at)
            .execution_options(synchronize_session=False)
        )
        with self._transaction() as session:
            applied = session.execute(stmt).rowcount == 1
            current = self._current_quantity(session, product_id)

        if applied:
            return StockUpdate.applied(current)  # type: ignore[arg-type]
        if current is None:
            return StockUpdate.not_found()
        return StockUpdate.insufficient(current)

    def increment_stock(self, product_id: str, quantity: int, at: datetime) -> StockUpdate:
        stmt = (
            update(SweetRecord)
            .where(SweetRecord.id == product_id)
            .values(quantity=SweetRecord.quantity + quantity, updated_at=at)
            .execution_options(synchronize_session=False)
        )
        with self._transaction() as session:
            applied = session.execute(stmt).rowcount == 1
            current = self._current_quantity(session, product_id)

        if not applied or current is None:
            return StockUpdate.not_found()
        return StockUpdate.applied(current)

    # --- Session handling -----------------------------------------------------

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        try:
            with self._guard, self._session_factory.begin() as session:
                yield session
        except (OperationalError, PoolTimeoutError) as exc:
            logger.error("Storage round-trip failed: %s", exc)
            raise TransientStorageError("Storage is temporarily unavailable") from exc

    @staticmethod
    def _current_quantity(session: Session, product_id: str) -> int | None:
        return session.scalar(
            select(SweetRecord.quantity).where(SweetRecord.id == product_id)
        )

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(record: SweetRecord) -> Product:
        return Product(
            id=record.id,
            name=record.name,
            category=record.category,
            price=Money(Decimal(str(record.price)), record.currency or "USD"),
            quantity=record.quantity,
            description=record.description,
            image_url=record.image_url,
            created_at=_as_utc(record.created_at),
            updated_at=_as_utc(record.updated_at),
        )

    @staticmethod
    def _to_record(product: Product) -> SweetRecord:
        return SweetRecord(
            id=product.id,
            name=product.name,
            category=product.category,
            price=product.price.amount,
            currency=product.price.currency,
            quantity=product.quantity,
            description=product.description,
            image_url=product.image_url,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
