"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sweetshop.application.search_sweets import SearchSweetsHandler
from sweetshop.application.validation import SweetValidator
from sweetshop.domain.model.caller import ANONYMOUS, Caller
from sweetshop.domain.repository.product_repository import ProductRepository
from sweetshop.domain.service.event_publisher import EventPublisher
from sweetshop.domain.service.inventory_ledger import InventoryLedger
from sweetshop.infrastructure.config import Settings, settings
from sweetshop.infrastructure.persistence.database import (
    build_engine,
    build_session_factory,
    create_schema,
)
from sweetshop.infrastructure.persistence.memory_product_repository import (
    InMemoryProductRepository,
)
from sweetshop.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=(level or settings.log_level).upper(), format=LOG_FORMAT)


def product_repository(config: Settings | None = None) -> ProductRepository:
    config = config or settings
    if config.database_url == "memory://":
        return InMemoryProductRepository()
    engine = build_engine(config.database_url, echo=config.sql_echo)
    create_schema(engine)
    return SqlProductRepository(build_session_factory(engine))


def resolve_caller(user_id: str | None, config: Settings | None = None) -> Caller:
    """Stand-in for the auth collaborator: admin capability comes from config."""
    config = config or settings
    if not user_id:
        return ANONYMOUS
    return Caller(user_id=user_id, is_admin=user_id in config.admin_users)


@dataclass
class Shop:
    """Everything a presentation layer needs, wired together."""

    ledger: InventoryLedger
    publisher: EventPublisher
    catalog: SearchSweetsHandler
    validator: SweetValidator


def build_shop(
    repo: ProductRepository | None = None,
    config: Settings | None = None,
) -> Shop:
    config = config or settings
    publisher = EventPublisher()
    ledger = InventoryLedger(repo or product_repository(config), publisher)
    catalog = SearchSweetsHandler(ledger, cache_enabled=config.catalog_cache)
    publisher.subscribe(catalog.invalidate)
    return Shop(
        ledger=ledger,
        publisher=publisher,
        catalog=catalog,
        validator=SweetValidator(categories=config.categories),
    )
