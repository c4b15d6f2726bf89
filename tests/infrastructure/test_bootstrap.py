from sweetshop.infrastructure.bootstrap import build_shop, product_repository, resolve_caller
from sweetshop.infrastructure.config import Settings
from sweetshop.infrastructure.persistence.memory_product_repository import (
    InMemoryProductRepository,
)
from sweetshop.infrastructure.persistence.sql_product_repository import SqlProductRepository
from tests.fakes import make_product


def test_memory_url_selects_in_memory_store():
    assert isinstance(product_repository(Settings(database_url="memory://")), InMemoryProductRepository)


def test_sqlite_url_creates_schema():
    repo = product_repository(Settings(database_url="sqlite://"))
    assert isinstance(repo, SqlProductRepository)
    assert repo.find() == []


def test_resolve_caller():
    config = Settings(admin_users=["root"])
    assert not resolve_caller(None, config).is_authenticated
    assert resolve_caller("root", config).is_admin
    bob = resolve_caller("bob", config)
    assert bob.is_authenticated and not bob.is_admin


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("SWEETSHOP_CATALOG_CACHE", "false")
    monkeypatch.setenv("SWEETSHOP_LOG_LEVEL", "DEBUG")
    config = Settings()
    assert config.catalog_cache is False
    assert config.log_level == "DEBUG"


def test_shop_catalog_sees_purchases_through_cache():
    shop = build_shop(InMemoryProductRepository([make_product(id="1", quantity=5)]), Settings())
    assert shop.catalog.search()[0].quantity == 5

    shop.ledger.purchase("1", 2)

    assert shop.catalog.search()[0].quantity == 3


def test_configured_categories_reach_the_validator():
    shop = build_shop(InMemoryProductRepository(), Settings(categories=["Fudge"]))
    assert shop.validator.categories == ("Fudge",)
