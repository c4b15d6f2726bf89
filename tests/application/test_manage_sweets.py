"""Integration tests for the administrative use cases (add, update, delete)."""

from decimal import Decimal

import pytest

from sweetshop.application.add_sweet import AddSweetHandler
from sweetshop.application.delete_sweet import DeleteSweetHandler
from sweetshop.application.dto import SweetInput
from sweetshop.application.update_sweet import UpdateSweetHandler
from sweetshop.application.validation import SweetValidator
from sweetshop.domain.exceptions import EntityNotFoundError, UnauthorizedError, ValidationError
from sweetshop.domain.model.caller import ANONYMOUS, Caller
from sweetshop.domain.service.inventory_ledger import InventoryLedger
from sweetshop.infrastructure.persistence.memory_product_repository import (
    InMemoryProductRepository,
)
from tests.fakes import make_product

ADMIN = Caller("admin", is_admin=True)
SHOPPER = Caller("alice")


def _setup():
    repo = InMemoryProductRepository([make_product(id="1", quantity=5)])
    ledger = InventoryLedger(repo)
    validator = SweetValidator()
    return ledger, repo, validator


class TestAddSweet:

    def test_admin_adds_sweet(self):
        ledger, repo, validator = _setup()
        handler = AddSweetHandler(ledger, validator)

        dto = handler.handle(
            ADMIN,
            SweetInput("Red Velvet Cake", "Cake", "15.99", "20",
                       "Moist red velvet cake.", "https://img.example.com/rv.png"),
        )

        assert dto.price == "$15.99"
        assert dto.price_amount == Decimal("15.99")
        assert dto.quantity == 20
        stored = repo.get_by_id(dto.id)
        assert stored.image_url == "https://img.example.com/rv.png"

    def test_quantity_defaults_to_zero(self):
        ledger, _, validator = _setup()
        dto = AddSweetHandler(ledger, validator).handle(
            ADMIN, SweetInput("Croissant", "Pastry", "2.99")
        )
        assert dto.quantity == 0
        assert not dto.in_stock

    def test_shopper_cannot_add(self):
        ledger, repo, validator = _setup()
        with pytest.raises(UnauthorizedError, match="administrators"):
            AddSweetHandler(ledger, validator).handle(
                SHOPPER, SweetInput("Croissant", "Pastry", "2.99")
            )
        assert len(repo.find()) == 1

    def test_anonymous_cannot_add(self):
        ledger, _, validator = _setup()
        with pytest.raises(UnauthorizedError, match="Sign in"):
            AddSweetHandler(ledger, validator).handle(
                ANONYMOUS, SweetInput("Croissant", "Pastry", "2.99")
            )

    def test_invalid_input_rejected_before_storage(self):
        ledger, repo, validator = _setup()
        with pytest.raises(ValidationError) as exc_info:
            AddSweetHandler(ledger, validator).handle(ADMIN, SweetInput("", "Pastry", "-1"))
        assert {e.field for e in exc_info.value.errors} == {"name", "price"}
        assert len(repo.find()) == 1


class TestUpdateSweet:

    def test_admin_updates_price(self):
        ledger, repo, validator = _setup()
        dto = UpdateSweetHandler(ledger, validator).handle(ADMIN, "1", SweetInput(price="6.49"))
        assert dto.price == "$6.49"
        assert repo.get_by_id("1").quantity == 5

    def test_stock_cannot_be_edited(self):
        ledger, _, validator = _setup()
        with pytest.raises(ValidationError, match="purchases and restocks"):
            UpdateSweetHandler(ledger, validator).handle(ADMIN, "1", SweetInput(quantity=99))

    def test_shopper_cannot_update(self):
        ledger, _, validator = _setup()
        with pytest.raises(UnauthorizedError):
            UpdateSweetHandler(ledger, validator).handle(SHOPPER, "1", SweetInput(name="X"))

    def test_update_unknown_rejected(self):
        ledger, _, validator = _setup()
        with pytest.raises(EntityNotFoundError):
            UpdateSweetHandler(ledger, validator).handle(ADMIN, "nope", SweetInput(name="X"))


class TestDeleteSweet:

    def test_admin_deletes(self):
        ledger, repo, _ = _setup()
        DeleteSweetHandler(ledger).handle(ADMIN, "1")
        assert repo.get_by_id("1") is None

    def test_shopper_cannot_delete(self):
        ledger, repo, _ = _setup()
        with pytest.raises(UnauthorizedError):
            DeleteSweetHandler(ledger).handle(SHOPPER, "1")
        assert repo.get_by_id("1") is not None

    def test_delete_twice_fails_not_found(self):
        ledger, _, _ = _setup()
        handler = DeleteSweetHandler(ledger)
        handler.handle(ADMIN, "1")
        with pytest.raises(EntityNotFoundError):
            handler.handle(ADMIN, "1")
