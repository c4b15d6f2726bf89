"""Unit tests for the InventoryLedger domain service."""

from datetime import timedelta

import pytest

from sweetshop.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    TransientStorageError,
    ValidationError,
)
from sweetshop.domain.model.commands import NewSweet, SweetChanges
from sweetshop.domain.model.events import (
    SweetAdded,
    SweetPurchased,
    SweetRemoved,
    SweetRestocked,
    SweetUpdated,
)
from sweetshop.domain.model.product_filter import ProductFilter
from sweetshop.domain.model.value_objects import Money
from sweetshop.domain.service.event_publisher import EventPublisher
from sweetshop.domain.service.inventory_ledger import InventoryLedger
from sweetshop.infrastructure.persistence.memory_product_repository import (
    InMemoryProductRepository,
)
from tests.fakes import FIXED_NOW, FlakyProductRepository, RecordingSubscriber, make_product


class _Clock:

    def __init__(self) -> None:
        self.now = FIXED_NOW

    def __call__(self):
        self.now = self.now + timedelta(seconds=1)
        return self.now


def _setup(quantity: int = 5, repo_cls=InMemoryProductRepository):
    repo = repo_cls([make_product(id="1", quantity=quantity)])
    publisher = EventPublisher()
    events = RecordingSubscriber()
    publisher.subscribe(events)
    ledger = InventoryLedger(repo, publisher, clock=_Clock())
    return ledger, repo, events


# ── Purchase ─────────────────────────────────────────────────────────────────


class TestPurchase:

    def test_purchase_decrements_and_returns_receipt(self):
        ledger, repo, _ = _setup(quantity=5)

        receipt = ledger.purchase("1", 3)

        assert receipt.quantity == 3
        assert receipt.remaining == 2
        assert receipt.unit_price == Money.of("5.99")
        assert receipt.total == Money.of("17.97")
        assert receipt.product_name == "Chocolate Truffle"
        assert repo.get_by_id("1").quantity == 2

    def test_purchase_advances_updated_at(self):
        ledger, repo, _ = _setup()
        receipt = ledger.purchase("1", 1)
        assert repo.get_by_id("1").updated_at == receipt.purchased_at
        assert receipt.purchased_at > FIXED_NOW

    def test_purchase_references_are_unique(self):
        ledger, _, _ = _setup(quantity=5)
        assert ledger.purchase("1", 1).purchase_id != ledger.purchase("1", 1).purchase_id

    def test_purchase_entire_stock(self):
        ledger, repo, _ = _setup(quantity=5)
        assert ledger.purchase("1", 5).remaining == 0
        assert repo.get_by_id("1").quantity == 0

    def test_purchase_more_than_stock_rejected_without_mutation(self):
        ledger, repo, events = _setup(quantity=2)

        with pytest.raises(InsufficientStockError) as exc_info:
            ledger.purchase("1", 3)

        assert exc_info.value.requested == 3
        assert exc_info.value.available == 2
        assert exc_info.value.kind == "InsufficientStock"
        assert repo.get_by_id("1").quantity == 2
        assert repo.get_by_id("1").updated_at == FIXED_NOW
        assert events.events == []

    def test_purchase_unknown_sweet_rejected(self):
        ledger, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="not found"):
            ledger.purchase("nope", 1)

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_purchase_non_positive_quantity_rejected(self, quantity):
        ledger, repo, _ = _setup(quantity=5)
        with pytest.raises(ValidationError, match="must be positive"):
            ledger.purchase("1", quantity)
        assert repo.get_by_id("1").quantity == 5

    def test_purchase_publishes_event(self):
        ledger, _, events = _setup(quantity=5)

        receipt = ledger.purchase("1", 2)

        [event] = events.of_type(SweetPurchased)
        assert event.product_id == "1"
        assert event.quantity == 2
        assert event.purchase_id == receipt.purchase_id
        assert event.remaining == 3

    def test_transient_failure_propagates(self):
        ledger, repo, events = _setup(quantity=5, repo_cls=FlakyProductRepository)
        repo.offline = True

        with pytest.raises(TransientStorageError) as exc_info:
            ledger.purchase("1", 1)

        assert exc_info.value.kind == "TransientStorageFailure"
        assert repo.get_by_id("1").quantity == 5
        assert events.events == []


# ── Restock ──────────────────────────────────────────────────────────────────


class TestRestock:

    def test_restock_increments(self):
        ledger, repo, _ = _setup(quantity=2)
        level = ledger.restock("1", 10)
        assert level.quantity == 12
        assert repo.get_by_id("1").quantity == 12

    def test_consecutive_restocks_add_up(self):
        ledger, repo, _ = _setup(quantity=4)
        ledger.restock("1", 3)
        ledger.restock("1", 7)
        assert repo.get_by_id("1").quantity == 14

    def test_restock_unknown_sweet_rejected(self):
        ledger, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            ledger.restock("nope", 1)

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_restock_non_positive_rejected(self, quantity):
        ledger, repo, _ = _setup(quantity=2)
        with pytest.raises(ValidationError) as exc_info:
            ledger.restock("1", quantity)
        assert exc_info.value.kind == "InvalidArgument"
        assert repo.get_by_id("1").quantity == 2

    def test_restock_publishes_event(self):
        ledger, _, events = _setup(quantity=2)
        ledger.restock("1", 10)
        [event] = events.of_type(SweetRestocked)
        assert (event.quantity, event.new_quantity) == (10, 12)


# ── Scenario ─────────────────────────────────────────────────────────────────


def test_purchase_fail_restock_scenario():
    ledger, repo, _ = _setup(quantity=5)

    assert ledger.purchase("1", 3).remaining == 2

    with pytest.raises(InsufficientStockError):
        ledger.purchase("1", 3)
    assert repo.get_by_id("1").quantity == 2

    assert ledger.restock("1", 10).quantity == 12


def test_quantity_never_negative_over_mixed_sequence():
    ledger, repo, _ = _setup(quantity=3)
    steps = [("p", 2), ("p", 2), ("r", 1), ("p", 2), ("p", 1), ("r", 4), ("p", 5), ("p", 4)]

    for op, n in steps:
        try:
            if op == "p":
                ledger.purchase("1", n)
            else:
                ledger.restock("1", n)
        except InsufficientStockError:
            pass
        assert repo.get_by_id("1").quantity >= 0

    assert repo.get_by_id("1").quantity == 0


# ── Administrative CRUD ──────────────────────────────────────────────────────


class TestAdministration:

    def test_create_persists_and_publishes(self):
        ledger, repo, events = _setup()

        product = ledger.create(NewSweet("Croissant", "Pastry", Money.of("2.99"), 45))

        assert repo.get_by_id(product.id).name == "Croissant"
        assert [e.product_id for e in events.of_type(SweetAdded)] == [product.id]

    def test_update_changes_fields_but_not_stock(self):
        ledger, repo, events = _setup(quantity=5)

        ledger.update(
            "1",
            SweetChanges(name="Milk Truffle", price=Money.of("4.99"), description="Smooth"),
        )

        stored = repo.get_by_id("1")
        assert stored.name == "Milk Truffle"
        assert stored.price == Money.of("4.99")
        assert stored.description == "Smooth"
        assert stored.quantity == 5
        assert stored.updated_at > FIXED_NOW
        assert len(events.of_type(SweetUpdated)) == 1

    def test_update_with_empty_string_clears_optional_field(self):
        ledger, repo, _ = _setup()
        ledger.update("1", SweetChanges(description="Smooth"))
        ledger.update("1", SweetChanges(description=""))
        assert repo.get_by_id("1").description is None

    def test_update_does_not_overwrite_concurrent_sale(self):
        ledger, repo, _ = _setup(quantity=5)
        stale = repo.get_by_id("1")
        ledger.purchase("1", 2)

        stale.rename("Renamed")
        repo.update(stale)

        assert repo.get_by_id("1").quantity == 3

    def test_empty_update_rejected(self):
        ledger, _, _ = _setup()
        with pytest.raises(ValidationError, match="Nothing to update"):
            ledger.update("1", SweetChanges())

    def test_update_unknown_rejected(self):
        ledger, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            ledger.update("nope", SweetChanges(name="X"))

    def test_delete_then_purchase_fails_not_found(self):
        ledger, _, events = _setup()

        ledger.delete("1")

        assert len(events.of_type(SweetRemoved)) == 1
        with pytest.raises(EntityNotFoundError):
            ledger.purchase("1", 1)
        with pytest.raises(EntityNotFoundError):
            ledger.restock("1", 1)

    def test_delete_unknown_rejected(self):
        ledger, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            ledger.delete("nope")

    def test_list_products_excludes_deleted(self):
        ledger, repo, _ = _setup()
        repo.add(make_product(id="2", name="Croissant", category="Pastry"))
        ledger.delete("1")
        assert [p.id for p in ledger.list_products(ProductFilter())] == ["2"]


def test_failing_subscriber_does_not_undo_purchase():
    repo = InMemoryProductRepository([make_product(id="1", quantity=5)])
    publisher = EventPublisher()

    def broken(event):
        raise RuntimeError("boom")

    publisher.subscribe(broken)
    ledger = InventoryLedger(repo, publisher)

    assert ledger.purchase("1", 1).remaining == 4
    assert repo.get_by_id("1").quantity == 4
