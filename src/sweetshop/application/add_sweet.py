"""Application service: Add Sweet use case."""

from __future__ import annotations

from sweetshop.application.authorization import require_admin
from sweetshop.application.dto import SweetDTO, SweetInput, to_sweet_dto
from sweetshop.application.validation import SweetValidator
from sweetshop.domain.model.caller import Caller
from sweetshop.domain.service.inventory_ledger import InventoryLedger


class AddSweetHandler:

    def __init__(self, ledger: InventoryLedger, validator: SweetValidator) -> None:
        self._ledger = ledger
        self._validator = validator

    def handle(self, caller: Caller, data: SweetInput) -> SweetDTO:
        """Add a new sweet to the catalog (admin only)."""
        require_admin(caller, "add sweets")
        command = self._validator.validate_new(data)
        return to_sweet_dto(self._ledger.create(command))
