"""Application service: Update Sweet use case."""

from __future__ import annotations

from sweetshop.application.authorization import require_admin
from sweetshop.application.dto import SweetDTO, SweetInput, to_sweet_dto
from sweetshop.application.validation import SweetValidator
from sweetshop.domain.model.caller import Caller
from sweetshop.domain.service.inventory_ledger import InventoryLedger


class UpdateSweetHandler:

    def __init__(self, ledger: InventoryLedger, validator: SweetValidator) -> None:
        self._ledger = ledger
        self._validator = validator

    def handle(self, caller: Caller, sweet_id: str, data: SweetInput) -> SweetDTO:
        """Edit a sweet's descriptive fields.

        Stock is not editable here; use restock or purchase.
        """
        require_admin(caller, "edit sweets")
        changes = self._validator.validate_changes(data)
        return to_sweet_dto(self._ledger.update(sweet_id, changes))
