"""Application service: Delete Sweet use case."""

from __future__ import annotations

from sweetshop.application.authorization import require_admin
from sweetshop.domain.model.caller import Caller
from sweetshop.domain.service.inventory_ledger import InventoryLedger


class DeleteSweetHandler:

    def __init__(self, ledger: InventoryLedger) -> None:
        self._ledger = ledger

    def handle(self, caller: Caller, sweet_id: str) -> None:
        require_admin(caller, "delete sweets")
        self._ledger.delete(sweet_id)
