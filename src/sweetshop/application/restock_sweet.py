"""Application service: Restock Sweet use case."""

from __future__ import annotations

from sweetshop.application.authorization import require_admin
from sweetshop.application.dto import StockLevelDTO, to_stock_level_dto
from sweetshop.domain.model.caller import Caller
from sweetshop.domain.service.inventory_ledger import InventoryLedger


class RestockSweetHandler:

    def __init__(self, ledger: InventoryLedger) -> None:
        self._ledger = ledger

    def handle(self, caller: Caller, sweet_id: str, quantity: int) -> StockLevelDTO:
        require_admin(caller, "restock sweets")
        return to_stock_level_dto(self._ledger.restock(sweet_id, quantity))
