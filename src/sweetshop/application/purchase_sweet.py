"""Application service: Purchase Sweet use case.

Any signed-in shopper may purchase. The stock check and the decrement
happen as one guarded storage update inside the ledger, never here.
"""

from __future__ import annotations

from sweetshop.application.authorization import require_authenticated
from sweetshop.application.dto import PurchaseReceiptDTO, to_receipt_dto
from sweetshop.domain.model.caller import Caller
from sweetshop.domain.service.inventory_ledger import InventoryLedger


class PurchaseSweetHandler:

    def __init__(self, ledger: InventoryLedger) -> None:
        self._ledger = ledger

    def handle(self, caller: Caller, sweet_id: str, quantity: int) -> PurchaseReceiptDTO:
        require_authenticated(caller, "purchase sweets")
        return to_receipt_dto(self._ledger.purchase(sweet_id, quantity))
