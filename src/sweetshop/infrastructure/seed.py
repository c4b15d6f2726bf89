"""Demo catalog used to populate an empty shop."""

from __future__ import annotations

import logging

from sweetshop.application.dto import SweetInput
from sweetshop.application.validation import SweetValidator
from sweetshop.domain.service.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)

DEMO_SWEETS = [
    SweetInput("Chocolate Truffle", "Chocolate", "5.99", 50,
               "Rich and creamy chocolate truffle made with the finest cocoa."),
    SweetInput("Strawberry Lollipop", "Candy", "2.49", 100,
               "Sweet and tangy strawberry flavored lollipop."),
    SweetInput("Blueberry Pastry", "Pastry", "4.99", 30,
               "Flaky pastry filled with fresh blueberries."),
    SweetInput("Vanilla Ice Cream", "Ice Cream", "3.99", 75,
               "Creamy vanilla ice cream made with real vanilla beans."),
    SweetInput("Red Velvet Cake", "Cake", "15.99", 20,
               "Moist red velvet cake with cream cheese frosting."),
    SweetInput("Oatmeal Cookie", "Cookie", "1.99", 80,
               "Chewy oatmeal cookie with raisins and nuts."),
    SweetInput("Mint Chocolate Chip", "Ice Cream", "4.49", 60,
               "Refreshing mint ice cream with chocolate chips."),
    SweetInput("Caramel Popcorn", "Candy", "3.99", 40,
               "Buttery caramel coated popcorn."),
    SweetInput("Croissant", "Pastry", "2.99", 45,
               "Buttery and flaky French croissant."),
    SweetInput("Dark Chocolate Bar", "Chocolate", "6.99", 35,
               "Smooth dark chocolate bar with 70% cocoa."),
]


def seed_catalog(ledger: InventoryLedger, validator: SweetValidator) -> int:
    """Add the demo sweets if the catalog is empty. Returns how many were added."""
    if ledger.list_products():
        logger.info("Catalog already populated; skipping seed")
        return 0
    for data in DEMO_SWEETS:
        ledger.create(validator.validate_new(data))
    logger.info("Seeded %d demo sweets", len(DEMO_SWEETS))
    return len(DEMO_SWEETS)
