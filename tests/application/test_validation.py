"""Unit tests for administrative input validation."""

from decimal import Decimal

import pytest

from sweetshop.application.dto import SweetInput
from sweetshop.application.validation import SweetValidator
from sweetshop.domain.exceptions import ValidationError


def _fields(exc_info) -> set[str]:
    return {e.field for e in exc_info.value.errors}


class TestValidateNew:

    def test_valid_input_becomes_command(self):
        cmd = SweetValidator().validate_new(
            SweetInput(" Croissant ", "Pastry", "2.99", "45", "  Flaky. ", "")
        )
        assert cmd.name == "Croissant"
        assert cmd.price.amount == Decimal("2.99")
        assert cmd.quantity == 45
        assert cmd.description == "Flaky."
        assert cmd.image_url is None

    def test_all_problems_reported_at_once(self):
        with pytest.raises(ValidationError) as exc_info:
            SweetValidator().validate_new(
                SweetInput("x" * 101, "Vegetables", "0", "-2", "d" * 501, "not a url")
            )
        assert _fields(exc_info) == {
            "name", "category", "price", "quantity", "description", "image_url",
        }
        assert exc_info.value.kind == "InvalidArgument"

    def test_required_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            SweetValidator().validate_new(SweetInput())
        assert _fields(exc_info) == {"name", "category", "price"}

    def test_name_at_limit_accepted(self):
        cmd = SweetValidator().validate_new(SweetInput("x" * 100, "Cake", "1"))
        assert len(cmd.name) == 100

    @pytest.mark.parametrize("price", ["abc", "0.00", "-5", "1.999", True])
    def test_bad_prices_rejected(self, price):
        with pytest.raises(ValidationError) as exc_info:
            SweetValidator().validate_new(SweetInput("Cake Pop", "Cake", price))
        assert _fields(exc_info) == {"price"}

    def test_trailing_zero_price_accepted(self):
        cmd = SweetValidator().validate_new(SweetInput("Cake Pop", "Cake", "1.990"))
        assert cmd.price.amount == Decimal("1.990")

    @pytest.mark.parametrize("quantity", ["1.5", "lots", 2.0, True])
    def test_bad_quantities_rejected(self, quantity):
        with pytest.raises(ValidationError) as exc_info:
            SweetValidator().validate_new(SweetInput("Cake Pop", "Cake", "1", quantity))
        assert _fields(exc_info) == {"quantity"}

    @pytest.mark.parametrize("url", ["ftp://x.example.com/a.png", "https://", "http://a b.com"])
    def test_bad_urls_rejected(self, url):
        with pytest.raises(ValidationError, match="image_url"):
            SweetValidator().validate_new(SweetInput("Cake Pop", "Cake", "1", image_url=url))

    def test_categories_are_configurable(self):
        validator = SweetValidator(categories=["Cake", "Fudge"])
        assert validator.validate_new(SweetInput("Rocky Road", "Fudge", "3")).category == "Fudge"
        with pytest.raises(ValidationError, match="must be one of: Cake, Fudge"):
            validator.validate_new(SweetInput("Truffle", "Chocolate", "3"))


class TestValidateChanges:

    def test_only_present_fields_checked(self):
        changes = SweetValidator().validate_changes(SweetInput(price="6.49"))
        assert changes.price.amount == Decimal("6.49")
        assert changes.name is None and changes.category is None

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name: is required"):
            SweetValidator().validate_changes(SweetInput(name="  "))

    def test_empty_optional_fields_mean_clear(self):
        changes = SweetValidator().validate_changes(SweetInput(description="", image_url=""))
        assert changes.description == ""
        assert changes.image_url == ""

    def test_quantity_not_editable(self):
        with pytest.raises(ValidationError) as exc_info:
            SweetValidator().validate_changes(SweetInput(quantity=3))
        assert _fields(exc_info) == {"quantity"}
