"""Tests for payload and filter validation."""

from datetime import date
from decimal import Decimal

import pytest

from ordering.errors import ValidationError
from ordering.utils.validators import (
    TOTAL_MISMATCH_MESSAGE,
    line_items_sum,
    parse_date,
    total_matches,
    validate_line_items,
    validate_order_payload,
    validate_status,
    validate_total_amount,
)


ITEMS = [
    {"product_name": "Widget Pro", "quantity": 2, "unit_price": 100},
    {"product_name": "Service Plan", "quantity": 1, "unit_price": 50},
]


class TestOrderPayload:
    def test_exact_total(self):
        items, total = validate_order_payload(ITEMS, 250.00)
        assert total == Decimal("250.00")
        assert items[0] == {"product_name": "Widget Pro", "quantity": 2, "unit_price": Decimal("100.00")}

    def test_total_within_tolerance(self):
        _, total = validate_order_payload(ITEMS, "250.02")
        assert total == Decimal("250.02")

    def test_total_mismatch_tagged_to_total_amount(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_order_payload(ITEMS, 260.00)
        assert exc_info.value.errors == {"total_amount": [TOTAL_MISMATCH_MESSAGE]}
        assert exc_info.value.status_code == 422

    def test_missing_fields_reported_together(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_order_payload(None, None)
        assert set(exc_info.value.errors) == {"line_items", "total_amount"}

    def test_empty_items(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_order_payload([], 0)
        assert "line_items" in exc_info.value.errors

    def test_mismatch_not_checked_when_items_invalid(self):
        bad = [{"product_name": "X", "quantity": 0, "unit_price": 10}]
        with pytest.raises(ValidationError) as exc_info:
            validate_order_payload(bad, 999)
        assert exc_info.value.errors == {"line_items.0.quantity": ["The quantity must be at least 1."]}

    def test_string_numbers_accepted(self):
        items, total = validate_order_payload(
            [{"product_name": "Cable", "quantity": "3", "unit_price": "9.99"}], "29.97"
        )
        assert items[0]["quantity"] == 3
        assert total == Decimal("29.97")


class TestLineItems:
    @pytest.mark.parametrize(
        "entry,field",
        [
            ({"quantity": 1, "unit_price": 1}, "line_items.0.product_name"),
            ({"product_name": "  ", "quantity": 1, "unit_price": 1}, "line_items.0.product_name"),
            ({"product_name": "A", "quantity": 1.5, "unit_price": 1}, "line_items.0.quantity"),
            ({"product_name": "A", "quantity": True, "unit_price": 1}, "line_items.0.quantity"),
            ({"product_name": "A", "quantity": 1, "unit_price": -0.01}, "line_items.0.unit_price"),
            ({"product_name": "A", "quantity": 1, "unit_price": "abc"}, "line_items.0.unit_price"),
            ({"product_name": "A", "quantity": 1, "unit_price": "NaN"}, "line_items.0.unit_price"),
        ],
    )
    def test_invalid_entry(self, entry, field):
        with pytest.raises(ValidationError) as exc_info:
            validate_line_items([entry])
        assert field in exc_info.value.errors

    def test_non_object_entry(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_line_items(["shampoo"])
        assert "line_items.0" in exc_info.value.errors

    def test_not_a_list(self):
        with pytest.raises(ValidationError):
            validate_line_items({"product_name": "A"})

    def test_zero_price_allowed(self):
        items = validate_line_items([{"product_name": "Gift", "quantity": 1, "unit_price": 0}])
        assert items[0]["unit_price"] == Decimal("0.00")

    def test_sum(self):
        assert line_items_sum(validate_line_items(ITEMS)) == Decimal("250.00")


class TestTotalAmount:
    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            validate_total_amount(-1)

    def test_rounded_to_cents(self):
        assert validate_total_amount("10.005") == Decimal("10.01")

    def test_total_matches_boundaries(self):
        items = validate_line_items(ITEMS)
        assert total_matches(items, Decimal("249.99"))
        assert total_matches(items, Decimal("250.02"))
        assert not total_matches(items, Decimal("250.03"))
        assert not total_matches(items, Decimal("260.00"))


class TestStatusAndDates:
    def test_valid_status(self):
        assert validate_status("processing") == "processing"

    @pytest.mark.parametrize("raw", [None, "", "shipped", "PENDING"])
    def test_invalid_status(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            validate_status(raw)
        assert "status" in exc_info.value.errors

    def test_parse_date(self):
        assert parse_date("2025-10-29", "from") == date(2025, 10, 29)
        assert parse_date("", "from") is None
        assert parse_date(None, "to") is None

    def test_parse_date_invalid(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_date("29/10/2025", "to")
        assert "to" in exc_info.value.errors


class TestAmountLimits:
    def test_unit_price_too_large(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_order_payload([{"product_name": "x", "quantity": 1, "unit_price": 1e30}], 1e30)
        errors = exc_info.value.errors
        assert errors["line_items.0.unit_price"] == ["The unit_price may not be greater than 9999999999999.99."]
        assert errors["total_amount"] == ["The total_amount may not be greater than 9999999999999.99."]

    def test_total_amount_too_large(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_total_amount("10000000000000")
        assert "total_amount" in exc_info.value.errors

    def test_largest_amount_accepted(self):
        items, total = validate_order_payload(
            [{"product_name": "x", "quantity": 1, "unit_price": "9999999999999.99"}], "9999999999999.99"
        )
        assert items[0]["unit_price"] == Decimal("9999999999999.99")
        assert total == Decimal("9999999999999.99")
