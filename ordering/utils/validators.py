"""Input validation for order payloads and list filters.

All checks collect field-tagged messages and raise a single
``ValidationError`` so a client sees every problem at once.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Tuple

from ..errors import ValidationError
from ..services.order_status import ORDER_STATUSES


CENT = Decimal("0.01")
# accepted absolute difference between total_amount and the line item sum;
# 250.02 against items summing to 250.00 is accepted
TOTAL_TOLERANCE = Decimal("0.02")
TOTAL_MISMATCH_MESSAGE = "Total amount does not match sum of line_items."
# largest value a Numeric(15, 2) column holds
MAX_AMOUNT = Decimal("9999999999999.99")

Errors = Dict[str, List[str]]


def to_money(value: Any) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def _parse_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return number


def _parse_quantity(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _collect_line_items(raw: Any, errors: Errors) -> Optional[List[Dict]]:
    if raw is None:
        errors["line_items"] = ["The line_items field is required."]
        return None
    if not isinstance(raw, list) or not raw:
        errors["line_items"] = ["The line_items field must be a non-empty list."]
        return None

    before = len(errors)
    items = []
    for index, entry in enumerate(raw):
        prefix = f"line_items.{index}"
        if not isinstance(entry, dict):
            errors[prefix] = ["Each line item must be an object."]
            continue

        name = entry.get("product_name")
        if not isinstance(name, str) or not name.strip():
            errors[f"{prefix}.product_name"] = ["The product_name field is required."]

        quantity = _parse_quantity(entry.get("quantity"))
        if quantity is None:
            errors[f"{prefix}.quantity"] = ["The quantity must be an integer."]
        elif quantity < 1:
            errors[f"{prefix}.quantity"] = ["The quantity must be at least 1."]

        unit_price = _parse_decimal(entry.get("unit_price"))
        if unit_price is None:
            errors[f"{prefix}.unit_price"] = ["The unit_price must be a number."]
        elif unit_price < 0:
            errors[f"{prefix}.unit_price"] = ["The unit_price must be at least 0."]
        elif unit_price > MAX_AMOUNT:
            errors[f"{prefix}.unit_price"] = [f"The unit_price may not be greater than {MAX_AMOUNT}."]

        if len(errors) == before:
            items.append(
                {
                    "product_name": name,
                    "quantity": quantity,
                    "unit_price": to_money(unit_price),
                }
            )
    return items if len(errors) == before else None


def _collect_total(raw: Any, errors: Errors) -> Optional[Decimal]:
    if raw is None or raw == "":
        errors["total_amount"] = ["The total_amount field is required."]
        return None
    total = _parse_decimal(raw)
    if total is None:
        errors["total_amount"] = ["The total_amount must be a number."]
        return None
    if total < 0:
        errors["total_amount"] = ["The total_amount must be at least 0."]
        return None
    if total > MAX_AMOUNT:
        errors["total_amount"] = [f"The total_amount may not be greater than {MAX_AMOUNT}."]
        return None
    return to_money(total)


def validate_line_items(raw: Any) -> List[Dict]:
    errors: Errors = {}
    items = _collect_line_items(raw, errors)
    if errors:
        raise ValidationError(errors)
    return items


def validate_total_amount(raw: Any) -> Decimal:
    errors: Errors = {}
    total = _collect_total(raw, errors)
    if errors:
        raise ValidationError(errors)
    return total


def line_items_sum(items: List[Dict]) -> Decimal:
    return sum((Decimal(it["quantity"]) * Decimal(str(it["unit_price"])) for it in items), Decimal("0"))


def total_matches(items: List[Dict], total: Decimal) -> bool:
    return abs(Decimal(str(total)) - line_items_sum(items)) <= TOTAL_TOLERANCE


def validate_order_payload(line_items: Any, total_amount: Any) -> Tuple[List[Dict], Decimal]:
    """Return normalised (items, total) or raise ValidationError.

    The total is compared against the item sum only when both are
    individually valid.
    """
    errors: Errors = {}
    items = _collect_line_items(line_items, errors)
    total = _collect_total(total_amount, errors)
    if not errors and not total_matches(items, total):
        errors["total_amount"] = [TOTAL_MISMATCH_MESSAGE]
    if errors:
        raise ValidationError(errors)
    return items, total


def validate_status(raw: Any, field: str = "status") -> str:
    if raw is None or raw == "":
        raise ValidationError.for_field(field, f"The {field} field is required.")
    if raw not in ORDER_STATUSES:
        raise ValidationError.for_field(
            field, f"The selected {field} is invalid. Allowed: {', '.join(ORDER_STATUSES)}."
        )
    return raw


def parse_date(raw: Any, field: str) -> Optional[date]:
    if raw is None or raw == "":
        return None
    if isinstance(raw, date):
        return raw
    try:
        return datetime.strptime(str(raw).strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError.for_field(field, f"The {field} must be a date in YYYY-MM-DD format.")
