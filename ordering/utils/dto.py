from typing import Any, Dict, List, Optional


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def to_line_item_dto(item: Dict) -> Dict:
    return {
        "product_name": item.get("product_name"),
        "quantity": int(item.get("quantity") or 0),
        "unit_price": float(item.get("unit_price") or 0),
    }


def to_order_dto(row: Any) -> Dict:
    items: List[Dict] = getattr(row, "line_items", None) or []
    return {
        "id": getattr(row, "id", None),
        "customer_name": getattr(row, "customer_name", None),
        "line_items": [to_line_item_dto(it) for it in items],
        "status": getattr(row, "status", None),
        "total_amount": float(getattr(row, "total_amount", 0) or 0),
        "created_at": _iso(getattr(row, "created_at", None)),
        "updated_at": _iso(getattr(row, "updated_at", None)),
    }
