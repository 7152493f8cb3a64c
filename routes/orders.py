"""Order endpoints. Every route requires a bearer token."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, current_app, g, jsonify, request

from ordering.errors import OrderError
from ordering.services.auth import bearer_token
from ordering.utils.pagination import parse_page


orders_bp = Blueprint("orders", __name__, url_prefix="/api/orders")


def _components() -> Dict[str, Any]:
    return current_app.extensions["order_api_components"]


def _service():
    return _components()["order_service"]


def _payload() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


@orders_bp.before_request
def authenticate():
    decoder = _components()["token_decoder"]
    token = bearer_token(request.headers.get("Authorization"))
    g.current_user = decoder.decode(token)
    return None


@orders_bp.errorhandler(OrderError)
def handle_order_error(exc: OrderError):
    return jsonify(exc.to_dict()), exc.status_code


@orders_bp.get("")
def list_orders():
    result = _service().list_orders(
        g.current_user,
        status=request.args.get("status"),
        date_from=request.args.get("from"),
        date_to=request.args.get("to"),
        page=parse_page(request.args.get("page", 1)),
    )
    return jsonify(
        {
            "data": result["items"],
            "current_page": result["page"],
            "per_page": result["page_size"],
            "total": result["total"],
        }
    )


@orders_bp.post("")
def create_order():
    payload = _payload()
    order = _service().create_order(
        g.current_user,
        payload.get("line_items"),
        payload.get("total_amount"),
        status=payload.get("status"),
    )
    return jsonify({"data": order}), 201


@orders_bp.get("/<order_id>")
def show_order(order_id: str):
    return jsonify({"data": _service().get_order(g.current_user, order_id)})


@orders_bp.put("/<order_id>")
def update_order(order_id: str):
    payload = _payload()
    order = _service().update_order(
        g.current_user,
        order_id,
        payload.get("line_items"),
        payload.get("total_amount"),
    )
    return jsonify({"data": order})


@orders_bp.delete("/<order_id>")
def delete_order(order_id: str):
    _service().delete_order(g.current_user, order_id)
    return jsonify({"message": "Deleted."})


@orders_bp.patch("/<order_id>/status")
def update_order_status(order_id: str):
    payload = _payload()
    order = _service().update_status(g.current_user, order_id, payload.get("status"))
    return jsonify({"data": order})
