"""Response envelope helpers."""

from __future__ import annotations

from typing import Any, Sequence

from flask import jsonify

from ...models import PurchaseOrder
from ...services.purchase_orders import line_total, order_total


def success(data: Any, status: int = 200, **extra: Any):
    return jsonify({"success": True, "data": data, **extra}), status


def listing(items: Sequence[Any]):
    return jsonify({"success": True, "data": list(items), "total": len(items)}), 200


def no_content():
    return "", 204


def serialize(record: Any) -> dict[str, Any]:
    return record.model_dump(mode="json")


def serialize_item(item: Any) -> dict[str, Any]:
    payload = item.model_dump(mode="json")
    payload["line_total"] = line_total(item)
    return payload


def serialize_order(order: PurchaseOrder) -> dict[str, Any]:
    payload = order.model_dump(mode="json")
    items = list(order.items)
    payload["items"] = [serialize_item(item) for item in items]
    payload["total"] = order_total(items)
    return payload
