"""Per-status, per-variant and per-client breakdowns for the analytics screen."""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .constants import PROFIT_STATUSES
from .order_analytics import (
    DateRange,
    MonthlyEntry,
    Order,
    OrderItem,
    discount_for_order,
    gross_for_order,
    in_date_range,
    is_profit_status,
    net_for_order,
    normalize_order_status,
    order_in_scope,
    to_number,
)


def build_status_metrics(
    orders: Iterable[Order],
    item_subtotal_map: Mapping[str, float],
    item_quantity_map: Mapping[str, float],
    date_range: DateRange,
) -> List[Dict[str, Any]]:
    """Gross/discount/net totals for each profit status, zero-filled."""
    rows: Dict[str, Dict[str, Any]] = {
        status: {"status": status, "orders": 0, "gross": 0.0, "discount": 0.0, "net": 0.0}
        for status in PROFIT_STATUSES
    }

    for order in orders:
        status = normalize_order_status(order.get("status"))
        if not is_profit_status(status) or not in_date_range(order.get("created_at"), date_range):
            continue
        row = rows[status]
        row["orders"] += 1
        row["gross"] += gross_for_order(order, item_subtotal_map, item_quantity_map)
        row["discount"] += discount_for_order(order, item_subtotal_map.get(order.get("id")))
        row["net"] += net_for_order(order, item_subtotal_map, item_quantity_map)

    return [rows[status] for status in PROFIT_STATUSES]


def build_scoped_order_map(
    orders: Iterable[Order],
    date_range: DateRange,
    allowed_statuses: Sequence[str] = PROFIT_STATUSES,
) -> Dict[str, Order]:
    return {
        order.get("id"): order
        for order in orders
        if order_in_scope(order, allowed_statuses, date_range)
    }


def build_variant_label_map(
    variants: Iterable[Mapping[str, Any]],
    products: Iterable[Mapping[str, Any]],
    sizes: Iterable[Mapping[str, Any]],
    colors: Iterable[Mapping[str, Any]],
) -> Dict[str, str]:
    product_names = {row.get("id"): row.get("name") for row in products}
    size_names = {row.get("id"): row.get("name") for row in sizes}
    color_names = {row.get("id"): row.get("name") for row in colors}

    labels: Dict[str, str] = {}
    for variant in variants:
        parts = [product_names.get(variant.get("product_id")) or "Unknown Product"]
        size_name = size_names.get(variant.get("size_id")) if variant.get("size_id") else None
        color_name = color_names.get(variant.get("color_id")) if variant.get("color_id") else None
        if size_name:
            parts.append(size_name)
        if color_name:
            parts.append(color_name)

        base = " / ".join(parts)
        sku = variant.get("sku")
        labels[variant.get("id")] = f"{sku} - {base}" if sku else base
    return labels


def rank_top_variants(
    items: Iterable[OrderItem],
    scoped_orders: Mapping[str, Order],
    variant_labels: Mapping[str, str],
    limit: int = 10,
) -> List[Dict[str, Any]]:
    """Best-selling variants among in-scope orders."""
    totals: Dict[str, Dict[str, Any]] = {}
    for item in items:
        variant_id = item.get("variant_id")
        if not variant_id:
            continue
        order_id = item.get("order_id")
        if order_id not in scoped_orders:
            continue

        quantity = to_number(item.get("quantity"))
        entry = totals.setdefault(variant_id, {"quantity": 0.0, "revenue": 0.0, "order_ids": set()})
        entry["quantity"] += quantity
        entry["revenue"] += to_number(item.get("price")) * quantity
        entry["order_ids"].add(order_id)

    ranked = [
        {
            "variant_id": variant_id,
            "label": variant_labels.get(variant_id) or variant_id,
            "quantity": entry["quantity"],
            "orders": len(entry["order_ids"]),
            "revenue": entry["revenue"],
        }
        for variant_id, entry in totals.items()
    ]
    ranked.sort(key=lambda row: (row["quantity"], row["orders"], row["revenue"]), reverse=True)
    return ranked[:limit]


def _client_display_name(order: Order) -> str:
    full_name = f"{order.get('first_name') or ''} {order.get('second_name') or ''}".strip()
    return full_name or order.get("email") or order.get("user_id")


def rank_active_clients(
    scoped_orders: Mapping[str, Order],
    item_subtotal_map: Mapping[str, float],
    item_quantity_map: Mapping[str, float],
    limit: int = 10,
) -> List[Dict[str, Any]]:
    """Customers with the most in-scope orders."""
    clients: Dict[str, Dict[str, Any]] = {}
    for order in scoped_orders.values():
        user_id = order.get("user_id")
        if not user_id:
            continue

        row = clients.get(user_id)
        if row is None:
            row = {
                "user_id": user_id,
                "name": _client_display_name(order),
                "email": order.get("email"),
                "orders": 0,
                "item_qty": 0.0,
                "gross": 0.0,
                "net": 0.0,
            }
            clients[user_id] = row

        row["orders"] += 1
        row["item_qty"] += item_quantity_map.get(order.get("id")) or 0.0
        row["gross"] += gross_for_order(order, item_subtotal_map, item_quantity_map)
        row["net"] += net_for_order(order, item_subtotal_map, item_quantity_map)

    ranked = sorted(
        clients.values(),
        key=lambda row: (row["orders"], row["item_qty"], row["net"]),
        reverse=True,
    )
    return ranked[:limit]


def max_monthly_value(series: Sequence[MonthlyEntry], fields: Sequence[str] = ("gross", "net")) -> float:
    """Largest monthly value for chart scaling, never below 1."""
    peak: Optional[float] = None
    for entry in series:
        for field in fields:
            value = getattr(entry, field)
            if peak is None or value > peak:
                peak = value
    return max(1.0, peak if peak is not None else 1.0)


__all__ = [
    "build_status_metrics",
    "build_scoped_order_map",
    "build_variant_label_map",
    "rank_top_variants",
    "rank_active_clients",
    "max_monthly_value",
]
