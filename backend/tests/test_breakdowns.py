from datetime import datetime

from analytics import (
    build_order_item_gross_map,
    build_order_item_quantity_map,
    build_scoped_order_map,
    build_status_metrics,
    build_variant_label_map,
    get_custom_range,
    max_monthly_value,
    rank_active_clients,
    rank_top_variants,
)
from analytics.order_analytics import MonthlyEntry


RANGE = get_custom_range("2024-05-01", "2024-05-31")

ORDERS = [
    {"id": "o1", "user_id": "u1", "first_name": "Lina", "second_name": "Haddad", "email": "lina@example.com",
     "status": "paid", "total_amount": "3260", "discount_amount": 0, "created_at": "2024-05-02T10:00:00"},
    {"id": "o2", "user_id": "u1", "first_name": "Lina", "second_name": "Haddad", "email": "lina@example.com",
     "status": "done", "total_amount": "2130", "discount_amount": "100", "created_at": "2024-05-03T10:00:00"},
    {"id": "o3", "user_id": "u2", "first_name": None, "second_name": None, "email": "omar@example.com",
     "status": "Preparing", "total_amount": "1130", "discount_amount": 0, "created_at": "2024-05-04T10:00:00"},
    {"id": "o4", "user_id": None, "first_name": "Guest", "second_name": None, "email": None,
     "status": "cancelled", "total_amount": "9999", "discount_amount": 0, "created_at": "2024-05-05T10:00:00"},
    {"id": "o5", "user_id": "u3", "first_name": None, "second_name": None, "email": None,
     "status": "paid", "total_amount": "5000", "discount_amount": 0, "created_at": "2024-06-01T10:00:00"},
]

ITEMS = [
    {"order_id": "o1", "variant_id": "v1", "price": 1000, "quantity": 1},
    {"order_id": "o1", "variant_id": "v2", "price": 500, "quantity": 2},
    {"order_id": "o2", "variant_id": "v2", "price": 500, "quantity": 2},
    {"order_id": "o3", "variant_id": None, "price": 0, "quantity": 1},
    {"order_id": "o4", "variant_id": "v1", "price": 1000, "quantity": 9},
    {"order_id": "o5", "variant_id": "v3", "price": 2000, "quantity": 2},
]


def _maps():
    return build_order_item_gross_map(ITEMS), build_order_item_quantity_map(ITEMS)


def test_status_metrics_rows_follow_profit_statuses():
    subtotal_map, quantity_map = _maps()
    rows = build_status_metrics(ORDERS, subtotal_map, quantity_map, RANGE)

    assert [row["status"] for row in rows] == ["paid", "done", "preparing"]
    paid, done, preparing = rows
    assert paid["orders"] == 1
    assert paid["gross"] == 3260
    assert paid["net"] == 3260 - (1000 + 3 * 130)
    assert done["discount"] == 100
    assert done["net"] == 2130 - (1000 + 2 * 130)
    assert preparing["orders"] == 1
    assert preparing["gross"] == 1130


def test_status_metrics_zero_filled_without_orders():
    rows = build_status_metrics([], {}, {}, RANGE)
    assert rows == [
        {"status": status, "orders": 0, "gross": 0.0, "discount": 0.0, "net": 0.0}
        for status in ("paid", "done", "preparing")
    ]


def test_scoped_order_map_filters_status_and_range():
    scoped = build_scoped_order_map(ORDERS, RANGE)
    assert sorted(scoped) == ["o1", "o2", "o3"]


def test_variant_labels():
    labels = build_variant_label_map(
        variants=[
            {"id": "v1", "sku": "TEE-S-BLK", "product_id": "p1", "size_id": "s1", "color_id": "c1"},
            {"id": "v2", "sku": None, "product_id": "p1", "size_id": None, "color_id": "c1"},
            {"id": "v3", "sku": "", "product_id": "missing", "size_id": "s9", "color_id": None},
        ],
        products=[{"id": "p1", "name": "Classic Tee"}],
        sizes=[{"id": "s1", "name": "S"}],
        colors=[{"id": "c1", "name": "Black"}],
    )
    assert labels == {
        "v1": "TEE-S-BLK - Classic Tee / S / Black",
        "v2": "Classic Tee / Black",
        "v3": "Unknown Product",
    }


def test_top_variants_ranked_by_quantity_orders_revenue():
    scoped = build_scoped_order_map(ORDERS, RANGE)
    ranked = rank_top_variants(ITEMS, scoped, {"v2": "Hoodie / M"})

    assert [row["variant_id"] for row in ranked] == ["v2", "v1"]
    assert ranked[0] == {"variant_id": "v2", "label": "Hoodie / M", "quantity": 4.0, "orders": 2, "revenue": 2000.0}
    # cancelled order o4 is out of scope
    assert ranked[1]["quantity"] == 1.0
    assert ranked[1]["label"] == "v1"


def test_top_variants_respects_limit():
    scoped = build_scoped_order_map(ORDERS, RANGE)
    assert len(rank_top_variants(ITEMS, scoped, {}, limit=1)) == 1


def test_active_clients():
    subtotal_map, quantity_map = _maps()
    scoped = build_scoped_order_map(ORDERS, RANGE)
    clients = rank_active_clients(scoped, subtotal_map, quantity_map)

    assert [row["user_id"] for row in clients] == ["u1", "u2"]
    lina, omar = clients
    assert lina["name"] == "Lina Haddad"
    assert lina["orders"] == 2
    assert lina["item_qty"] == 5.0
    assert lina["gross"] == 3260 + 2130
    assert omar["name"] == "omar@example.com"


def test_max_monthly_value_never_below_one():
    assert max_monthly_value([]) == 1.0
    series = [
        MonthlyEntry(month_key="2024-05", label="May 2024", gross=-50.0, net=-80.0),
        MonthlyEntry(month_key="2024-06", label="Jun 2024", gross=420.0, net=300.0, orders=2),
    ]
    assert max_monthly_value(series) == 420.0
    assert max_monthly_value(series, fields=("net",)) == 300.0
    assert max_monthly_value(series[:1]) == 1.0


def test_breakdowns_do_not_mutate_inputs():
    snapshot = [dict(order) for order in ORDERS]
    subtotal_map, quantity_map = _maps()
    build_status_metrics(ORDERS, subtotal_map, quantity_map, RANGE)
    rank_active_clients(build_scoped_order_map(ORDERS, RANGE), subtotal_map, quantity_map)
    assert ORDERS == snapshot
    assert datetime(2024, 5, 31, 23, 59, 59, 999000) == RANGE.to


def test_status_metrics_skip_non_profit_and_legacy_failed():
    orders = [
        {"id": "x1", "status": "faield", "total_amount": 500, "created_at": "2024-05-10T10:00:00"},
        {"id": "x2", "status": "", "total_amount": 500, "created_at": "2024-05-10T10:00:00"},
        {"id": "x3", "status": "DONE", "total_amount": 700, "created_at": "2024-05-10T10:00:00"},
    ]
    rows = {row["status"]: row for row in build_status_metrics(orders, {}, {}, RANGE)}
    assert rows["done"]["orders"] == 1
    assert rows["done"]["net"] == 700
    assert sum(row["orders"] for row in rows.values()) == 1
