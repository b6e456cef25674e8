from datetime import datetime, timedelta

from database import CatalogDB, OrderDB, ProfileDB
from app.utils import INVALID_CUSTOM_RANGE_MESSAGE


def _days_ago(days: int) -> str:
    return (datetime.now() - timedelta(days=days)).isoformat(timespec="seconds")


def _seed_recent_orders():
    product_id = CatalogDB.create_product("Classic Tee")
    variant_id = CatalogDB.create_variant(product_id, sku="TEE-1")

    paid = OrderDB.create_order("paid", "1650", 0, user_id="u1", first_name="Lina", created_at=_days_ago(3))
    OrderDB.add_order_item(paid, 250, 2, variant_id=variant_id)
    legacy = OrderDB.create_order("faield", "900", 0, created_at=_days_ago(4))
    OrderDB.add_order_item(legacy, 100, 1)
    OrderDB.create_order("unpaid", "500", 0, created_at=_days_ago(5))
    OrderDB.create_order("done", "700", 0, created_at=_days_ago(200))
    return paid


def test_healthz(client):
    assert client.get("/healthz").json()["success"] is True


def test_dashboard_requires_admin_session(client):
    assert client.get("/admin/dashboard/overview").status_code == 401
    assert client.get("/admin/analytics").status_code == 401


def test_login_rejects_bad_password(client):
    body = client.post("/auth/admin-login", json={"email": "admin@example.com", "password": "nope"}).json()
    assert body["success"] is False
    assert body["code"] == 401


def test_login_rejects_non_admin(client):
    ProfileDB.upsert_profile("u9", "shopper@example.com", password="pw-123")
    body = client.post("/auth/admin-login", json={"email": "shopper@example.com", "password": "pw-123"}).json()
    assert body["code"] == 403
    assert body["message"] == "Access denied. This account is not an admin."


def test_me_and_logout(admin_client):
    me = admin_client.get("/auth/me").json()
    assert me["data"]["email"] == "admin@example.com"

    admin_client.post("/auth/logout")
    assert admin_client.get("/auth/me").json()["code"] == 401


def test_overview(admin_client):
    _seed_recent_orders()
    body = admin_client.get("/admin/dashboard/overview").json()
    assert body["success"] is True

    data = body["data"]
    assert data["profit_30_days"] == {
        "order_count": 1,
        "gross_profit": 1650.0,
        "discount_total": 0.0,
        "net_profit": 1650.0 - 1260.0,
    }
    counts = {row["status"]: row["count"] for row in data["status_counts_30_days"]}
    assert counts == {"unpaid": 1, "paid": 1, "failed": 1, "preparing": 0, "done": 0, "cancelled": 0}
    assert data["max_status_count"] == 1
    assert len(data["monthly_net"]) in (6, 7)


def test_analytics_preset_period(admin_client):
    _seed_recent_orders()
    data = admin_client.get("/admin/analytics", params={"period": "12m"}).json()["data"]

    assert data["summary"]["order_count"] == 2
    assert data["summary"]["gross_profit"] == 2350.0
    assert data["range"]["period"] == "12m"
    assert [row["status"] for row in data["status_metrics"]] == ["paid", "done", "preparing"]
    assert data["top_variants"][0]["label"] == "TEE-1 - Classic Tee"
    assert data["active_clients"][0]["name"] == "Lina"


def test_analytics_default_period(admin_client):
    data = admin_client.get("/admin/analytics").json()["data"]
    assert data["range"]["period"] == "3m"
    assert data["summary"]["order_count"] == 0


def test_analytics_custom_range(admin_client):
    OrderDB.create_order("paid", "2000", 0, created_at="2024-02-10T12:00:00")
    OrderDB.create_order("paid", "3000", 0, created_at="2024-04-01T00:00:00")
    data = admin_client.get(
        "/admin/analytics", params={"period": "custom", "from": "2024-01-01", "to": "2024-03-31"}
    ).json()["data"]

    assert data["summary"]["order_count"] == 1
    assert [row["month_key"] for row in data["monthly"]] == ["2024-01", "2024-02", "2024-03"]
    assert data["range"]["from_date"] == "2024-01-01"
    assert data["range"]["to_date"] == "2024-03-31"


def test_analytics_rejects_invalid_ranges(admin_client):
    body = admin_client.get(
        "/admin/analytics", params={"period": "custom", "from": "2024-03-31", "to": "2024-01-01"}
    ).json()
    assert body["code"] == 400
    assert body["message"] == INVALID_CUSTOM_RANGE_MESSAGE

    body = admin_client.get("/admin/analytics", params={"period": "2w"}).json()
    assert body["code"] == 400


def test_export_and_download(admin_client):
    _seed_recent_orders()
    body = admin_client.post("/admin/analytics/export", json={"period": "1m"}).json()
    assert body["success"] is True

    filename = body["data"]["filename"]
    assert filename.endswith(".xlsx")
    resp = admin_client.get(body["data"]["download_url"])
    assert resp.status_code == 200
    assert resp.content[:2] == b"PK"

    assert admin_client.get("/admin/analytics/export/missing.xlsx").status_code == 404
    assert admin_client.get("/admin/analytics/export/notes.txt").status_code == 400


def test_export_rejects_invalid_custom_range(admin_client):
    body = admin_client.post(
        "/admin/analytics/export", json={"period": "custom", "date_from": "bad", "date_to": "2024-01-01"}
    ).json()
    assert body["code"] == 400
