import os
import tempfile

_TEST_ROOT = tempfile.mkdtemp(prefix="storefront-admin-tests-")

# settings are read once at import time, so the environment must be ready first
os.environ["ENV"] = "development"
os.environ["DB_PATH"] = os.path.join(_TEST_ROOT, "test.db")
os.environ["EXPORTS_DIR"] = os.path.join(_TEST_ROOT, "exports")
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["ADMIN_EMAIL"] = "admin@example.com"
os.environ["ADMIN_PASSWORD"] = "admin-pass"
os.environ["ADMIN_NAME"] = "Test Admin"
os.environ["ANALYTICS_DEFAULT_PERIOD"] = "3m"

import pytest

from database import get_db_connection, init_database

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin-pass"


@pytest.fixture
def db():
    init_database()
    yield
    with get_db_connection() as conn:
        for table in ("order_items", "orders", "product_variants", "products", "sizes", "colors"):
            conn.execute(f"DELETE FROM {table}")
        conn.execute("DELETE FROM profiles WHERE role != 'admin' OR email != ?", (ADMIN_EMAIL,))
        conn.commit()


@pytest.fixture
def client(db):
    from fastapi.testclient import TestClient

    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_client(client):
    resp = client.post("/auth/admin-login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.json()["success"] is True
    return client
