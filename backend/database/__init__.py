from .config import DB_PATH, logger, settings
from .security import hash_password, verify_password, is_password_hashed
from .connection import get_db_connection
from .bootstrap import ensure_admin_accounts, init_database
from .profiles import ProfileDB
from .products import CatalogDB
from .orders import OrderDB

__all__ = [
    "DB_PATH",
    "logger",
    "settings",
    "hash_password",
    "verify_password",
    "is_password_hashed",
    "get_db_connection",
    "ensure_admin_accounts",
    "init_database",
    "ProfileDB",
    "CatalogDB",
    "OrderDB",
]
