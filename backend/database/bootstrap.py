import os
import sqlite3

from . import config
from .security import hash_password, is_password_hashed


def ensure_admin_accounts(conn) -> None:
    """Ensure administrator profiles defined in configuration exist with the admin role."""
    cursor = conn.cursor()
    for account in config.settings.admin_accounts:
        password = account.password
        if not is_password_hashed(password):
            password = hash_password(password)

        cursor.execute(
            '''
            INSERT INTO profiles (id, email, password, first_name, role)
            VALUES (?, ?, ?, ?, 'admin')
            ON CONFLICT(email) DO UPDATE SET
                password = excluded.password,
                first_name = excluded.first_name,
                role = 'admin',
                updated_at = CURRENT_TIMESTAMP
            ''',
            (f"admin_{account.email}", account.email, password, account.name)
        )


def init_database():
    """Create the storefront tables and import configured admin accounts."""
    if config.settings.db_reset and not config._DB_WAS_RESET:
        if os.path.exists(config.DB_PATH):
            try:
                os.remove(config.DB_PATH)
                config.logger.info("Database reset: removed existing file %s", config.DB_PATH)
            except OSError as exc:
                config.logger.error("Failed to remove database file: %s", exc)
                raise
        config._DB_WAS_RESET = True

    conn = sqlite3.connect(config.DB_PATH)
    cursor = conn.cursor()

    try:
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS profiles (
                id TEXT PRIMARY KEY,
                email TEXT UNIQUE,
                password TEXT,
                first_name TEXT,
                second_name TEXT,
                role TEXT NOT NULL DEFAULT 'user',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS products (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS sizes (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL
            )
        ''')

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS colors (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL
            )
        ''')

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS product_variants (
                id TEXT PRIMARY KEY,
                sku TEXT,
                product_id TEXT NOT NULL,
                size_id TEXT,
                color_id TEXT,
                FOREIGN KEY (product_id) REFERENCES products (id) ON DELETE CASCADE
            )
        ''')

        # money columns stay untyped: legacy rows hold numeric strings
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS orders (
                id TEXT PRIMARY KEY,
                user_id TEXT,
                first_name TEXT,
                second_name TEXT,
                email TEXT,
                status TEXT,
                total_amount,
                discount_amount,
                created_at TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS order_items (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                order_id TEXT NOT NULL,
                variant_id TEXT,
                price,
                quantity,
                FOREIGN KEY (order_id) REFERENCES orders (id) ON DELETE CASCADE
            )
        ''')

        cursor.execute('CREATE INDEX IF NOT EXISTS idx_orders_created_at ON orders (created_at)')
        cursor.execute('CREATE INDEX IF NOT EXISTS idx_order_items_order_id ON order_items (order_id)')

        ensure_admin_accounts(conn)
        conn.commit()
        config.logger.info("Database initialised: %s", config.DB_PATH)
    except Exception as exc:
        conn.rollback()
        config.logger.error("Database initialisation failed: %s", exc)
        raise
    finally:
        conn.close()
