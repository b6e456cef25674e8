import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from .config import logger
from .connection import get_db_connection

Amount = Union[int, float, str, None]

ANALYTICS_ORDER_COLUMNS = (
    "id, user_id, first_name, second_name, email, status, total_amount, discount_amount, created_at"
)


class OrderDB:
    @staticmethod
    def create_order(
        status: Optional[str],
        total_amount: Amount,
        discount_amount: Amount = 0,
        user_id: Optional[str] = None,
        first_name: Optional[str] = None,
        second_name: Optional[str] = None,
        email: Optional[str] = None,
        created_at: Optional[str] = None,
        order_id: Optional[str] = None,
    ) -> str:
        order_id = order_id or f"order_{uuid.uuid4().hex[:12]}"
        created_at = created_at or datetime.now(timezone.utc).isoformat(timespec="milliseconds")

        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('''
                INSERT INTO orders
                (id, user_id, first_name, second_name, email, status, total_amount, discount_amount, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            ''', (
                order_id,
                user_id,
                first_name,
                second_name,
                email,
                status,
                total_amount,
                discount_amount,
                created_at,
            ))
            conn.commit()
            return order_id

    @staticmethod
    def add_order_item(order_id: str, price: Amount, quantity: Amount, variant_id: Optional[str] = None) -> int:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('SELECT 1 FROM orders WHERE id = ?', (order_id,))
            if not cursor.fetchone():
                raise ValueError(f"Order does not exist: {order_id}")
            cursor.execute('''
                INSERT INTO order_items (order_id, variant_id, price, quantity)
                VALUES (?, ?, ?, ?)
            ''', (order_id, variant_id, price, quantity))
            conn.commit()
            return cursor.lastrowid

    @staticmethod
    def update_order_status(order_id: str, status: str) -> bool:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('''
                UPDATE orders
                SET status = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
            ''', (status, order_id))
            conn.commit()
            return cursor.rowcount > 0

    @staticmethod
    def get_order_by_id(order_id: str) -> Optional[Dict[str, Any]]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f'SELECT {ANALYTICS_ORDER_COLUMNS} FROM orders WHERE id = ?', (order_id,))
            row = cursor.fetchone()
            if not row:
                return None
            order = dict(row)
            cursor.execute(
                'SELECT order_id, variant_id, price, quantity FROM order_items WHERE order_id = ? ORDER BY id',
                (order_id,)
            )
            order['items'] = [dict(item) for item in cursor.fetchall()]
            return order

    @staticmethod
    def delete_order(order_id: str) -> bool:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('DELETE FROM order_items WHERE order_id = ?', (order_id,))
            cursor.execute('DELETE FROM orders WHERE id = ?', (order_id,))
            deleted = cursor.rowcount > 0
            conn.commit()
            if deleted:
                logger.info("Order deleted: %s", order_id)
            return deleted

    @staticmethod
    def get_analytics_orders() -> List[Dict[str, Any]]:
        """All orders, newest first, unfiltered. Filtering happens in the analytics engine."""
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f'SELECT {ANALYTICS_ORDER_COLUMNS} FROM orders ORDER BY created_at DESC')
            return [dict(row) for row in cursor.fetchall()]

    @staticmethod
    def get_analytics_order_items() -> List[Dict[str, Any]]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('SELECT order_id, variant_id, price, quantity FROM order_items')
            return [dict(row) for row in cursor.fetchall()]
