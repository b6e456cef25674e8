import uuid
from typing import Any, Dict, List, Optional

from .connection import get_db_connection


class CatalogDB:
    @staticmethod
    def _insert_named(table: str, name: str, entity_id: Optional[str]) -> str:
        entity_id = entity_id or f"{table[:-1]}_{uuid.uuid4().hex[:10]}"
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f'INSERT INTO {table} (id, name) VALUES (?, ?)', (entity_id, name))
            conn.commit()
        return entity_id

    @staticmethod
    def _list_named(table: str) -> List[Dict[str, Any]]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f'SELECT id, name FROM {table} ORDER BY name')
            return [dict(row) for row in cursor.fetchall()]

    @staticmethod
    def create_product(name: str, product_id: Optional[str] = None) -> str:
        return CatalogDB._insert_named('products', name, product_id)

    @staticmethod
    def create_size(name: str, size_id: Optional[str] = None) -> str:
        return CatalogDB._insert_named('sizes', name, size_id)

    @staticmethod
    def create_color(name: str, color_id: Optional[str] = None) -> str:
        return CatalogDB._insert_named('colors', name, color_id)

    @staticmethod
    def create_variant(
        product_id: str,
        sku: Optional[str] = None,
        size_id: Optional[str] = None,
        color_id: Optional[str] = None,
        variant_id: Optional[str] = None,
    ) -> str:
        variant_id = variant_id or f"variant_{uuid.uuid4().hex[:10]}"
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('''
                INSERT INTO product_variants (id, sku, product_id, size_id, color_id)
                VALUES (?, ?, ?, ?, ?)
            ''', (variant_id, sku, product_id, size_id, color_id))
            conn.commit()
        return variant_id

    @staticmethod
    def list_products() -> List[Dict[str, Any]]:
        return CatalogDB._list_named('products')

    @staticmethod
    def list_sizes() -> List[Dict[str, Any]]:
        return CatalogDB._list_named('sizes')

    @staticmethod
    def list_colors() -> List[Dict[str, Any]]:
        return CatalogDB._list_named('colors')

    @staticmethod
    def list_variant_meta() -> List[Dict[str, Any]]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('SELECT id, sku, product_id, size_id, color_id FROM product_variants')
            return [dict(row) for row in cursor.fetchall()]
