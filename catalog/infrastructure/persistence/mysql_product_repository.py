"""
Infrastructure adapter: MySQL → IProductRepository.
All SQL and mysql.connector details are confined here. Driver errors are
logged and re-raised as the domain StorageError so callers never import
mysql.connector.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

import mysql.connector
from loguru import logger

from catalog.domain.entities.product import NewProduct, Product
from catalog.domain.exceptions import StorageError
from catalog.domain.ports.product_repository_port import IProductRepository
from catalog.infrastructure.persistence.mysql_connection import MySQLConnectionProvider

_COLUMNS = "id, name, price, stock, historical_data"


class MySQLProductRepository(IProductRepository):
    """Reads and writes the 'products' table."""

    def __init__(self, connection_provider: MySQLConnectionProvider) -> None:
        self._cp = connection_provider

    # ------------------------------------------------------------------
    # IProductRepository interface
    # ------------------------------------------------------------------

    def list_products(self) -> list[Product]:
        sql = f"SELECT {_COLUMNS} FROM products ORDER BY id"
        with self._cursor(dictionary=True) as cursor:
            cursor.execute(sql)
            rows = cursor.fetchall()
        return [self._row_to_product(r) for r in rows]

    def get_product(self, product_id: int) -> Optional[Product]:
        sql = f"SELECT {_COLUMNS} FROM products WHERE id = %s"
        with self._cursor(dictionary=True) as cursor:
            cursor.execute(sql, (product_id,))
            row = cursor.fetchone()
        if row is None:
            return None
        return self._row_to_product(row)

    def add_product(self, product: NewProduct) -> Product:
        sql = """
            INSERT INTO products (name, price, stock, historical_data)
            VALUES (%s, %s, %s, %s)
        """
        with self._cursor() as cursor:
            cursor.execute(
                sql,
                (product.name, product.price, product.stock, product.historical_data),
            )
            product_id = cursor.lastrowid

        return Product(
            id=product_id,
            name=product.name,
            price=product.price,
            stock=product.stock,
            historical_data=product.historical_data,
        )

    def update_product(self, product_id: int, product: NewProduct) -> bool:
        sql = """
            UPDATE products
            SET name = %s,
                price = %s,
                stock = %s,
                historical_data = %s
            WHERE id = %s
        """
        with self._cursor() as cursor:
            cursor.execute(
                sql,
                (product.name, product.price, product.stock, product.historical_data, product_id),
            )
            affected = cursor.rowcount
        return affected > 0

    def delete_product(self, product_id: int) -> bool:
        with self._cursor() as cursor:
            cursor.execute("DELETE FROM products WHERE id = %s", (product_id,))
            affected = cursor.rowcount
        return affected > 0

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @contextmanager
    def _cursor(self, dictionary: bool = False) -> Iterator:
        try:
            with self._cp.get_connection() as conn:
                yield conn.cursor(dictionary=dictionary)
        except mysql.connector.Error as exc:
            logger.exception("MySQL operation on 'products' failed")
            raise StorageError(str(exc)) from exc

    @staticmethod
    def _row_to_product(row: dict) -> Product:
        return Product(
            id=row["id"],
            name=row["name"],
            price=row["price"],
            stock=row["stock"],
            historical_data=row.get("historical_data"),
        )
