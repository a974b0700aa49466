"""
MySQL connection pool wrapper.
One instance is created by the composition root and shared by every
repository; connections are borrowed per unit of work.

The pool is built on first use so the app can be imported without a
reachable server. Connections are opened with FOUND_ROWS, so an UPDATE
reports matched rows: re-saving a product with unchanged values still
counts as found.
"""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from mysql.connector import pooling
from mysql.connector.constants import ClientFlag
from mysql.connector.pooling import PooledMySQLConnection

from catalog.infrastructure.config.settings import MySQLConfig


class MySQLConnectionProvider:
    def __init__(self, config: MySQLConfig) -> None:
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._pool_lock = threading.Lock()

    def _init_pool(self) -> pooling.MySQLConnectionPool:
        return pooling.MySQLConnectionPool(
            pool_name=self._config.pool_name,
            pool_size=self._config.pool_size,
            pool_reset_session=True,
            host=self._config.host,
            port=self._config.port,
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            client_flags=[ClientFlag.FOUND_ROWS],
        )

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        if self._pool is None:
            with self._pool_lock:
                if self._pool is None:
                    self._pool = self._init_pool()
        return self._pool

    @contextmanager
    def get_connection(self) -> Iterator[PooledMySQLConnection]:
        """Borrow a pooled connection; commit on success, roll back on error.

        Usage:
            with provider.get_connection() as conn: ...
        """
        conn = self._get_pool().get_connection()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
