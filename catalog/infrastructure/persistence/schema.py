"""
Schema bootstrap for the products table.
Run once at application startup; existing tables are left untouched.
"""

from loguru import logger

from catalog.infrastructure.persistence.mysql_connection import MySQLConnectionProvider

PRODUCTS_TABLE_DDL = """
    CREATE TABLE products (
        id INT AUTO_INCREMENT PRIMARY KEY,
        name VARCHAR(255) NOT NULL,
        price DECIMAL(10, 2) NOT NULL,
        stock INT NOT NULL,
        historical_data TEXT
    )
"""


def ensure_schema(connection_provider: MySQLConnectionProvider) -> bool:
    """Create the products table if it is missing.

    Returns:
        True if the table was created, False if it already existed.
    """
    with connection_provider.get_connection() as conn:
        cursor = conn.cursor()
        cursor.execute("SHOW TABLES LIKE 'products'")
        if cursor.fetchall():
            logger.info("Table 'products' already exists")
            return False
        cursor.execute(PRODUCTS_TABLE_DDL)

    logger.info("Created table 'products'")
    return True
