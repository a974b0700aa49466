"""
Port (interface) for product storage.
Infrastructure adapters (e.g. MySQLProductRepository) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from catalog.domain.entities.product import NewProduct, Product


class IProductRepository(ABC):
    @abstractmethod
    def list_products(self) -> list[Product]:
        """Return every stored product ordered by id."""
        ...

    @abstractmethod
    def get_product(self, product_id: int) -> Optional[Product]:
        """Return the product with *product_id*, or None if it does not exist."""
        ...

    @abstractmethod
    def add_product(self, product: NewProduct) -> Product:
        """Insert *product* and return it with the id assigned by the store."""
        ...

    @abstractmethod
    def update_product(self, product_id: int, product: NewProduct) -> bool:
        """Overwrite the row for *product_id*. Returns False if no row matched."""
        ...

    @abstractmethod
    def delete_product(self, product_id: int) -> bool:
        """Delete the row for *product_id*. Returns False if no row matched."""
        ...
