"""Shared fixtures and test doubles for the catalog test suite."""

from __future__ import annotations

from typing import Optional

import pytest

from catalog.domain.entities.product import NewProduct, Product
from catalog.domain.ports.product_repository_port import IProductRepository
from catalog.infrastructure.historical_data.lxml_interpreter import LxmlHistoricalDataInterpreter

PRICE_HISTORY_XML = (
    '<history>'
    '<price_change date="2024-01-01" price="10"/>'
    '<price_change date="2024-03-05" price="12"/>'
    '</history>'
)
OUT_OF_ORDER_HISTORY_XML = (
    '<history>'
    '<price_change date="2024-05-01" price="9"/>'
    '<price_change date="2024-01-01" price="12"/>'
    '</history>'
)
UNBALANCED_HISTORY_XML = '<history><price_change date="2024-01-01" price="10"></history>'


class InMemoryProductRepository(IProductRepository):
    """Dict-backed IProductRepository with auto-incrementing ids."""

    def __init__(self) -> None:
        self._rows: dict[int, Product] = {}
        self._next_id = 1

    def list_products(self) -> list[Product]:
        return [self._rows[key] for key in sorted(self._rows)]

    def get_product(self, product_id: int) -> Optional[Product]:
        return self._rows.get(product_id)

    def add_product(self, product: NewProduct) -> Product:
        stored = Product(
            id=self._next_id,
            name=product.name,
            price=product.price,
            stock=product.stock,
            historical_data=product.historical_data,
        )
        self._rows[stored.id] = stored
        self._next_id += 1
        return stored

    def update_product(self, product_id: int, product: NewProduct) -> bool:
        if product_id not in self._rows:
            return False
        self._rows[product_id] = Product(
            id=product_id,
            name=product.name,
            price=product.price,
            stock=product.stock,
            historical_data=product.historical_data,
        )
        return True

    def delete_product(self, product_id: int) -> bool:
        return self._rows.pop(product_id, None) is not None


@pytest.fixture()
def repository() -> InMemoryProductRepository:
    return InMemoryProductRepository()


@pytest.fixture()
def interpreter() -> LxmlHistoricalDataInterpreter:
    return LxmlHistoricalDataInterpreter()
