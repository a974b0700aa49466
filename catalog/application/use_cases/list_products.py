"""
Use-case: list every product in the catalog.
Depends only on Domain ports and entities; no infrastructure imports.
"""

from catalog.domain.entities.product import Product
from catalog.domain.ports.product_repository_port import IProductRepository


class ListProductsUseCase:
    def __init__(self, repository: IProductRepository) -> None:
        self._repository = repository

    def execute(self) -> list[Product]:
        return self._repository.list_products()
