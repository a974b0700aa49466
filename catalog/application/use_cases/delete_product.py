"""
Use-case: remove a product from the catalog.
Depends only on Domain ports and entities; no infrastructure imports.
"""

from catalog.domain.exceptions import ProductNotFoundError
from catalog.domain.ports.product_repository_port import IProductRepository


class DeleteProductUseCase:
    def __init__(self, repository: IProductRepository) -> None:
        self._repository = repository

    def execute(self, product_id: int) -> None:
        if not self._repository.delete_product(product_id):
            raise ProductNotFoundError(product_id)
