"""
Use-case: overwrite an existing product.
Depends only on Domain ports and entities; no infrastructure imports.
"""

from catalog.application.use_cases._validation import normalize_new_product
from catalog.domain.entities.product import NewProduct
from catalog.domain.exceptions import ProductNotFoundError
from catalog.domain.ports.product_repository_port import IProductRepository


class UpdateProductUseCase:
    def __init__(self, repository: IProductRepository) -> None:
        self._repository = repository

    def execute(self, product_id: int, product: NewProduct) -> None:
        """Replace every field of *product_id* with *product*.

        Raises:
            ValueError: if name is blank or price/stock is missing.
            ProductNotFoundError: if no product has this id.
        """
        if not self._repository.update_product(product_id, normalize_new_product(product)):
            raise ProductNotFoundError(product_id)
