"""
Use-case: add a product to the catalog.
Depends only on Domain ports and entities; no infrastructure imports.
"""

from catalog.application.use_cases._validation import normalize_new_product
from catalog.domain.entities.product import NewProduct, Product
from catalog.domain.ports.product_repository_port import IProductRepository


class CreateProductUseCase:
    def __init__(self, repository: IProductRepository) -> None:
        self._repository = repository

    def execute(self, product: NewProduct) -> Product:
        """Insert *product* and return it with its new id.

        Raises:
            ValueError: if name is blank or price/stock is missing.
        """
        return self._repository.add_product(normalize_new_product(product))
