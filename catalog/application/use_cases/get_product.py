"""
Use-case: fetch a single product together with its interpreted historical data.
Depends only on Domain ports and entities; no infrastructure imports.

The stored historical text is handed to the interpreter twice, once for the
structural parse and once for the latest price-change date. Neither call can
fail the request: malformed data comes back as a ParseFailure and a None date.
"""

from catalog.domain.entities.product import ProductDetails
from catalog.domain.exceptions import ProductNotFoundError
from catalog.domain.ports.historical_data_port import IHistoricalDataInterpreter
from catalog.domain.ports.product_repository_port import IProductRepository


class GetProductUseCase:
    def __init__(
        self,
        repository: IProductRepository,
        interpreter: IHistoricalDataInterpreter,
    ) -> None:
        self._repository = repository
        self._interpreter = interpreter

    def execute(self, product_id: int) -> ProductDetails:
        """Fetch *product_id* and interpret its historical data.

        Raises:
            ProductNotFoundError: if no product has this id.
            StorageError: propagated from the repository on backend failure.
        """
        product = self._repository.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        return ProductDetails(
            product=product,
            historical_data_parsed=self._interpreter.parse_structure(product.historical_data),
            latest_price_change_date=self._interpreter.extract_latest_change_date(
                product.historical_data
            ),
        )
