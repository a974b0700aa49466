"""
Domain exceptions.
Malformed historical data is deliberately absent here: it is reported through
ParseOutcome / None return values, never raised.
"""


class ProductNotFoundError(LookupError):
    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product {product_id} not found.")
        self.product_id = product_id


class StorageError(RuntimeError):
    """Raised by repository adapters when the backing store fails."""
