"""Write-payload checks shared by the create and update use-cases."""

from catalog.domain.entities.product import NewProduct


def normalize_new_product(product: NewProduct) -> NewProduct:
    """Validate *product* and return a copy ready for storage.

    Historical data is stored verbatim, except that an empty string becomes None.

    Raises:
        ValueError: if name is blank or price/stock is missing.
    """
    if not product.name or not product.name.strip() or product.price is None or product.stock is None:
        raise ValueError("name, price and stock are required fields.")
    return NewProduct(
        name=product.name,
        price=product.price,
        stock=product.stock,
        historical_data=product.historical_data or None,
    )
