"""
Domain entities for catalog products.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

from catalog.domain.entities.historical_data import ParseOutcome

Price = Union[Decimal, float, int]


@dataclass(frozen=True)
class NewProduct:
    name: str
    price: Optional[Price]
    stock: Optional[int]
    historical_data: Optional[str] = None


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    price: Price
    stock: int
    historical_data: Optional[str] = None


@dataclass(frozen=True)
class ProductDetails:
    """A single product enriched with its interpreted historical data."""

    product: Product
    historical_data_parsed: ParseOutcome
    latest_price_change_date: Optional[str]
