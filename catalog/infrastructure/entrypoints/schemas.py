"""
HTTP request/response models for the FastAPI entrypoint.
Conversion between these pydantic models and the domain dataclasses happens
here so that neither the domain nor the application layer imports pydantic.
"""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from catalog.domain.entities.product import NewProduct, Product, ProductDetails


class ProductRequest(BaseModel):
    # Presence checks are left to the use-cases so a missing field is a 400,
    # not a 422.
    name: Optional[str] = None
    price: Optional[float] = None
    stock: Optional[int] = None
    historical_data: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("historical_data", "historicalData"),
    )

    @field_validator("name", "historical_data")
    @classmethod
    def must_be_utf8_encodable(cls, value: Optional[str]) -> Optional[str]:
        # Lone surrogates can be neither stored nor echoed back as JSON.
        if value is not None:
            try:
                value.encode("utf-8")
            except UnicodeEncodeError as exc:
                raise ValueError("text must be valid UTF-8") from exc
        return value

    def to_domain(self) -> NewProduct:
        return NewProduct(
            name=self.name or "",
            price=self.price,
            stock=self.stock,
            historical_data=self.historical_data,
        )


class ProductResponse(BaseModel):
    id: int
    name: str
    price: float
    stock: int
    historical_data: Optional[str] = None

    @classmethod
    def from_domain(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            name=product.name,
            price=float(product.price),
            stock=product.stock,
            historical_data=product.historical_data,
        )


class ProductDetailResponse(ProductResponse):
    """Single-item fetch: the stored row plus the two derived fields.

    historical_data_parsed is {} when there is no data, and
    {"raw": ..., "error": ...} when the stored XML is malformed.
    latest_price_change_date is null whenever no date could be extracted.
    """

    historical_data_parsed: dict[str, Any]
    latest_price_change_date: Optional[str] = None

    @classmethod
    def from_details(cls, details: ProductDetails) -> "ProductDetailResponse":
        base = ProductResponse.from_domain(details.product)
        return cls(
            **base.model_dump(),
            historical_data_parsed=details.historical_data_parsed.to_primitive(),
            latest_price_change_date=details.latest_price_change_date,
        )


class MessageResponse(BaseModel):
    message: str
