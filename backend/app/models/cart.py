import math
from typing import Any, Optional
from pydantic import AliasChoices, BaseModel, Field, field_validator


PRICE_ALIASES = AliasChoices("price", "unitPrice", "unit_price")


def coerce_id(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    return str(value)


def coerce_price(value: Any) -> float:
    """Lenient price for products being added: null, non-numeric or negative counts as 0."""
    if isinstance(value, bool):
        return 0.0
    try:
        price = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(price) or math.isinf(price) or price < 0:
        return 0.0
    return price


class Product(BaseModel):
    """Product as offered on the shop page."""
    id: Optional[str] = None
    name: Optional[str] = None
    unit_price: float = Field(default=0.0, ge=0, validation_alias=PRICE_ALIASES, serialization_alias="price")
    image: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value):
        return coerce_id(value)

    @field_validator("unit_price", mode="before")
    @classmethod
    def _lenient_price(cls, value):
        return coerce_price(value)

    @field_validator("name", "image", mode="before")
    @classmethod
    def _text_as_string(cls, value):
        return coerce_id(value)


class LineItem(BaseModel):
    """One product entry in the cart with its quantity."""
    id: Optional[str] = None
    name: Optional[str] = None
    unit_price: float = Field(default=0.0, ge=0, validation_alias=PRICE_ALIASES, serialization_alias="price")
    image: Optional[str] = None
    quantity: int = Field(default=1, ge=1)

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value):
        return coerce_id(value)

    @property
    def subtotal(self) -> float:
        return self.unit_price * self.quantity

    class Config:
        json_schema_extra = {
            "example": {
                "id": "p1",
                "name": "Widget",
                "price": 9.99,
                "image": "images/widget.png",
                "quantity": 2
            }
        }
