"""Checkout schemas for API request/response validation."""

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from app.models.cart import PRICE_ALIASES, coerce_id


class CheckoutItem(BaseModel):
    """Schema for one cart line sent to checkout."""
    id: Optional[str] = None
    name: Optional[str] = None
    unit_price: float = Field(ge=0, validation_alias=PRICE_ALIASES, serialization_alias="price")
    image: Optional[str] = None
    quantity: Optional[int] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value):
        return coerce_id(value)


class CheckoutRequest(BaseModel):
    """Schema for creating a checkout session from a cart snapshot."""
    items: List[CheckoutItem]

    class Config:
        json_schema_extra = {
            "example": {
                "items": [
                    {
                        "id": "p1",
                        "name": "Widget",
                        "price": 9.99,
                        "image": "images/widget.png",
                        "quantity": 2
                    }
                ]
            }
        }


class CheckoutSessionResponse(BaseModel):
    """Schema for a created checkout session."""
    url: str


class CheckoutErrorResponse(BaseModel):
    """Schema for a failed checkout session request."""
    error: str
    details: Optional[str] = None


class WebhookResponse(BaseModel):
    """Schema for webhook acknowledgement."""
    received: bool = True
