"""
Cart view projection.

`render_cart` turns cart state into a plain view description. It has no side
effects; the controller in `app.cart.bindings` maps view controls back to store
operations.
"""

from enum import Enum
from typing import List, Optional, Sequence
from pydantic import BaseModel, Field

from app.config.checkout_config import CHECKOUT_CONFIG
from app.models.cart import LineItem
from app.utils.helpers import format_price

EMPTY_CART_MESSAGE = "Your cart is empty"


class CartAction(str, Enum):
    """Interactions offered by a rendered cart row."""
    INCREMENT = "increment"
    DECREMENT = "decrement"
    SET_QUANTITY = "set_quantity"
    REMOVE = "remove"


class CartControl(BaseModel):
    """A control bound to one cart line."""
    action: CartAction
    item_id: Optional[str] = None
    label: str


class CartRowView(BaseModel):
    """Rendered cart line."""
    item_id: Optional[str] = None
    name: Optional[str] = None
    image: Optional[str] = None
    price_label: str
    quantity: int
    controls: List[CartControl] = Field(default_factory=list)


class CartView(BaseModel):
    """Complete rendered cart."""
    badge_count: int
    rows: List[CartRowView] = Field(default_factory=list)
    total_label: str
    is_empty: bool
    empty_message: Optional[str] = None


def _row_controls(item_id: Optional[str]) -> List[CartControl]:
    return [
        CartControl(action=CartAction.DECREMENT, item_id=item_id, label="-"),
        CartControl(action=CartAction.SET_QUANTITY, item_id=item_id, label="quantity"),
        CartControl(action=CartAction.INCREMENT, item_id=item_id, label="+"),
        CartControl(action=CartAction.REMOVE, item_id=item_id, label="×"),
    ]


def render_cart(
    items: Sequence[LineItem],
    total: float,
    currency_symbol: Optional[str] = None
) -> CartView:
    """
    Project cart state into a view.

    Args:
        items: Current cart line items
        total: Derived cart total
        currency_symbol: Symbol used in price labels (defaults to the checkout currency symbol)

    Returns:
        CartView describing badge, rows, total and empty state
    """
    symbol = currency_symbol if currency_symbol is not None else CHECKOUT_CONFIG["currency_symbol"]
    is_empty = len(items) == 0

    rows = [
        CartRowView(
            item_id=item.id,
            name=item.name,
            image=item.image,
            price_label=format_price(item.unit_price, symbol),
            quantity=item.quantity,
            controls=_row_controls(item.id)
        )
        for item in items
    ]

    return CartView(
        badge_count=sum(item.quantity for item in items),
        rows=rows,
        total_label=format_price(total, symbol),
        is_empty=is_empty,
        empty_message=EMPTY_CART_MESSAGE if is_empty else None
    )
