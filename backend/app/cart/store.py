"""
Shopping cart store.

Holds the cart line items, mirrors them to durable storage after every
mutation and derives the total on demand.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from app.cart.storage import CART_STORAGE_KEY, CartStorage
from app.models.cart import LineItem, Product
from app.utils.helpers import coerce_quantity

logger = logging.getLogger(__name__)

_line_items = TypeAdapter(List[LineItem])

ChangeListener = Callable[["CartStore"], None]
ItemAddedListener = Callable[[LineItem], None]


class CartStore:
    """Cart state with persistence and change notification."""

    def __init__(self, storage: CartStorage, storage_key: str = CART_STORAGE_KEY):
        self.storage = storage
        self.storage_key = storage_key
        self._items: List[LineItem] = self._load()
        self._listeners: List[ChangeListener] = []
        self._item_added_listeners: List[ItemAddedListener] = []

    def _load(self) -> List[LineItem]:
        """Rehydrate the cart. Anything unreadable yields an empty cart."""
        try:
            raw = self.storage.get_item(self.storage_key)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read stored cart: {e}")
            return []

        if raw is None:
            return []

        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Stored cart is not valid JSON, starting with an empty cart")
            return []

        if not isinstance(data, list):
            logger.warning("Stored cart is not a list, starting with an empty cart")
            return []

        try:
            return _line_items.validate_python(data)
        except ValidationError as e:
            logger.warning(f"Stored cart has invalid items, starting with an empty cart: {e.error_count()} errors")
            return []

    def _save(self) -> None:
        payload = [item.model_dump(by_alias=True) for item in self._items]
        self.storage.set_item(self.storage_key, json.dumps(payload))

    def _commit(self) -> None:
        self._save()
        for listener in list(self._listeners):
            listener(self)

    def _find(self, item_id: Any) -> Optional[LineItem]:
        item_id = None if item_id is None else str(item_id)
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    # Subscriptions

    def subscribe(self, listener: ChangeListener) -> None:
        """Call `listener(store)` after every mutation."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def on_item_added(self, listener: ItemAddedListener) -> None:
        """Call `listener(item)` whenever add_item runs."""
        if listener not in self._item_added_listeners:
            self._item_added_listeners.append(listener)

    # Mutations

    def add_item(self, product: Union[Product, Dict[str, Any]]) -> LineItem:
        """Add one unit of a product, merging with an existing line of the same id."""
        if not isinstance(product, Product):
            product = Product.model_validate(product)

        item = self._find(product.id)
        if item:
            item.quantity += 1
        else:
            item = LineItem(
                id=product.id,
                name=product.name,
                unit_price=product.unit_price,
                image=product.image,
                quantity=1
            )
            self._items.append(item)

        self._commit()
        for listener in list(self._item_added_listeners):
            listener(item)
        return item

    def remove_item(self, item_id: Any) -> None:
        item_id = None if item_id is None else str(item_id)
        self._items = [item for item in self._items if item.id != item_id]
        self._commit()

    def update_quantity(self, item_id: Any, quantity: Any) -> None:
        """
        Set the quantity of an item.

        Non-positive quantities remove the item. Unknown ids and non-numeric
        input leave the cart unchanged.
        """
        item = self._find(item_id)
        if item:
            new_quantity = coerce_quantity(quantity)
            if new_quantity is None:
                logger.debug(f"Ignoring non-numeric quantity {quantity!r} for {item.id}")
            elif new_quantity <= 0:
                self._items = [i for i in self._items if i is not item]
            else:
                item.quantity = new_quantity
        self._commit()

    def clear(self) -> None:
        self._items = []
        self._commit()

    # Derived state

    @property
    def items(self) -> List[LineItem]:
        """Copy of the current line items."""
        return [item.model_copy() for item in self._items]

    def total(self) -> float:
        return sum(item.unit_price * item.quantity for item in self._items)

    def item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    def is_empty(self) -> bool:
        return len(self._items) == 0

    def snapshot(self) -> Dict[str, Any]:
        """Checkout request body for the current cart."""
        return {"items": [item.model_dump(by_alias=True) for item in self._items]}
