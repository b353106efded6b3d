"""
Binds cart view controls to cart store operations.

The controller subscribes to the store once and re-renders after every
mutation; controls are dispatched through a single entry point.
"""

import time
import logging
from typing import Any, Callable, List, Optional, Union

from app.cart.renderer import CartAction, CartView, render_cart
from app.cart.store import CartStore
from app.models.cart import LineItem

logger = logging.getLogger(__name__)

RenderListener = Callable[[CartView], None]


class ItemAddedNotification:
    """Transient "item added" notice, visible for `duration` seconds after show()."""

    def __init__(self, duration: float = 2.0, clock: Callable[[], float] = time.monotonic):
        self.duration = duration
        self._clock = clock
        self._shown_at: Optional[float] = None
        self.last_item: Optional[LineItem] = None

    def show(self, item: Optional[LineItem] = None) -> None:
        self._shown_at = self._clock()
        self.last_item = item

    def is_visible(self, now: Optional[float] = None) -> bool:
        if self._shown_at is None:
            return False
        now = self._clock() if now is None else now
        return now - self._shown_at < self.duration


class CartController:
    """Owns the rendered cart view for a store."""

    def __init__(
        self,
        store: CartStore,
        currency_symbol: Optional[str] = None,
        notification: Optional[ItemAddedNotification] = None
    ):
        self.store = store
        self.currency_symbol = currency_symbol
        self.notification = notification or ItemAddedNotification()
        self._render_listeners: List[RenderListener] = []

        store.subscribe(self._on_store_change)
        store.on_item_added(self.notification.show)
        self.view = self.render()

    def _on_store_change(self, store: CartStore) -> None:
        self.view = self.render()
        for listener in list(self._render_listeners):
            listener(self.view)

    def render(self) -> CartView:
        return render_cart(self.store.items, self.store.total(), self.currency_symbol)

    def on_render(self, listener: RenderListener) -> None:
        """Call `listener(view)` every time the cart is redrawn."""
        self._render_listeners.append(listener)

    def dispatch(self, action: Union[CartAction, str], item_id: Any, value: Any = None) -> None:
        """
        Apply a control interaction to the store.

        Raises:
            ValueError: If the action is not a known cart action
        """
        action = CartAction(action)
        item_id = None if item_id is None else str(item_id)

        if action == CartAction.REMOVE:
            self.store.remove_item(item_id)
            return

        if action == CartAction.SET_QUANTITY:
            self.store.update_quantity(item_id, value)
            return

        current = next((item for item in self.store.items if item.id == item_id), None)
        if current is None:
            logger.debug(f"Ignoring {action.value} for unknown item {item_id}")
            return

        step = 1 if action == CartAction.INCREMENT else -1
        self.store.update_quantity(item_id, current.quantity + step)

    def close(self) -> None:
        """Stop following store changes."""
        self.store.unsubscribe(self._on_store_change)
        self._render_listeners.clear()
