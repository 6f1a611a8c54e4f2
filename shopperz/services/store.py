"""
Store service
Owns the catalog, categories, cart, orders and wishlist, and is the only
place they are mutated. Every mutation notifies subscribed views, which then
re-read whatever state they display.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List, Optional, Union
import json
import logging

from shopperz.core.exceptions import InvalidStatusTransitionException
from shopperz.core.monitoring import store_mutations, storage_errors
from shopperz.core.storage import KeyValueStorage
from shopperz.models import (
    CartItem,
    DEFAULT_CATEGORIES,
    INITIAL_PRODUCTS,
    Order,
    OrderStatus,
    OrderStatusHistory,
    Product,
)
from shopperz.schemas.product import ProductDraft
from shopperz.utils.helpers import generate_product_id
from .notification import NotificationChannel
from .order_state_machine import OrderStateMachine

logger = logging.getLogger(__name__)

DEFAULT_ORDERS_KEY = "shopperz_orders"
DEFAULT_WISHLIST_KEY = "shopperz_wishlist"

STATUS_NOTES = {
    OrderStatus.SHIPPED: "Package has been shipped.",
    OrderStatus.OUT_FOR_DELIVERY: "Your package is out for delivery.",
    OrderStatus.DELIVERED: "Package delivered.",
    OrderStatus.CANCELLED: "Order cancelled by customer.",
}
DEFAULT_STATUS_NOTE = "Status updated."

Listener = Callable[[], None]

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

class Store:
    """
    Reactive in-memory store.

    Orders and wishlist are mirrored to durable storage on every change;
    catalog and cart live only for the process. Reads return shallow copies
    of the underlying lists. Entities are frozen and hold their collections
    as tuples, so nothing returned by a read can alter store state.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        notifications: NotificationChannel,
        products: Optional[Iterable[Product]] = None,
        categories: Optional[Iterable[str]] = None,
        transition_policy: Optional[OrderStateMachine] = None,
        orders_key: str = DEFAULT_ORDERS_KEY,
        wishlist_key: str = DEFAULT_WISHLIST_KEY,
    ):
        self.storage = storage
        self.notifications = notifications
        self.transition_policy = transition_policy
        self.orders_key = orders_key
        self.wishlist_key = wishlist_key

        self._products: List[Product] = list(INITIAL_PRODUCTS if products is None else products)
        self._categories: List[str] = list(
            dict.fromkeys(DEFAULT_CATEGORIES if categories is None else categories)
        )
        self._cart: List[CartItem] = []
        self._listeners: List[Listener] = []

        self._orders: List[Order] = self._load(
            self.orders_key,
            lambda data: [Order.model_validate(item) for item in data]
        )
        self._wishlist: List[str] = self._load(
            self.wishlist_key,
            lambda data: list(dict.fromkeys(str(product_id) for product_id in data))
        )
        logger.info(
            f"Store ready: {len(self._products)} products, "
            f"{len(self._orders)} saved orders, {len(self._wishlist)} wishlist entries"
        )

    # Subscriptions

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self, operation: str) -> None:
        store_mutations.labels(operation=operation).inc()
        logger.debug(f"Store mutation: {operation}")
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception(f"Store listener failed after {operation}")

    # Durable storage

    def _load(self, key: str, parse: Callable[[list], list]) -> list:
        try:
            raw = self.storage.get(key)
            if not raw:
                return []
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            return parse(data)
        except Exception:
            storage_errors.labels(operation="load").inc()
            logger.exception(f"Failed to load '{key}' from storage, starting empty")
            return []

    def _persist(self, key: str, serialize: Callable[[], List[Any]]) -> None:
        try:
            self.storage.set(key, json.dumps(serialize()))
        except Exception:
            storage_errors.labels(operation="save").inc()
            logger.exception(f"Failed to save '{key}' to storage")

    def _save_orders(self) -> None:
        self._persist(self.orders_key, lambda: [order.to_json_dict() for order in self._orders])

    def _save_wishlist(self) -> None:
        self._persist(self.wishlist_key, lambda: list(self._wishlist))

    # Reads

    def get_products(self) -> List[Product]:
        return list(self._products)

    def get_cart(self) -> List[CartItem]:
        return list(self._cart)

    def get_categories(self) -> List[str]:
        return list(self._categories)

    def get_orders(self) -> List[Order]:
        return list(self._orders)

    def get_wishlist(self) -> List[str]:
        return list(self._wishlist)

    def get_product(self, product_id: str) -> Optional[Product]:
        return next((p for p in self._products if p.id == product_id), None)

    def get_order(self, order_id: str) -> Optional[Order]:
        return next((o for o in self._orders if o.id == order_id), None)

    def is_wishlisted(self, product_id: str) -> bool:
        return product_id in self._wishlist

    def get_cart_count(self) -> int:
        return sum(item.quantity for item in self._cart)

    def get_total_price(self) -> float:
        """Sum of effective line prices, computed from the cart as it is now"""
        return sum(item.line_total for item in self._cart)

    # Catalog

    def add_category(self, name: str) -> None:
        if not name or not name.strip() or name in self._categories:
            return
        self._categories = [*self._categories, name]
        self._changed("add_category")

    def add_product(self, data: ProductDraft) -> Product:
        """Create a product with a fresh id and no ratings; newest first"""
        product = Product(
            **data.model_dump(),
            id=generate_product_id({p.id for p in self._products}),
            rating=0,
            reviews=0,
        )
        self._products = [product, *self._products]
        self._changed("add_product")
        return product

    def update_product(self, product: Product) -> None:
        """Replace a product and refresh any cart line for it, keeping its quantity"""
        if self.get_product(product.id) is None:
            return
        self._products = [product if p.id == product.id else p for p in self._products]
        self._cart = [
            CartItem.from_product(product, quantity=item.quantity) if item.id == product.id else item
            for item in self._cart
        ]
        self._changed("update_product")

    def delete_product(self, product_id: str) -> None:
        """Remove a product and its cart line. Placed orders keep their snapshot."""
        if self.get_product(product_id) is None:
            return
        self._products = [p for p in self._products if p.id != product_id]
        self._cart = [item for item in self._cart if item.id != product_id]
        self._changed("delete_product")

    # Cart

    def add_to_cart(self, product: Product) -> None:
        existing = next((item for item in self._cart if item.id == product.id), None)
        if existing:
            self._cart = [
                item.model_copy(update={"quantity": item.quantity + 1}) if item.id == product.id else item
                for item in self._cart
            ]
        else:
            self._cart = [*self._cart, CartItem.from_product(product)]
        self._changed("add_to_cart")
        self.notifications.notify(f"Added {product.name} to cart")

    def remove_from_cart(self, product_id: str) -> None:
        self._cart = [item for item in self._cart if item.id != product_id]
        self._changed("remove_from_cart")

    def update_cart_quantity(self, product_id: str, delta: int) -> None:
        """Adjust a line's quantity, clamped at 1. Use remove_from_cart to drop it."""
        self._cart = [
            item.model_copy(update={"quantity": max(1, item.quantity + delta)}) if item.id == product_id else item
            for item in self._cart
        ]
        self._changed("update_cart_quantity")

    def clear_cart(self) -> None:
        self._cart = []
        self._changed("clear_cart")

    # Orders

    def add_order(self, order: Order) -> None:
        """
        Record a placed order, newest first. The caller builds the order
        with its item snapshot, total and initial status history.
        """
        self._orders = [order, *self._orders]
        self._save_orders()
        self._changed("add_order")

    def update_order_status(
        self,
        order_id: str,
        status: Union[OrderStatus, str]
    ) -> Optional[Order]:
        """
        Move an order to a new status and append a history entry

        Raises:
            InvalidStatusTransitionException: only when a transition policy
                is configured and rejects the change
        """
        status = OrderStatus(status)
        order = self.get_order(order_id)
        if order is None:
            return None

        if self.transition_policy and not self.transition_policy.can_transition(order.status, status):
            raise InvalidStatusTransitionException(order.status.value, status.value)

        entry = OrderStatusHistory(
            status=status.value,
            date=_utcnow(),
            note=STATUS_NOTES.get(status, DEFAULT_STATUS_NOTE),
        )
        updated = order.model_copy(update={
            "status": status,
            "status_history": (*order.status_history, entry),
        })
        self._orders = [updated if o.id == order_id else o for o in self._orders]
        self._save_orders()
        self._changed("update_order_status")
        self.notifications.notify(f"Order #{order_id} is now {status.value}")
        return updated

    def update_order_tracking(
        self,
        order_id: str,
        tracking_id: str,
        tracking_url: Optional[str] = None
    ) -> Optional[Order]:
        order = self.get_order(order_id)
        if order is None:
            return None

        updated = order.model_copy(update={
            "tracking_id": tracking_id,
            "tracking_url": tracking_url or None,
        })
        self._orders = [updated if o.id == order_id else o for o in self._orders]
        self._save_orders()
        self._changed("update_order_tracking")
        self.notifications.notify(f"Tracking updated for Order #{order_id}")
        return updated

    # Wishlist

    def toggle_wishlist(self, product_id: str) -> bool:
        """Add or remove a product id; returns whether it is now wishlisted"""
        if product_id in self._wishlist:
            self._wishlist = [pid for pid in self._wishlist if pid != product_id]
            added = False
        else:
            self._wishlist = [*self._wishlist, product_id]
            added = True

        self._save_wishlist()
        self._changed("toggle_wishlist")
        self.notifications.notify("Added to Wishlist" if added else "Removed from Wishlist")
        return added
