"""Order model with status history"""

from datetime import datetime
from pydantic import Field
from typing import Optional, Tuple
import enum

from .base import EntityModel
from .cart import CartItem

class OrderStatus(str, enum.Enum):
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    OUT_FOR_DELIVERY = "Out for Delivery"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

# Only ever appears in status history, never as Order.status
PLACED_STATUS = "Placed"

class OrderStatusHistory(EntityModel):
    """Track order status changes"""

    status: str
    date: datetime
    note: Optional[str] = None

class Order(EntityModel):
    """
    A placed order. Items and total are frozen at placement; history only
    grows, by building a new tuple.
    """

    id: str
    customer_name: str
    email: str
    address: str
    city: str
    items: Tuple[CartItem, ...]
    total: float
    date: datetime
    status: OrderStatus = OrderStatus.PROCESSING
    tracking_id: Optional[str] = None
    tracking_url: Optional[str] = None
    status_history: Tuple[OrderStatusHistory, ...] = Field((), validate_default=True)

    @property
    def latest_history_entry(self) -> Optional[OrderStatusHistory]:
        return self.status_history[-1] if self.status_history else None

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)
