"""
Order tracking timeline
Derives the customer-facing delivery stages from an order's status history
"""

from datetime import datetime, timedelta
from typing import List, Optional
from pydantic import BaseModel

from shopperz.models import Order, OrderStatus, OrderStatusHistory, PLACED_STATUS

class TimelineEvent(BaseModel):
    status: str
    date: Optional[datetime] = None  # None while the stage is pending
    description: str
    completed: bool

# Stage label, history status, default description, offset used for legacy orders
STAGES = [
    ("Order Placed", PLACED_STATUS, "Order placed successfully.", timedelta(0)),
    ("Processing", OrderStatus.PROCESSING.value, "Seller is preparing your order.", timedelta(hours=1)),
    ("Shipped", OrderStatus.SHIPPED.value, "Package has left the facility.", timedelta(days=1)),
    ("Out for Delivery", OrderStatus.OUT_FOR_DELIVERY.value, "Courier is out for delivery.", timedelta(days=2)),
    ("Delivered", OrderStatus.DELIVERED.value, "Package delivered to your doorstep.", timedelta(days=3)),
]

# Orders without history: which statuses count as having reached each stage
REACHED_BY = {
    OrderStatus.PROCESSING.value: {OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.OUT_FOR_DELIVERY, OrderStatus.DELIVERED},
    OrderStatus.SHIPPED.value: {OrderStatus.SHIPPED, OrderStatus.OUT_FOR_DELIVERY, OrderStatus.DELIVERED},
    OrderStatus.OUT_FOR_DELIVERY.value: {OrderStatus.OUT_FOR_DELIVERY, OrderStatus.DELIVERED},
    OrderStatus.DELIVERED.value: {OrderStatus.DELIVERED},
}

def _latest(history: List[OrderStatusHistory], status: str) -> Optional[OrderStatusHistory]:
    return next((entry for entry in reversed(history) if entry.status == status), None)

def build_tracking_timeline(order: Order, now: Optional[datetime] = None) -> List[TimelineEvent]:
    """
    Timeline for an order, most advanced stage first.

    A cancelled order collapses to a single Cancelled event. Orders saved
    without history get stage dates estimated from the order date.
    """
    history = order.status_history

    if order.status == OrderStatus.CANCELLED:
        cancelled = _latest(history, OrderStatus.CANCELLED.value)
        return [TimelineEvent(
            status=OrderStatus.CANCELLED.value,
            date=cancelled.date if cancelled else (now or datetime.now(order.date.tzinfo)),
            description=(cancelled.note if cancelled and cancelled.note else "Order has been cancelled."),
            completed=True,
        )]

    events = []
    if history:
        for label, status, default_description, _ in STAGES:
            entry = _latest(history, status)
            if status == PLACED_STATUS:
                events.append(TimelineEvent(
                    status=label,
                    date=entry.date if entry else order.date,
                    description=(entry.note if entry and entry.note else default_description),
                    completed=True,
                ))
                continue
            events.append(TimelineEvent(
                status=label,
                date=entry.date if entry else None,
                description=(entry.note if entry and entry.note else default_description),
                completed=entry is not None,
            ))
    else:
        for label, status, default_description, offset in STAGES:
            reached = status == PLACED_STATUS or order.status in REACHED_BY[status]
            events.append(TimelineEvent(
                status=label,
                date=order.date + offset if reached else None,
                description="Your order has been placed successfully." if status == PLACED_STATUS else default_description,
                completed=reached,
            ))

    events.reverse()
    return events
