"""
Order API routes
"""

from fastapi import APIRouter, Depends
from typing import List
import logging

from shopperz.api.dependencies import get_context, get_order_or_404
from shopperz.core.exceptions import OrderNotCancellableException
from shopperz.models import Order, OrderStatus
from shopperz.services.context import AppContext
from shopperz.services.tracking import TimelineEvent, build_tracking_timeline

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get(
    "/",
    response_model=List[Order],
    summary="List orders",
    description="All placed orders, most recent first"
)
async def list_orders(context: AppContext = Depends(get_context)):
    return context.store.get_orders()

@router.get("/{order_id}", response_model=Order, summary="Get order details")
async def get_order(order: Order = Depends(get_order_or_404)):
    return order

@router.get(
    "/{order_id}/tracking",
    response_model=List[TimelineEvent],
    summary="Track order",
    description="Delivery timeline derived from the order's status history"
)
async def track_order(order: Order = Depends(get_order_or_404)):
    return build_tracking_timeline(order)

@router.post(
    "/{order_id}/cancel",
    response_model=Order,
    summary="Cancel order",
    description="Customers may cancel an order while it is still processing"
)
async def cancel_order(
    order: Order = Depends(get_order_or_404),
    context: AppContext = Depends(get_context)
):
    if not context.state_machine.is_cancellable(order.status):
        raise OrderNotCancellableException(
            f"Order #{order.id} is {order.status.value} and can no longer be cancelled"
        )
    logger.info(f"Customer cancelled order {order.id}")
    return context.store.update_order_status(order.id, OrderStatus.CANCELLED)
