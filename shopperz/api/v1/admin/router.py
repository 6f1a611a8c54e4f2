"""
Admin console routes
Inventory, categories and order fulfilment
"""

from fastapi import APIRouter, Depends, Query, status, Response
from typing import List, Optional
import logging

from shopperz.api.dependencies import (
    get_assistant,
    get_context,
    get_order_or_404,
    get_product_or_404,
    get_store,
)
from shopperz.core.exceptions import UnauthorizedException, ValidationException
from shopperz.core.security import require_admin
from shopperz.models import Order, OrderStatus, Product
from shopperz.schemas.admin import AdminLoginRequest, CategoryCreate, TokenResponse
from shopperz.schemas.order import OrderStatusUpdate, TrackingDraft
from shopperz.schemas.product import DescriptionRequest, DescriptionResponse, ProductDraft
from shopperz.services.assistant import ShoppingAssistant
from shopperz.services.context import AppContext
from shopperz.services.store import Store

logger = logging.getLogger(__name__)

router = APIRouter()
protected = APIRouter(dependencies=[Depends(require_admin)])

def _ensure_category(store: Store, category: str) -> None:
    if category not in store.get_categories():
        raise ValidationException(f"Unknown category: {category}", error_code="UNKNOWN_CATEGORY")

@router.post("/login", response_model=TokenResponse, summary="Admin login")
async def login(
    payload: AdminLoginRequest,
    context: AppContext = Depends(get_context)
):
    if not context.credential_verifier.verify(payload.username, payload.password):
        logger.warning("Failed admin login attempt")
        raise UnauthorizedException("Invalid username or password", error_code="INVALID_CREDENTIALS")

    token = context.tokens.create_access_token({
        "sub": payload.username.strip().lower(),
        "role": "admin"
    })
    return TokenResponse(access_token=token)

# Inventory

@protected.post("/categories", response_model=List[str], summary="Add category")
async def add_category(
    payload: CategoryCreate,
    store: Store = Depends(get_store)
):
    store.add_category(payload.name.strip())
    return store.get_categories()

@protected.post(
    "/products",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    summary="Create product"
)
async def create_product(
    draft: ProductDraft,
    store: Store = Depends(get_store)
):
    _ensure_category(store, draft.category)
    product = store.add_product(draft)
    logger.info(f"Admin created product {product.id}")
    return product

@protected.put("/products/{product_id}", response_model=Product, summary="Update product")
async def update_product(
    draft: ProductDraft,
    product: Product = Depends(get_product_or_404),
    store: Store = Depends(get_store)
):
    _ensure_category(store, draft.category)
    fields = draft.model_dump()
    # Keep the current image unless a new one was sent
    if "image" not in draft.model_fields_set:
        fields.pop("image")
    store.update_product(product.model_copy(update=fields))
    return store.get_product(product.id)

@protected.delete(
    "/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete product"
)
async def delete_product(
    product: Product = Depends(get_product_or_404),
    store: Store = Depends(get_store)
):
    store.delete_product(product.id)
    logger.info(f"Admin deleted product {product.id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@protected.post(
    "/products/generate-description",
    response_model=DescriptionResponse,
    summary="Generate product description",
    description="Draft marketing copy from a product name and key features"
)
async def generate_description(
    payload: DescriptionRequest,
    assistant: ShoppingAssistant = Depends(get_assistant)
):
    text = await assistant.generate_description(
        payload.name, payload.category, payload.features
    )
    return DescriptionResponse(description=text)

# Orders

@protected.get("/orders", response_model=List[Order], summary="List orders")
async def list_orders(
    status_filter: Optional[OrderStatus] = Query(None, alias="status"),
    store: Store = Depends(get_store)
):
    orders = store.get_orders()
    if status_filter is not None:
        orders = [order for order in orders if order.status == status_filter]
    return orders

@protected.get(
    "/orders/{order_id}/transitions",
    response_model=List[OrderStatus],
    summary="Allowed next statuses"
)
async def get_order_transitions(
    order: Order = Depends(get_order_or_404),
    context: AppContext = Depends(get_context)
):
    return context.state_machine.get_valid_transitions(order.status)

@protected.patch("/orders/{order_id}/status", response_model=Order, summary="Update order status")
async def update_order_status(
    payload: OrderStatusUpdate,
    order: Order = Depends(get_order_or_404),
    store: Store = Depends(get_store)
):
    return store.update_order_status(order.id, payload.status)

@protected.put("/orders/{order_id}/tracking", response_model=Order, summary="Update tracking")
async def update_order_tracking(
    payload: TrackingDraft,
    order: Order = Depends(get_order_or_404),
    store: Store = Depends(get_store)
):
    return store.update_order_tracking(order.id, payload.tracking_id.strip(), payload.tracking_url)

router.include_router(protected)
