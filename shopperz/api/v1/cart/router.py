"""
Cart API routes
"""

from fastapi import APIRouter, Depends, status

from shopperz.api.dependencies import get_store
from shopperz.core.exceptions import NotFoundException
from shopperz.schemas.cart import CartItemAdd, CartQuantityUpdate, CartResponse
from shopperz.services.store import Store

router = APIRouter()

def _cart_response(store: Store) -> CartResponse:
    return CartResponse(
        items=store.get_cart(),
        total_items=store.get_cart_count(),
        total=store.get_total_price()
    )

def _ensure_in_cart(store: Store, product_id: str) -> None:
    if not any(item.id == product_id for item in store.get_cart()):
        raise NotFoundException("Cart item not found")

@router.get("/", response_model=CartResponse, summary="Get cart")
async def get_cart(store: Store = Depends(get_store)):
    return _cart_response(store)

@router.post(
    "/items",
    response_model=CartResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add to cart",
    description="Add one unit of a product; repeated adds increase the quantity"
)
async def add_to_cart(
    payload: CartItemAdd,
    store: Store = Depends(get_store)
):
    product = store.get_product(payload.product_id)
    if product is None:
        raise NotFoundException("Product not found")
    store.add_to_cart(product)
    return _cart_response(store)

@router.patch(
    "/items/{product_id}",
    response_model=CartResponse,
    summary="Change quantity",
    description="Adjust quantity by a delta; never drops below 1"
)
async def update_cart_quantity(
    product_id: str,
    payload: CartQuantityUpdate,
    store: Store = Depends(get_store)
):
    _ensure_in_cart(store, product_id)
    store.update_cart_quantity(product_id, payload.delta)
    return _cart_response(store)

@router.delete("/items/{product_id}", response_model=CartResponse, summary="Remove from cart")
async def remove_from_cart(
    product_id: str,
    store: Store = Depends(get_store)
):
    _ensure_in_cart(store, product_id)
    store.remove_from_cart(product_id)
    return _cart_response(store)

@router.delete("/", response_model=CartResponse, summary="Clear cart")
async def clear_cart(store: Store = Depends(get_store)):
    store.clear_cart()
    return _cart_response(store)
