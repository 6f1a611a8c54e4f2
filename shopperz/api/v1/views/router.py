"""
View state routes
A view re-reads its slice of store state here after a change notification
"""

from fastapi import APIRouter, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials
from typing import Any, Dict, Optional

from shopperz.api.dependencies import get_store
from shopperz.core.security import require_admin, security
from shopperz.models import ViewMode
from shopperz.services.catalog import wishlisted_products
from shopperz.services.store import Store

router = APIRouter()

def build_view_state(store: Store, view_mode: ViewMode) -> Dict[str, Any]:
    """State a view needs to render, plus the cart badge count every view shows"""
    state: Dict[str, Any] = {"view": view_mode.value, "cartCount": store.get_cart_count()}

    if view_mode == ViewMode.SHOP:
        state.update(
            products=store.get_products(),
            categories=store.get_categories(),
            wishlist=store.get_wishlist()
        )
    elif view_mode == ViewMode.CART:
        state.update(items=store.get_cart(), total=store.get_total_price())
    elif view_mode == ViewMode.ORDERS:
        state.update(orders=store.get_orders())
    elif view_mode == ViewMode.WISHLIST:
        wishlist = store.get_wishlist()
        state.update(
            wishlist=wishlist,
            products=wishlisted_products(store.get_products(), wishlist)
        )
    elif view_mode == ViewMode.ADMIN:
        state.update(
            products=store.get_products(),
            categories=store.get_categories(),
            orders=store.get_orders()
        )
    return state

@router.get("/{view_mode}", summary="Get view state")
async def get_view_state(
    view_mode: ViewMode,
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    store: Store = Depends(get_store)
):
    if view_mode == ViewMode.ADMIN:
        await require_admin(request, credentials)
    return build_view_state(store, view_mode)
