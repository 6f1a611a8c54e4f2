"""
Wishlist API routes
"""

from fastapi import APIRouter, Depends

from shopperz.api.dependencies import get_store, get_product_or_404
from shopperz.models import Product
from shopperz.schemas.wishlist import WishlistResponse, WishlistToggleResponse
from shopperz.services.catalog import wishlisted_products
from shopperz.services.store import Store

router = APIRouter()

@router.get("/", response_model=WishlistResponse, summary="Get wishlist")
async def get_wishlist(store: Store = Depends(get_store)):
    wishlist = store.get_wishlist()
    return WishlistResponse(
        product_ids=wishlist,
        products=wishlisted_products(store.get_products(), wishlist)
    )

@router.post(
    "/{product_id}/toggle",
    response_model=WishlistToggleResponse,
    summary="Toggle wishlist",
    description="Add the product to the wishlist, or remove it if already there"
)
async def toggle_wishlist(
    product: Product = Depends(get_product_or_404),
    store: Store = Depends(get_store)
):
    wishlisted = store.toggle_wishlist(product.id)
    return WishlistToggleResponse(product_id=product.id, wishlisted=wishlisted)
