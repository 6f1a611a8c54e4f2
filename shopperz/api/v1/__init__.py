"""API v1 routes aggregation"""

from fastapi import APIRouter

from .products.router import router as products_router
from .categories.router import router as categories_router
from .cart.router import router as cart_router
from .wishlist.router import router as wishlist_router
from .orders.router import router as orders_router
from .checkout.router import router as checkout_router
from .assistant.router import router as assistant_router
from .views.router import router as views_router
from .admin.router import router as admin_router

# Create v1 router
api_router = APIRouter()

# Include all routers
api_router.include_router(products_router, prefix="/products", tags=["Products"])
api_router.include_router(categories_router, prefix="/categories", tags=["Categories"])
api_router.include_router(cart_router, prefix="/cart", tags=["Cart"])
api_router.include_router(wishlist_router, prefix="/wishlist", tags=["Wishlist"])
api_router.include_router(orders_router, prefix="/orders", tags=["Orders"])
api_router.include_router(checkout_router, prefix="/checkout", tags=["Checkout"])
api_router.include_router(assistant_router, prefix="/assistant", tags=["Assistant"])
api_router.include_router(views_router, prefix="/views", tags=["Views"])
api_router.include_router(admin_router, prefix="/admin", tags=["Admin"])

# Export router
router = api_router
