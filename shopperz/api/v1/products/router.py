"""
Product catalog API routes
"""

from fastapi import APIRouter, Depends, Query
from typing import List

from shopperz.api.dependencies import get_store, get_product_or_404
from shopperz.models import Product
from shopperz.services.catalog import ALL_CATEGORIES, filter_products
from shopperz.services.store import Store

router = APIRouter()

@router.get(
    "/",
    response_model=List[Product],
    summary="List products",
    description="Browse the catalog, newest first, optionally by category and name search"
)
async def list_products(
    category: str = Query(ALL_CATEGORIES),
    search: str = Query(""),
    store: Store = Depends(get_store)
):
    return filter_products(store.get_products(), category=category, search=search)

@router.get(
    "/{product_id}",
    response_model=Product,
    summary="Get product"
)
async def get_product(product: Product = Depends(get_product_or_404)):
    return product
