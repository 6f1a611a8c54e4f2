"""Catalog browsing helpers"""

from typing import Iterable, List

from shopperz.models import Product

ALL_CATEGORIES = "All"

def filter_products(
    products: Iterable[Product],
    category: str = ALL_CATEGORIES,
    search: str = ""
) -> List[Product]:
    """Products in ``category`` (or any, for "All") whose name contains ``search``"""
    needle = search.lower()
    return [
        p for p in products
        if (category == ALL_CATEGORIES or p.category == category)
        and needle in p.name.lower()
    ]

def wishlisted_products(products: Iterable[Product], wishlist_ids: Iterable[str]) -> List[Product]:
    """Catalog products that are on the wishlist; ids of deleted products are skipped"""
    wanted = set(wishlist_ids)
    return [p for p in products if p.id in wanted]
