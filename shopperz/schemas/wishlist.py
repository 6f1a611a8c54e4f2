"""Wishlist schemas"""

from typing import List

from shopperz.models import Product
from .base import BaseSchema

class WishlistResponse(BaseSchema):
    product_ids: List[str]
    products: List[Product]

class WishlistToggleResponse(BaseSchema):
    product_id: str
    wishlisted: bool
