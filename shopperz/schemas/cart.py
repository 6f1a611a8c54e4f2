"""
Cart schemas for request/response validation
"""

from pydantic import field_validator
from typing import List

from shopperz.models import CartItem
from .base import BaseSchema

class CartItemAdd(BaseSchema):
    """Schema for adding a product to the cart"""
    product_id: str

class CartQuantityUpdate(BaseSchema):
    """Relative quantity change; the result never drops below 1"""
    delta: int

    @field_validator('delta')
    @classmethod
    def non_zero(cls, v: int) -> int:
        if v == 0:
            raise ValueError('delta must not be zero')
        return v

class CartResponse(BaseSchema):
    """Schema for complete cart response"""
    items: List[CartItem]
    total_items: int
    total: float
