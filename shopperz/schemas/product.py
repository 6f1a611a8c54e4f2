"""
Product draft schemas for the admin console
"""

from pydantic import Field, field_validator, model_validator
from typing import Optional
import random

from .base import BaseSchema

def _placeholder_image() -> str:
    return f"https://picsum.photos/400/400?random={random.randint(0, 99)}"

class ProductDraft(BaseSchema):
    """Fields an admin may set when creating or editing a product"""

    name: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., gt=0)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    image: str = Field(default_factory=_placeholder_image)
    is_on_sale: bool = False
    sale_price: Optional[float] = Field(None, gt=0)

    @field_validator('name', 'category')
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('must not be blank')
        return v

    @model_validator(mode='after')
    def validate_sale_price(self):
        if self.is_on_sale:
            if self.sale_price is None:
                raise ValueError('Sale price is required when the product is on sale')
            if self.sale_price >= self.price:
                raise ValueError('Sale price must be lower than the regular price')
        return self

class DescriptionRequest(BaseSchema):
    """Input for AI description generation"""

    name: str = Field(..., min_length=1)
    category: str = ""
    features: str = Field(..., min_length=1)

class DescriptionResponse(BaseSchema):
    description: str
