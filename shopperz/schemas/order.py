"""Order and checkout schemas for request/response models."""

from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field, field_validator

from shopperz.models import Order, OrderStatus
from .base import BaseSchema

class ShippingDetails(BaseSchema):
    """Who the order is for and where it goes. Card fields never reach this."""

    name: str
    email: str
    address: str
    city: str
    zip: str

class CheckoutForm(BaseSchema):
    """Customer contact, shipping and (simulated) card details"""

    name: str = Field(..., min_length=1)
    email: EmailStr
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    zip: str = Field(..., min_length=1)
    card_name: str = Field(..., min_length=1)
    card_number: str = Field(..., min_length=12, max_length=23)
    exp_date: str = Field(..., min_length=4)
    cvv: str = Field(..., min_length=3, max_length=4)

    @field_validator('name', 'address', 'city', 'zip', 'card_name')
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('must not be blank')
        return v

    def shipping_details(self) -> ShippingDetails:
        return ShippingDetails(**self.model_dump(include=set(ShippingDetails.model_fields)))

class TrackingDraft(BaseSchema):
    """Tracking details entered by the admin; an empty URL clears it"""

    tracking_id: str = Field(..., min_length=1)
    tracking_url: Optional[str] = None

class OrderStatusUpdate(BaseSchema):
    status: OrderStatus

class CheckoutSessionResponse(BaseSchema):
    id: str
    status: str
    total: float
    item_count: int
    created_at: datetime
    order: Optional[Order] = None
