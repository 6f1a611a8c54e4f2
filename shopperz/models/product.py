"""Product catalog model"""

from pydantic import Field
from typing import List, Optional
import enum

from .base import EntityModel

class Category(str, enum.Enum):
    ELECTRONICS = "Electronics"
    FASHION = "Fashion"
    HOME = "Home & Living"
    SPORTS = "Sports"
    TOYS = "Toys"

DEFAULT_CATEGORIES: List[str] = [category.value for category in Category]

class Product(EntityModel):
    """A catalog product. Categories are referenced by value."""

    id: str
    name: str
    price: float
    description: str = ""
    category: str
    image: str = ""
    rating: float = Field(0, ge=0, le=5)
    reviews: int = Field(0, ge=0)
    is_on_sale: bool = False
    sale_price: Optional[float] = None

    @property
    def effective_price(self) -> float:
        """Sale price when flagged on sale, else base price"""
        if self.is_on_sale and self.sale_price:
            return self.sale_price
        return self.price

INITIAL_PRODUCTS: List[Product] = [
    Product(
        id="1",
        name="Quantum X Wireless Headphones",
        price=299.99,
        description="Experience pure sound with the Quantum X. Featuring adaptive noise cancellation and 40-hour battery life.",
        category=Category.ELECTRONICS.value,
        image="https://picsum.photos/400/400?random=1",
        rating=4.8,
        reviews=124,
    ),
    Product(
        id="2",
        name="Urban Drift Smartwatch",
        price=199.50,
        description="Track your life in style. The Urban Drift monitors health, notifications, and sleep patterns with a sleek design.",
        category=Category.ELECTRONICS.value,
        image="https://picsum.photos/400/400?random=2",
        rating=4.5,
        reviews=89,
    ),
    Product(
        id="3",
        name="NeoComfort Running Shoes",
        price=120.00,
        description="Run on clouds. Engineered mesh upper and foam sole provide unparalleled comfort for long distances.",
        category=Category.FASHION.value,
        image="https://picsum.photos/400/400?random=3",
        rating=4.7,
        reviews=210,
    ),
    Product(
        id="4",
        name="Minimalist Oak Desk",
        price=450.00,
        description="A sturdy, beautiful workspace. Solid oak construction with a matte finish perfectly fits modern home offices.",
        category=Category.HOME.value,
        image="https://picsum.photos/400/400?random=4",
        rating=4.9,
        reviews=56,
    ),
    Product(
        id="5",
        name="Pro-Grip Yoga Mat",
        price=45.00,
        description="Stay grounded. Non-slip surface ensures stability during the most challenging poses.",
        category=Category.SPORTS.value,
        image="https://picsum.photos/400/400?random=5",
        rating=4.6,
        reviews=340,
    ),
]
