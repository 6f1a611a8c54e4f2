"""
Shopping cart model
A cart line is a product snapshot plus a quantity
"""

from pydantic import Field

from .product import Product

class CartItem(Product):
    """Shopping cart line"""

    quantity: int = Field(1, ge=1)

    @classmethod
    def from_product(cls, product: Product, quantity: int = 1) -> "CartItem":
        fields = {name: getattr(product, name) for name in Product.model_fields}
        return cls(**fields, quantity=quantity)

    @property
    def line_total(self) -> float:
        return self.effective_price * self.quantity
