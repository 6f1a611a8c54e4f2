"""
Entity model exports
"""

from .base import EntityModel
from .product import Category, DEFAULT_CATEGORIES, INITIAL_PRODUCTS, Product
from .cart import CartItem
from .order import Order, OrderStatus, OrderStatusHistory, PLACED_STATUS
from .view import ViewMode
from .chat import ChatMessage, ChatRole

__all__ = [
    "EntityModel",
    "Category",
    "DEFAULT_CATEGORIES",
    "INITIAL_PRODUCTS",
    "Product",
    "CartItem",
    "Order",
    "OrderStatus",
    "OrderStatusHistory",
    "PLACED_STATUS",
    "ViewMode",
    "ChatMessage",
    "ChatRole",
]
