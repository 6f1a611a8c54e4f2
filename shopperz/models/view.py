"""Storefront view modes"""

import enum

class ViewMode(str, enum.Enum):
    SHOP = "shop"
    ADMIN = "admin"
    CART = "cart"
    ORDERS = "orders"
    WISHLIST = "wishlist"
