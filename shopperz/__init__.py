"""ShopperzStop storefront: catalog, cart, checkout, order tracking and admin console"""

__version__ = "1.0.0"
