"""
Request dependencies
Routes reach the application context through these, never through globals
"""

from fastapi import Depends, Request

from shopperz.core.exceptions import NotFoundException
from shopperz.models import Order, Product
from shopperz.services.assistant import ShoppingAssistant
from shopperz.services.checkout import CheckoutService
from shopperz.services.context import AppContext
from shopperz.services.store import Store

def get_context(request: Request) -> AppContext:
    return request.app.state.context

def get_store(context: AppContext = Depends(get_context)) -> Store:
    return context.store

def get_checkout_service(context: AppContext = Depends(get_context)) -> CheckoutService:
    return context.checkout

def get_assistant(context: AppContext = Depends(get_context)) -> ShoppingAssistant:
    return context.assistant

def get_product_or_404(product_id: str, store: Store = Depends(get_store)) -> Product:
    product = store.get_product(product_id)
    if product is None:
        raise NotFoundException("Product not found")
    return product

def get_order_or_404(order_id: str, store: Store = Depends(get_store)) -> Order:
    order = store.get_order(order_id)
    if order is None:
        raise NotFoundException("Order not found")
    return order
