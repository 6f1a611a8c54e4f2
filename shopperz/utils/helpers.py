"""
Helper utilities
"""

from typing import Container
import random
import string

TOKEN_LENGTH = 9

def generate_token(
    alphabet: str,
    taken: Container[str] = (),
    length: int = TOKEN_LENGTH
) -> str:
    """
    Generate a short random token not present in ``taken``

    Args:
        alphabet: Characters to draw from
        taken: Identifiers already in use
        length: Token length

    Returns:
        Unused token
    """
    while True:
        token = ''.join(random.choices(alphabet, k=length))
        if token not in taken:
            return token

def generate_order_id(taken: Container[str] = ()) -> str:
    """Upper-case alphanumeric order reference, e.g. K3J9Q0ZXA"""
    return generate_token(string.ascii_uppercase + string.digits, taken)

def generate_product_id(taken: Container[str] = ()) -> str:
    """Lower-case alphanumeric product id"""
    return generate_token(string.ascii_lowercase + string.digits, taken)

def format_price(amount: float, currency_symbol: str = "$") -> str:
    """
    Format amount as currency

    >>> format_price(1299.5)
    '$1,299.50'
    """
    return f"{currency_symbol}{amount:,.2f}"
