"""
Custom exception classes and error handlers
Provides consistent error responses across the application
"""

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from typing import Any, Dict, Optional

class ShopperzException(HTTPException):
    """Base exception class for ShopperzStop application"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code

class BadRequestException(ShopperzException):
    """400 Bad Request"""

    def __init__(self, detail: str, error_code: str = "BAD_REQUEST"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code
        )

class UnauthorizedException(ShopperzException):
    """401 Unauthorized"""

    def __init__(self, detail: str = "Unauthorized", error_code: str = "UNAUTHORIZED"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code=error_code,
            headers={"WWW-Authenticate": "Bearer"}
        )

class ForbiddenException(ShopperzException):
    """403 Forbidden"""

    def __init__(self, detail: str = "Forbidden", error_code: str = "FORBIDDEN"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code=error_code
        )

class NotFoundException(ShopperzException):
    """404 Not Found"""

    def __init__(self, detail: str = "Not found", error_code: str = "NOT_FOUND"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code=error_code
        )

class ValidationException(ShopperzException):
    """422 Unprocessable Entity"""

    def __init__(self, detail: str, error_code: str = "VALIDATION_ERROR"):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            error_code=error_code
        )

# Business logic exceptions
class EmptyCartException(BadRequestException):
    """Checkout attempted with nothing in the cart"""

    def __init__(self, detail: str = "Your cart is empty"):
        super().__init__(
            detail=detail,
            error_code="EMPTY_CART"
        )

class InvalidStatusTransitionException(BadRequestException):
    """Order status change rejected by the transition policy"""

    def __init__(self, current_status: str, new_status: str):
        super().__init__(
            detail=f"Cannot move order from {current_status} to {new_status}",
            error_code="INVALID_STATUS_TRANSITION"
        )
        self.current_status = current_status
        self.new_status = new_status

class OrderNotCancellableException(BadRequestException):
    """Order cannot be cancelled"""

    def __init__(self, detail: str = "Order cannot be cancelled in current status"):
        super().__init__(
            detail=detail,
            error_code="ORDER_NOT_CANCELLABLE"
        )

class CheckoutNotFoundException(NotFoundException):
    """Unknown or expired checkout session"""

    def __init__(self, session_id: str):
        super().__init__(
            detail=f"Checkout session {session_id} not found",
            error_code="CHECKOUT_NOT_FOUND"
        )

async def shopperz_exception_handler(request: Request, exc: ShopperzException) -> JSONResponse:
    """Render application exceptions with their error code"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error_code": exc.error_code},
        headers=exc.headers,
    )
