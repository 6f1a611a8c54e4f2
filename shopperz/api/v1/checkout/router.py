"""
Checkout API routes
"""

from fastapi import APIRouter, Depends, status

from shopperz.api.dependencies import get_checkout_service
from shopperz.core.exceptions import BadRequestException, CheckoutNotFoundException
from shopperz.schemas.order import CheckoutForm, CheckoutSessionResponse
from shopperz.services.checkout import CheckoutService, CheckoutSession

router = APIRouter()

def _session_response(session: CheckoutSession) -> CheckoutSessionResponse:
    return CheckoutSessionResponse(
        id=session.id,
        status=session.status.value,
        total=session.total,
        item_count=session.item_count,
        created_at=session.created_at,
        order=session.order
    )

@router.post(
    "/",
    response_model=CheckoutSessionResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Submit checkout",
    description="Snapshot the cart and start payment processing; poll the session for the order"
)
async def submit_checkout(
    form: CheckoutForm,
    checkout: CheckoutService = Depends(get_checkout_service)
):
    session = await checkout.submit(form)
    return _session_response(session)

@router.get("/{session_id}", response_model=CheckoutSessionResponse, summary="Get checkout status")
async def get_checkout(
    session_id: str,
    checkout: CheckoutService = Depends(get_checkout_service)
):
    session = checkout.get_session(session_id)
    if session is None:
        raise CheckoutNotFoundException(session_id)
    return _session_response(session)

@router.delete(
    "/{session_id}",
    response_model=CheckoutSessionResponse,
    summary="Dismiss checkout",
    description="Abandon a checkout that is still processing; no order is placed"
)
async def cancel_checkout(
    session_id: str,
    checkout: CheckoutService = Depends(get_checkout_service)
):
    session = checkout.get_session(session_id)
    if session is None:
        raise CheckoutNotFoundException(session_id)
    if not checkout.cancel(session_id):
        raise BadRequestException(
            f"Checkout is already {session.status.value}",
            error_code="CHECKOUT_NOT_PENDING"
        )
    return _session_response(session)
