"""
Checkout service
Turns the cart into an order after a simulated payment delay
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Union
import asyncio
import enum
import logging
import uuid

from shopperz.core.exceptions import EmptyCartException, BadRequestException
from shopperz.core.monitoring import checkout_sessions
from shopperz.models import CartItem, Order, OrderStatus, OrderStatusHistory, PLACED_STATUS
from shopperz.schemas.order import CheckoutForm, ShippingDetails
from shopperz.utils.helpers import generate_order_id
from .store import Store

logger = logging.getLogger(__name__)

PLACED_NOTE = "Order placed successfully."
PROCESSING_NOTE = "Payment confirmed. We are preparing your order."

DEFAULT_SESSION_RETENTION_SECONDS = 600.0

class CheckoutStatus(str, enum.Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"

class CheckoutSession:
    """
    One submitted checkout, pending until the order is committed.
    Only the shipping details are kept; card fields are dropped on submit.
    """

    def __init__(self, details: ShippingDetails, items: List[CartItem], total: float):
        self.id = uuid.uuid4().hex
        self.details = details
        self.items = items
        self.total = total
        self.status = CheckoutStatus.PROCESSING
        self.order: Optional[Order] = None
        self.created_at = datetime.now(timezone.utc)
        self.finished_at: Optional[datetime] = None
        self.task: Optional[asyncio.Task] = None

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def finish(self, status: CheckoutStatus) -> None:
        self.status = status
        self.finished_at = datetime.now(timezone.utc)

    async def wait(self) -> None:
        """Wait until the session has committed or been cancelled"""
        if self.task is not None:
            try:
                await asyncio.shield(self.task)
            except asyncio.CancelledError:
                if self.status != CheckoutStatus.CANCELLED:
                    raise

class CheckoutService:
    """
    Service for checkout submission.

    The only step that spans wall-clock time is the payment delay. The cart
    is snapshotted when the form is submitted; if the customer dismisses the
    checkout before the delay ends, nothing is committed. Finished sessions
    are forgotten once ``retention_seconds`` have passed.
    """

    def __init__(
        self,
        store: Store,
        delay_seconds: float = 2.5,
        retention_seconds: float = DEFAULT_SESSION_RETENTION_SECONDS
    ):
        self.store = store
        self.delay_seconds = delay_seconds
        self.retention_seconds = retention_seconds
        self._sessions: Dict[str, CheckoutSession] = {}

    def build_order(
        self,
        customer: Union[CheckoutForm, ShippingDetails],
        items: List[CartItem],
        total: float,
        placed_at: Optional[datetime] = None
    ) -> Order:
        """Create the order record with its item snapshot and initial history"""
        now = placed_at or datetime.now(timezone.utc)
        return Order(
            id=generate_order_id({order.id for order in self.store.get_orders()}),
            customer_name=customer.name,
            email=customer.email,
            address=customer.address,
            city=customer.city,
            items=tuple(item.model_copy(deep=True) for item in items),
            total=total,
            date=now,
            status=OrderStatus.PROCESSING,
            status_history=(
                OrderStatusHistory(status=PLACED_STATUS, date=now, note=PLACED_NOTE),
                OrderStatusHistory(status=OrderStatus.PROCESSING.value, date=now, note=PROCESSING_NOTE),
            ),
        )

    def prune(self, now: Optional[datetime] = None) -> int:
        """Drop finished sessions older than the retention window; returns how many"""
        cutoff = (now or datetime.now(timezone.utc)) - timedelta(seconds=self.retention_seconds)
        expired = [
            session_id for session_id, session in self._sessions.items()
            if session.finished_at is not None and session.finished_at <= cutoff
        ]
        for session_id in expired:
            del self._sessions[session_id]
        return len(expired)

    async def submit(self, form: CheckoutForm) -> CheckoutSession:
        """Snapshot the cart and schedule the order commit"""
        items = self.store.get_cart()
        if not items:
            raise EmptyCartException()

        self.prune()
        session = CheckoutSession(form.shipping_details(), items, self.store.get_total_price())
        self._sessions[session.id] = session
        session.task = asyncio.create_task(self._process(session))
        logger.info(f"Checkout {session.id} submitted for {session.item_count} items")
        return session

    async def _process(self, session: CheckoutSession) -> None:
        try:
            await asyncio.sleep(self.delay_seconds)
        except asyncio.CancelledError:
            session.finish(CheckoutStatus.CANCELLED)
            checkout_sessions.labels(outcome="cancelled").inc()
            logger.info(f"Checkout {session.id} cancelled before commit")
            raise

        # Dismissed while the timer was already due
        if session.status != CheckoutStatus.PROCESSING:
            return

        try:
            order = self.build_order(session.details, session.items, session.total)
            self.store.add_order(order)
            self.store.clear_cart()
        except Exception:
            session.finish(CheckoutStatus.FAILED)
            checkout_sessions.labels(outcome="failed").inc()
            logger.exception(f"Checkout {session.id} failed")
            raise

        session.order = order
        session.finish(CheckoutStatus.COMPLETED)
        checkout_sessions.labels(outcome="completed").inc()
        logger.info(f"Checkout {session.id} placed order {order.id}")

    def get_session(self, session_id: str) -> Optional[CheckoutSession]:
        self.prune()
        return self._sessions.get(session_id)

    def cancel(self, session_id: str) -> bool:
        """
        Dismiss a pending checkout. Returns False if the session is unknown
        or the order was already committed.
        """
        session = self._sessions.get(session_id)
        if session is None or session.status != CheckoutStatus.PROCESSING:
            return False

        session.finish(CheckoutStatus.CANCELLED)
        if session.task is not None:
            session.task.cancel()
        return True

    async def checkout(self, form: CheckoutForm) -> Order:
        """Submit and wait for the order"""
        session = await self.submit(form)
        await session.wait()
        if session.order is None:
            raise BadRequestException("Checkout was cancelled", error_code="CHECKOUT_CANCELLED")
        return session.order

    async def shutdown(self) -> None:
        """Cancel all pending sessions"""
        pending = [s for s in self._sessions.values() if s.status == CheckoutStatus.PROCESSING]
        for session in pending:
            self.cancel(session.id)
        tasks = [s.task for s in pending if s.task is not None]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
