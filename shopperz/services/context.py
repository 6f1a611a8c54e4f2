"""
Application context
Everything the views need, built once at startup and injected into routes
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

from shopperz.core.config import Settings
from shopperz.core.security import CredentialVerifier, SecurityUtils, StaticCredentialVerifier
from shopperz.core.storage import KeyValueStorage, create_storage
from .assistant import ShoppingAssistant
from .checkout import CheckoutService
from .notification import NotificationChannel
from .order_state_machine import OrderStateMachine
from .store import Store

logger = logging.getLogger(__name__)

@dataclass
class AppContext:
    settings: Settings
    storage: KeyValueStorage
    notifications: NotificationChannel
    state_machine: OrderStateMachine
    store: Store
    checkout: CheckoutService
    assistant: ShoppingAssistant
    credential_verifier: CredentialVerifier
    tokens: SecurityUtils
    closed: bool = field(default=False, init=False)

    async def close(self) -> None:
        if self.closed:
            return
        await self.checkout.shutdown()
        await self.assistant.close()
        self.storage.close()
        self.closed = True

def build_context(
    settings: Settings,
    storage: Optional[KeyValueStorage] = None,
    assistant: Optional[ShoppingAssistant] = None,
    credential_verifier: Optional[CredentialVerifier] = None,
) -> AppContext:
    """Wire the store and its collaborators; pass overrides to replace any of them"""
    storage = storage or create_storage(settings)
    notifications = NotificationChannel()
    state_machine = OrderStateMachine(strict=settings.ORDER_STRICT_TRANSITIONS)
    store = Store(
        storage,
        notifications,
        transition_policy=state_machine if state_machine.strict else None,
        orders_key=settings.STORAGE_KEY_ORDERS,
        wishlist_key=settings.STORAGE_KEY_WISHLIST,
    )
    logger.info(
        f"Context built with {type(storage).__name__}, "
        f"{'strict' if state_machine.strict else 'permissive'} order transitions"
    )
    return AppContext(
        settings=settings,
        storage=storage,
        notifications=notifications,
        state_machine=state_machine,
        store=store,
        checkout=CheckoutService(
            store,
            delay_seconds=settings.CHECKOUT_DELAY_SECONDS,
            retention_seconds=settings.CHECKOUT_SESSION_RETENTION_SECONDS,
        ),
        assistant=assistant or ShoppingAssistant.from_settings(settings),
        credential_verifier=credential_verifier or StaticCredentialVerifier(
            settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD
        ),
        tokens=SecurityUtils.from_settings(settings),
    )
