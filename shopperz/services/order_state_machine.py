"""
Order status policy used by the admin console and customer cancellation
"""

from typing import Dict, List, Set
from shopperz.models.order import OrderStatus

# Forward-only lifecycle applied in strict mode
STRICT_TRANSITIONS: Dict[OrderStatus, Set[OrderStatus]] = {
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.OUT_FOR_DELIVERY, OrderStatus.CANCELLED},
    OrderStatus.OUT_FOR_DELIVERY: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal state
    OrderStatus.CANCELLED: set()   # Terminal state
}

class OrderStateMachine:
    """
    Which status an order may move to next.

    Permissive by default: the admin console may move an order to any
    status from any other. Strict mode enforces the forward-only lifecycle.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        if strict:
            self.transitions = STRICT_TRANSITIONS
        else:
            self.transitions = {status: set(OrderStatus) for status in OrderStatus}

    def can_transition(self, current_status: OrderStatus, new_status: OrderStatus) -> bool:
        """
        Args:
            current_status: Status the order has now
            new_status: Status the admin picked

        Returns:
            True if the policy lets the order move there
        """
        return new_status in self.transitions.get(current_status, set())

    def get_valid_transitions(self, current_status: OrderStatus) -> List[OrderStatus]:
        """Statuses reachable from ``current_status``, in lifecycle order"""
        allowed = self.transitions.get(current_status, set())
        return [status for status in OrderStatus if status in allowed]

    def is_terminal_state(self, status: OrderStatus) -> bool:
        return not self.transitions.get(status, set())

    def is_cancellable(self, status: OrderStatus) -> bool:
        """
        Whether the customer may cancel the order themselves.
        Only orders still being processed qualify, whatever the mode.
        """
        return status == OrderStatus.PROCESSING
