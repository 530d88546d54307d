"""
Order State Machine for order status changes issued by the operator.

The bakery's order lifecycle is a flat, re-assignable enumeration: the operator
may move an order from any status to any other status (including the same one).
The only thing validated is that the requested label maps to a known status.
Every applied transition is written to the audit log.
"""

import logging

from enums.order_status import OrderStatus

logger = logging.getLogger(__name__)


class OrderStateMachine:
    """
    Maps operator status words to OrderStatus and audits transitions.

    Operator vocabulary (case-insensitive):
    - новый            -> PENDING
    - обработка        -> PROCESSING
    - выполнен         -> COMPLETED
    - отменён / отменен -> CANCELLED
    """

    STATUS_ALIASES: dict[str, OrderStatus] = {
        "новый": OrderStatus.PENDING,
        "обработка": OrderStatus.PROCESSING,
        "выполнен": OrderStatus.COMPLETED,
        "отменён": OrderStatus.CANCELLED,
        "отменен": OrderStatus.CANCELLED,
    }

    # Shown to the operator when a label is not recognized; "отменен" is accepted but not advertised
    ADVERTISED_LABELS: list[str] = ["новый", "обработка", "выполнен", "отменён"]

    @classmethod
    def resolve_label(cls, label: str) -> OrderStatus | None:
        """
        Resolve an operator status word to an OrderStatus.

        Returns:
            The matching status, or None when the word is not recognized
        """
        return cls.STATUS_ALIASES.get(label.strip().lower())

    @classmethod
    def is_valid_transition(cls, from_status: OrderStatus, to_status: OrderStatus) -> bool:
        # No transition is forbidden, both ends only have to be real statuses
        return isinstance(from_status, OrderStatus) and isinstance(to_status, OrderStatus)

    @classmethod
    def validate_and_log_transition(cls, order_id: str, from_status: OrderStatus, to_status: OrderStatus,
                                    operator_id: int | None = None) -> bool:
        """
        Validate a status transition and create an audit log entry.

        Returns:
            True if transition is valid and logged, False otherwise
        """
        if not cls.is_valid_transition(from_status, to_status):
            logger.error(f"Invalid status transition for order {order_id}: {from_status} -> {to_status}")
            return False

        performer = f"operator {operator_id}" if operator_id else "admin panel"
        logger.info(f"ORDER_STATUS_TRANSITION: Order {order_id} {from_status.value} -> {to_status.value} by {performer}")
        return True
