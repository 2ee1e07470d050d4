"""
Order status state machine.

Which role may move an order from its current status to which next status.
Anything not listed is rejected.
"""

from typing import Dict, FrozenSet

from domain.enums import OrderStatus, UserRole
from app.exceptions import ServiceValidationError

_NONE: FrozenSet[OrderStatus] = frozenset()

ORDER_STATUS_TRANSITIONS: Dict[OrderStatus, Dict[UserRole, FrozenSet[OrderStatus]]] = {
    OrderStatus.PENDING: {
        UserRole.ADMIN: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
        UserRole.VENDOR: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
        UserRole.CUSTOMER: frozenset({OrderStatus.CANCELLED}),
        UserRole.DELIVERY_AGENT: _NONE,
    },
    OrderStatus.CONFIRMED: {
        UserRole.ADMIN: frozenset({OrderStatus.PREPARING, OrderStatus.CANCELLED}),
        UserRole.VENDOR: frozenset({OrderStatus.PREPARING, OrderStatus.CANCELLED}),
        UserRole.CUSTOMER: frozenset({OrderStatus.CANCELLED}),
        UserRole.DELIVERY_AGENT: _NONE,
    },
    OrderStatus.PREPARING: {
        UserRole.ADMIN: frozenset(
            {OrderStatus.READY_FOR_PICKUP, OrderStatus.CANCELLED}
        ),
        UserRole.VENDOR: frozenset({OrderStatus.READY_FOR_PICKUP}),
        UserRole.CUSTOMER: frozenset({OrderStatus.CANCELLED}),
        UserRole.DELIVERY_AGENT: _NONE,
    },
    OrderStatus.READY_FOR_PICKUP: {
        UserRole.ADMIN: frozenset(
            {OrderStatus.OUT_FOR_DELIVERY, OrderStatus.CANCELLED}
        ),
        UserRole.VENDOR: _NONE,
        UserRole.CUSTOMER: _NONE,
        UserRole.DELIVERY_AGENT: frozenset({OrderStatus.OUT_FOR_DELIVERY}),
    },
    OrderStatus.OUT_FOR_DELIVERY: {
        UserRole.ADMIN: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
        UserRole.VENDOR: _NONE,
        UserRole.CUSTOMER: _NONE,
        UserRole.DELIVERY_AGENT: frozenset({OrderStatus.DELIVERED}),
    },
    OrderStatus.DELIVERED: {role: _NONE for role in UserRole},
    OrderStatus.CANCELLED: {role: _NONE for role in UserRole},
}

CANCELLABLE_STATUSES: FrozenSet[OrderStatus] = frozenset(
    {OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PREPARING}
)

TERMINAL_STATUSES: FrozenSet[OrderStatus] = frozenset(
    {OrderStatus.DELIVERED, OrderStatus.CANCELLED}
)


def allowed_transitions(current: OrderStatus, role: UserRole) -> FrozenSet[OrderStatus]:
    """Next statuses `role` may set on an order currently in `current`."""
    return ORDER_STATUS_TRANSITIONS.get(OrderStatus(current), {}).get(
        UserRole(role), _NONE
    )


def can_transition(current: OrderStatus, new: OrderStatus, role: UserRole) -> bool:
    return OrderStatus(new) in allowed_transitions(current, role)


def ensure_transition(current: OrderStatus, new: OrderStatus, role: UserRole) -> None:
    """Raise ServiceValidationError unless the transition is allowed."""
    if not can_transition(current, new, role):
        raise ServiceValidationError(
            f"Invalid status transition from {OrderStatus(current).value} "
            f"to {OrderStatus(new).value} for {UserRole(role).value}",
            code="INVALID_STATUS_TRANSITION",
        )


def is_cancellable(status: OrderStatus) -> bool:
    return OrderStatus(status) in CANCELLABLE_STATUSES


def is_terminal(status: OrderStatus) -> bool:
    return OrderStatus(status) in TERMINAL_STATUSES


def can_access_order(order, user) -> bool:
    """Admins, vendors, the assigned agent and the ordering customer."""
    if user.role in (UserRole.ADMIN, UserRole.VENDOR):
        return True
    if order.delivery_agent_id is not None and order.delivery_agent_id == user.id:
        return True
    return order.customer_id == user.id
