"""API routes package"""

from . import (
    auth,
    users,
    vendors,
    meals,
    orders,
    payments,
    delivery,
    subscriptions,
    health,
)

__all__ = [
    "auth",
    "users",
    "vendors",
    "meals",
    "orders",
    "payments",
    "delivery",
    "subscriptions",
    "health",
]
