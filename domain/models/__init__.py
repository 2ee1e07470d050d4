"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    check_database,
    get_db_session,
)
from domain.models.user import User
from domain.models.vendor import Vendor, Meal
from domain.models.order import (
    Order,
    OrderItem,
    Delivery,
    Payment,
    Subscription,
    subscription_meal,
)

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "check_database",
    "get_db_session",
    # User models
    "User",
    # Catalog models
    "Vendor",
    "Meal",
    # Order models
    "Order",
    "OrderItem",
    "Delivery",
    "Payment",
    "Subscription",
    "subscription_meal",
]
