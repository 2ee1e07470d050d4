"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.user_repository import UserRepository
from repositories.vendor_repository import VendorRepository, MealRepository
from repositories.order_repository import (
    OrderRepository,
    PaymentRepository,
    DeliveryRepository,
)
from repositories.subscription_repository import SubscriptionRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "VendorRepository",
    "MealRepository",
    "OrderRepository",
    "PaymentRepository",
    "DeliveryRepository",
    "SubscriptionRepository",
]
